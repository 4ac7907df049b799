#!/usr/bin/env python3
"""
Delete products older than the listing lifetime (default 7 days) and their images.

Meant for a daily cron / Cloud Scheduler job. Deletes at most --limit products per run.

Usage:
  python -m backend.scripts.sweep_stale_listings --credentials path/to/serviceAccountKey.json
  python -m backend.scripts.sweep_stale_listings --bucket my-app.appspot.com --max-age-days 7 --dry-run
"""

import argparse
import os
import sys

from ..config import get_config
from ..logging_setup import setup_logging
from ..services import (
    StaleListingSweeper,
    SweepError,
    create_firestore_client,
    create_storage_bucket,
)


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(description="Delete stale product listings and their images")
    parser.add_argument(
        "--credentials",
        type=str,
        default=str(config.firebase_credentials_path) if config.firebase_credentials_path else None,
        metavar="PATH",
        help="Firebase service account JSON key. Else FIREBASE_CREDENTIALS_PATH / GOOGLE_APPLICATION_CREDENTIALS.",
    )
    parser.add_argument("--project-id", type=str, default=config.firebase_project_id)
    parser.add_argument(
        "--bucket",
        type=str,
        default=config.firebase_storage_bucket,
        help="Storage bucket holding product images (FIREBASE_STORAGE_BUCKET)",
    )
    parser.add_argument("--collection", type=str, default=config.products_collection)
    parser.add_argument("--max-age-days", type=int, default=config.listing_max_age_days)
    parser.add_argument("--limit", type=int, default=config.sweep_batch_limit, help="Max products per run")
    parser.add_argument("--dry-run", action="store_true", help="Report what would be deleted")
    parser.add_argument("--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO"))
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.max_age_days < 1:
        print("--max-age-days must be at least 1")
        return 1
    if not args.bucket:
        print("Provide --bucket or set FIREBASE_STORAGE_BUCKET.")
        return 1

    print("Initializing Firebase Admin...")
    db = create_firestore_client(project_id=args.project_id, credentials_path=args.credentials)
    bucket = create_storage_bucket(args.bucket, project_id=args.project_id, credentials_path=args.credentials)

    sweeper = StaleListingSweeper(
        db,
        bucket,
        collection=args.collection,
        max_age_days=args.max_age_days,
        batch_limit=args.limit,
    )
    try:
        result = sweeper.run(dry_run=args.dry_run)
    except SweepError as e:
        print(f"Sweep failed: {e}")
        return 1

    prefix = "[dry run] " if result.dry_run else ""
    print(
        f"{prefix}cutoff={result.cutoff} products={result.products_deleted} "
        f"images_deleted={result.images_deleted} missing={result.images_missing} failed={result.images_failed}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
