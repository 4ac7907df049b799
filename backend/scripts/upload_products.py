#!/usr/bin/env python3
"""
Upload products from a JSON file to Cloud Firestore (collection "products").

Converts fields to Firestore types so the ranked feed and the sweep query work:
  - sellerLocation {"latitude", "longitude"} -> GeoPoint
  - createdAt ISO string / epoch -> Timestamp

Requires:
  - GOOGLE_APPLICATION_CREDENTIALS env var or --credentials pointing to a Firebase service account JSON key.

Usage:
  python -m backend.scripts.upload_products --credentials path/to/serviceAccountKey.json
  python -m backend.scripts.upload_products --products-path data/products.json --collection products
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

from ..schema import location_to_geopoint, parse_timestamp
from ..services import create_firestore_client

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

BATCH_SIZE = 500  # Firestore batch write limit


def _load_json(path: Path) -> list:
    with open(path) as f:
        return json.load(f)


def _sanitize_for_firestore(obj):
    """Recursively drop None values from nested dicts."""
    if isinstance(obj, dict):
        return {k: _sanitize_for_firestore(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list):
        return [_sanitize_for_firestore(x) for x in obj]
    return obj


def to_firestore_product(product: Dict[str, Any]) -> Dict[str, Any]:
    """
    Document body for one product (id is the document key, not a field).

    Raises ValueError when createdAt is present but cannot be read.
    """
    data = _sanitize_for_firestore({k: v for k, v in product.items() if k != "id"})
    if "sellerLocation" in data:
        data["sellerLocation"] = location_to_geopoint(data["sellerLocation"])
    if "createdAt" in data:
        created = parse_timestamp(data["createdAt"])
        if created is None:
            raise ValueError(f"unreadable createdAt: {data['createdAt']!r}")
        data["createdAt"] = created
    return data


def upload_products(db, products: list, collection: str = "products") -> int:
    coll = db.collection(collection)
    total = 0
    for i in range(0, len(products), BATCH_SIZE):
        batch = db.batch()
        chunk = products[i : i + BATCH_SIZE]
        for product in chunk:
            doc_id = product.get("id")
            if not doc_id:
                continue
            try:
                data = to_firestore_product(product)
            except ValueError as e:
                print(f"  skipping product {doc_id}: {e}")
                continue
            batch.set(coll.document(str(doc_id)), data)
            total += 1
        batch.commit()
        print(f"  products: committed batch {i // BATCH_SIZE + 1} ({len(chunk)} docs)")
    return total


def main():
    parser = argparse.ArgumentParser(description="Upload products to Firestore")
    parser.add_argument(
        "--products-path",
        type=str,
        default=os.environ.get("PRODUCTS_JSON_PATH", str(_REPO_ROOT / "data" / "products.json")),
        help="Path to a JSON array of products (each with an id)",
    )
    parser.add_argument("--collection", type=str, default=os.environ.get("PRODUCTS_COLLECTION", "products"))
    parser.add_argument(
        "--credentials",
        type=str,
        default=None,
        metavar="PATH",
        help="Path to Firebase service account JSON key. Else uses GOOGLE_APPLICATION_CREDENTIALS.",
    )
    parser.add_argument("--project-id", type=str, default=os.environ.get("FIREBASE_PROJECT_ID"))
    args = parser.parse_args()

    products_path = Path(args.products_path)
    if not products_path.exists():
        print(f"Products file not found: {products_path}")
        sys.exit(1)

    cred_path = args.credentials or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if not cred_path:
        print("Provide --credentials PATH or set GOOGLE_APPLICATION_CREDENTIALS.")
        print("Download key from Firebase Console > Project Settings > Service Accounts > Generate new key.")
        sys.exit(1)
    cred_path = Path(cred_path)
    if not cred_path.is_absolute():
        cred_path = (_REPO_ROOT / cred_path).resolve()
    if not cred_path.exists():
        print(f"Credentials file not found: {cred_path}")
        sys.exit(1)

    print("Loading data...")
    products = _load_json(products_path)
    print(f"  {len(products)} products")

    print("Initializing Firebase Admin...")
    db = create_firestore_client(project_id=args.project_id, credentials_path=cred_path)

    print("Uploading to Firestore...")
    n = upload_products(db, products, collection=args.collection)
    print(f"Done. products={n}")


if __name__ == "__main__":
    main()
