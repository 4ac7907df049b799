"""
Stale listing sweep: delete products older than the listing lifetime, with their images.

Runs daily from a scheduler (HTTP endpoint or the CLI script). Each run removes at
most batch_limit documents in one Firestore write batch; image deletes are best
effort and never stop the run.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from google.api_core.exceptions import NotFound

from ..schema import timestamp_to_iso

logger = logging.getLogger(__name__)

CREATED_AT_FIELD = "createdAt"
IMAGE_PATH_FIELD = "imageStoragePath"
IMAGE_PATHS_FIELD = "imageStoragePaths"


class SweepError(Exception):
    """Raised when the stale listing query or the batch delete fails."""


@dataclass
class SweepResult:
    cutoff: str
    products_deleted: int = 0
    images_deleted: int = 0
    images_missing: int = 0
    images_failed: int = 0
    dry_run: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def image_paths_for(product_id: str, data: dict) -> List[str]:
    """Storage paths referenced by a product (single path field and/or list field)."""
    paths: List[str] = []
    image_path = data.get(IMAGE_PATH_FIELD)
    image_paths = data.get(IMAGE_PATHS_FIELD)
    if image_path and isinstance(image_path, str):
        paths.append(image_path)
    if isinstance(image_paths, list):
        paths.extend(p for p in image_paths if p and isinstance(p, str))
    if not image_path and not image_paths:
        logger.warning("[sweep] no imageStoragePath or imageStoragePaths for product %s", product_id)
    return paths


class StaleListingSweeper:
    """Deletes expired product documents and their stored images."""

    def __init__(
        self,
        db: Any,
        bucket: Any,
        collection: str = "products",
        max_age_days: int = 7,
        batch_limit: int = 500,
    ):
        self._db = db
        self._bucket = bucket
        self._collection = collection
        self.max_age_days = max_age_days
        self.batch_limit = batch_limit

    def cutoff_for(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now - timedelta(days=self.max_age_days)

    def run(self, now: Optional[datetime] = None, dry_run: bool = False) -> SweepResult:
        """
        Delete up to batch_limit products with createdAt before the cutoff.

        Raises:
            SweepError: the query or the batch commit failed
        """
        cutoff = self.cutoff_for(now)
        result = SweepResult(cutoff=timestamp_to_iso(cutoff), dry_run=dry_run)
        logger.info("[sweep] querying for products created before %s", result.cutoff)

        query = (
            self._db.collection(self._collection)
            .where(CREATED_AT_FIELD, "<", cutoff)
            .limit(self.batch_limit)
        )
        try:
            docs = list(query.stream())
        except Exception as e:
            raise SweepError(f"Failed to query old products: {e}") from e

        if not docs:
            logger.info("[sweep] no old products found to delete")
            return result
        logger.info("[sweep] found %d old products to delete", len(docs))

        batch = self._db.batch()
        images = []
        for doc in docs:
            data = doc.to_dict() or {}
            paths = image_paths_for(doc.id, data)
            result.products_deleted += 1
            if dry_run:
                result.images_deleted += len(paths)
                continue
            batch.delete(doc.reference)
            images.extend((doc.id, path) for path in paths)

        if dry_run:
            logger.info("[sweep] dry run: would delete %d products", result.products_deleted)
            return result

        # Images go only after the documents that reference them are gone
        try:
            batch.commit()
        except Exception as e:
            raise SweepError(f"Failed to delete old products: {e}") from e

        for product_id, path in images:
            self._delete_image(product_id, path, result)

        logger.info(
            "[sweep] deleted %d products; images deleted=%d missing=%d failed=%d",
            result.products_deleted, result.images_deleted,
            result.images_missing, result.images_failed,
        )
        return result

    def _delete_image(self, product_id: str, path: str, result: SweepResult) -> None:
        try:
            self._bucket.blob(path).delete()
        except NotFound:
            logger.warning("[sweep] image not found, skipping delete: %s", path)
            result.images_missing += 1
        except Exception as e:
            logger.error("[sweep] failed to delete image %s for product %s: %s", path, product_id, e)
            result.images_failed += 1
        else:
            result.images_deleted += 1
