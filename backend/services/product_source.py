"""
Product Source abstraction.

Supplies ranking candidates: product documents ordered by seller rating (desc),
then createdAt (desc), capped at the candidate limit. The ranking trusts this
order as its tie-break. Implementations: in-memory list, JSON file, Firestore.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol, Union

from google.cloud.firestore import Query

from ..schema import from_snapshot, timestamp_sort_key

logger = logging.getLogger(__name__)

RATING_FIELD = "sellerAverageRating"
CREATED_AT_FIELD = "createdAt"


class ProductSourceError(Exception):
    """Raised when candidates cannot be fetched from the backing store."""


class ProductSource(Protocol):
    """Protocol for candidate product access. Implement for file-based or Firestore."""

    def get_candidates(self, limit: int) -> List[Dict[str, Any]]:
        """
        Return at most limit product dicts (each with "id"), ordered by
        sellerAverageRating desc, then createdAt desc.
        """
        ...


def _rating_sort_key(product: Dict[str, Any]) -> float:
    value = product.get(RATING_FIELD)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


class StaticProductSource:
    """
    Product source backed by an in-memory list of product dicts.

    Mirrors the Firestore query: documents without sellerAverageRating or
    createdAt are left out, the same way order_by drops them.
    Used for local testing and evaluation.
    """

    def __init__(self, products: List[Dict[str, Any]]):
        self._products = [dict(p) for p in products if isinstance(p, dict)]

    def get_candidates(self, limit: int) -> List[Dict[str, Any]]:
        eligible = [
            p for p in self._products
            if p.get(RATING_FIELD) is not None and p.get(CREATED_AT_FIELD) is not None
        ]
        eligible.sort(
            key=lambda p: (_rating_sort_key(p), timestamp_sort_key(p.get(CREATED_AT_FIELD))),
            reverse=True,
        )
        return [dict(p) for p in eligible[:limit]]

    def __len__(self) -> int:
        return len(self._products)


class JsonProductSource(StaticProductSource):
    """
    Product source backed by a JSON array file.
    Used when DATA_SOURCE=json; path comes from PRODUCTS_JSON_PATH.
    """

    def __init__(self, products_path: Union[Path, str]):
        self._products_path = Path(products_path)
        if not self._products_path.exists():
            raise FileNotFoundError(f"Products JSON not found: {self._products_path}")
        with open(self._products_path) as f:
            products = json.load(f)
        if not isinstance(products, list):
            raise ValueError(f"Products JSON must be an array: {self._products_path}")
        super().__init__(products)
        logger.info("[JsonProductSource] loaded %d products from %s", len(self), self._products_path)


class FirestoreProductSource:
    """
    Product source backed by Cloud Firestore (collection "products" by default).

    Query: order_by(sellerAverageRating desc), order_by(createdAt desc), limit.
    Needs the matching composite index in the Firestore project.
    """

    def __init__(self, db: Any, collection: str = "products"):
        self._db = db
        self._collection = collection

    def get_candidates(self, limit: int) -> List[Dict[str, Any]]:
        query = (
            self._db.collection(self._collection)
            .order_by(RATING_FIELD, direction=Query.DESCENDING)
            .order_by(CREATED_AT_FIELD, direction=Query.DESCENDING)
            .limit(limit)
        )
        try:
            out = [from_snapshot(doc) for doc in query.stream()]
        except Exception as e:
            raise ProductSourceError(f"Failed to query {self._collection}: {e}") from e
        logger.info("[FirestoreProductSource] fetched %d candidates", len(out))
        return out
