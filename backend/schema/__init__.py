"""Schema adapters for converting between data formats."""

from .product_adapter import (
    from_snapshot,
    location_to_geopoint,
    parse_timestamp,
    timestamp_sort_key,
    timestamp_to_iso,
    to_plain_value,
    to_product_document,
)

__all__ = [
    "from_snapshot",
    "location_to_geopoint",
    "parse_timestamp",
    "timestamp_sort_key",
    "timestamp_to_iso",
    "to_plain_value",
    "to_product_document",
]
