"""
Product schema adapter: convert Firestore product documents → plain JSON-ready dicts.

Firestore returns SDK types the ranking and the HTTP response cannot use directly:
- GeoPoint (sellerLocation) → {"latitude": float, "longitude": float}
- DocumentReference → document path string
- Timestamp (DatetimeWithNanoseconds) → ISO-8601 string in UTC

Output dict is valid for ranking.models.Candidate.model_validate().
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from google.cloud.firestore import DocumentReference, GeoPoint


def to_plain_value(value: Any) -> Any:
    """Recursively replace Firestore SDK types with JSON-friendly values."""
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, DocumentReference):
        return value.path
    if isinstance(value, datetime):
        return timestamp_to_iso(value)
    if isinstance(value, dict):
        return {k: to_plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain_value(v) for v in value]
    return value


def timestamp_to_iso(dt: datetime) -> str:
    """ISO string in UTC; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Aware UTC datetime for a createdAt value (ISO string, epoch number, datetime,
    or serialized Timestamp dict); None when it cannot be read.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # Millisecond epochs come from JS clients
        seconds = float(value) / 1000.0 if value > 1e11 else float(value)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, dict):
        seconds = value.get("_seconds", value.get("seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return datetime.fromtimestamp(float(seconds), tz=timezone.utc)
        return None
    if isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return None


def timestamp_sort_key(value: Any) -> float:
    """Seconds since epoch for a createdAt value. Unparseable values sort as oldest."""
    dt = parse_timestamp(value)
    return dt.timestamp() if dt is not None else 0.0


def to_product_document(doc_id: Optional[str], data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convert one Firestore product document to a plain dict with "id" set to the document id.

    Returns:
        Dict valid for Candidate.model_validate(). See ranking.models.candidate.Candidate.
    """
    out: Dict[str, Any] = {"id": doc_id or ""}
    for key, value in (data or {}).items():
        if key == "id":
            continue
        out[key] = to_plain_value(value)
    return out


def from_snapshot(doc: Any) -> Dict[str, Any]:
    """to_product_document for a DocumentSnapshot."""
    return to_product_document(doc.id, doc.to_dict())


def location_to_geopoint(value: Union[Dict[str, Any], Any]) -> Any:
    """Inverse direction for uploads: {"latitude", "longitude"} mapping → GeoPoint; other values unchanged."""
    if isinstance(value, dict) and "latitude" in value and "longitude" in value:
        return GeoPoint(float(value["latitude"]), float(value["longitude"]))
    return value
