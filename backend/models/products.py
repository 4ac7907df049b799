"""Request/response models for the ranked product feed."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ranking import GeoLocation, make_location


class RankedProductsRequest(BaseModel):
    """
    Buyer coordinates. Typed loosely on purpose: a wrong type falls back to the
    locationless ranking instead of a 422.
    """

    latitude: Optional[Any] = None
    longitude: Optional[Any] = None

    def requester_location(self) -> Optional[GeoLocation]:
        """Location when both values are real, in-range numbers; otherwise None."""
        return make_location(self.latitude, self.longitude)


class RankedProductsResponse(BaseModel):
    # Each product: document fields + score + distanceKm
    products: List[Dict[str, Any]]
