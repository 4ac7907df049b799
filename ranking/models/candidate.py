"""
Candidate model: typed representation of a product document for the ranking stage.

Only the fields the ranking reads are typed; every other document field is kept
as-is in the pydantic extras and returned unchanged on the ranked output.
Built from store/API dicts via Candidate.model_validate(d).
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .location import GeoLocation, coerce_coordinate, coerce_location

logger = logging.getLogger(__name__)


class Candidate(BaseModel):
    """
    Product eligible for ranking.

    Field names follow the product documents (camelCase aliases); snake_case
    names are accepted as well. Malformed rating or location values never fail
    validation: they degrade to None.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    seller_average_rating: Optional[float] = Field(default=None, alias="sellerAverageRating")
    seller_location: Optional[GeoLocation] = Field(default=None, alias="sellerLocation")
    created_at: Optional[Any] = Field(default=None, alias="createdAt")

    _document: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("seller_average_rating", mode="before")
    @classmethod
    def _coerce_rating(cls, v: Any) -> Optional[float]:
        return coerce_coordinate(v)

    @field_validator("seller_location", mode="before")
    @classmethod
    def _coerce_location(cls, v: Any) -> Optional[GeoLocation]:
        return coerce_location(v)

    @classmethod
    def from_document(cls, document: Mapping) -> "Candidate":
        """Validate a product document, keeping the raw mapping for the ranked output."""
        candidate = cls.model_validate(dict(document))
        candidate._document = dict(document)
        return candidate

    @property
    def passthrough(self) -> Dict[str, Any]:
        """Document fields the ranking does not read, unchanged."""
        return dict(self.model_extra or {})

    @property
    def rating(self) -> float:
        """Seller rating, 0 when absent."""
        return self.seller_average_rating or 0.0

    def to_document(self) -> Dict[str, Any]:
        """
        The product document as it came in. Coerced values are for scoring only;
        malformed or extra-keyed fields go back to the caller untouched.
        """
        if self._document is not None:
            return dict(self._document)
        return self.model_dump(by_alias=True, exclude_unset=True)


def ensure_candidates(candidates: List[Union[Dict[str, Any], "Candidate"]]) -> List["Candidate"]:
    """Convert list of dicts or Candidates to Candidate models; skip items that are neither."""
    out: List[Candidate] = []
    for c in candidates or []:
        if isinstance(c, Candidate):
            out.append(c)
        elif isinstance(c, Mapping):
            out.append(Candidate.from_document(c))
        else:
            logger.warning("[ranking] skipping candidate of type %s", type(c).__name__)
    return out
