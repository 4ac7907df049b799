"""
Scoring model: RankedCandidate and the score helpers used by blended scoring.

Contains:
- RankedCandidate: a candidate with its distance and score annotations
- normalized_rating, distance_factor: score components, both in [0, 1] for valid inputs
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from .candidate import Candidate


def normalized_rating(rating: Optional[float], max_rating: float = 5.0) -> float:
    """Rating on the 0-1 scale; a missing rating counts as 0."""
    return (rating or 0.0) / max_rating


def distance_factor(distance_km: Optional[float], max_distance_km: float = 100.0) -> float:
    """Linear falloff: 1 at zero distance, 0 at or beyond max_distance_km or when unknown."""
    if distance_km is None or distance_km > max_distance_km:
        return 0.0
    return 1.0 - (distance_km / max_distance_km)


class RankedCandidate(BaseModel):
    """A candidate with all its ranking components."""

    candidate: Candidate
    distance_km: Optional[float] = None
    normalized_rating: float
    distance_factor: float
    score: float

    def to_product(self) -> Dict[str, Any]:
        """Wire shape returned to the app: document fields plus score and distanceKm."""
        product = self.candidate.to_document()
        product["score"] = self.score
        product["distanceKm"] = self.distance_km
        return product
