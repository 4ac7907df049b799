"""
Per-candidate blended scoring: seller rating and optional proximity.

Builds a RankedCandidate for one candidate given the buyer location and config;
handles the with-location vs locationless weight blend.
"""

from typing import Optional

from ..models.candidate import Candidate
from ..models.config import RankingConfig
from ..models.location import GeoLocation
from ..models.scoring import RankedCandidate, distance_factor, normalized_rating
from ..utils.geo import haversine_km


def candidate_distance_km(
    candidate: Candidate,
    requester_location: Optional[GeoLocation],
    config: RankingConfig,
) -> Optional[float]:
    """Distance from the buyer to the seller, or None if either location is unknown."""
    seller = candidate.seller_location
    if requester_location is None or seller is None:
        return None
    return haversine_km(
        requester_location.latitude,
        requester_location.longitude,
        seller.latitude,
        seller.longitude,
        radius_km=config.earth_radius_km,
    )


def build_ranked_candidate(
    candidate: Candidate,
    requester_location: Optional[GeoLocation],
    config: RankingConfig,
) -> RankedCandidate:
    """
    Compute distance and score for one candidate.

    With buyer location: score = rating_weight * rating + distance_weight * distance_factor.
    Without: score = rating_weight * rating. The distance term is left out entirely,
    so locationless scores top out at rating_weight rather than 1.0.
    """
    distance = candidate_distance_km(candidate, requester_location, config)
    rating_norm = normalized_rating(candidate.seller_average_rating, config.max_rating)
    factor = distance_factor(distance, config.max_distance_km)

    if requester_location is not None:
        score = config.rating_weight * rating_norm + config.distance_weight * factor
    else:
        score = config.rating_weight * rating_norm

    return RankedCandidate(
        candidate=candidate,
        distance_km=distance,
        normalized_rating=rating_norm,
        distance_factor=factor,
        score=score,
    )
