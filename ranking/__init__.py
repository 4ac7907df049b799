"""
Marketplace Product Ranking: weighted rating + proximity

Single entry point for the ranking package:
- models/: RankingConfig, Candidate, GeoLocation, RankedCandidate
- stages/: blended_scoring (per candidate), core (sort and truncate)
- utils/: haversine distance
"""

from typing import Any, Dict, List, Optional

from .models import (
    DEFAULT_CONFIG,
    Candidate,
    GeoLocation,
    RankedCandidate,
    RankingConfig,
    coerce_location,
    ensure_candidates,
    make_location,
    resolve_config,
)
from .stages import build_ranked_candidate, rank_candidates
from .utils import haversine_km


def rank_products(
    products: List[Dict[str, Any]],
    requester_location: Optional[Any] = None,
    config: Optional[RankingConfig] = None,
) -> List[Dict[str, Any]]:
    """
    Rank product documents and return them in wire shape (document fields + score + distanceKm).
    Used by the server; accepts the same inputs as rank_candidates.
    """
    config = resolve_config(config)
    return [r.to_product() for r in rank_candidates(products, requester_location, config)]


__all__ = [
    "DEFAULT_CONFIG",
    "Candidate",
    "GeoLocation",
    "RankedCandidate",
    "RankingConfig",
    "build_ranked_candidate",
    "coerce_location",
    "ensure_candidates",
    "haversine_km",
    "make_location",
    "rank_candidates",
    "rank_products",
    "resolve_config",
]
