"""Ranking stages: per-candidate blended scoring and list orchestration."""

from .blended_scoring import build_ranked_candidate, candidate_distance_km
from .core import rank_candidates

__all__ = [
    "build_ranked_candidate",
    "candidate_distance_km",
    "rank_candidates",
]
