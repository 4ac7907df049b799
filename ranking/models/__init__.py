"""Data models for the ranking algorithm."""

from .candidate import Candidate, ensure_candidates
from .config import DEFAULT_CONFIG, RankingConfig, resolve_config
from .location import GeoLocation, coerce_location, make_location
from .scoring import RankedCandidate

__all__ = [
    "DEFAULT_CONFIG",
    "Candidate",
    "GeoLocation",
    "RankedCandidate",
    "RankingConfig",
    "coerce_location",
    "ensure_candidates",
    "make_location",
    "resolve_config",
]
