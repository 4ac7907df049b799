"""
Main ranking orchestration: blended scoring, stable sort, truncation.

Candidates arrive pre-ordered by the product store (seller rating desc, then
createdAt desc); that order is the tie-break for equal scores.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..models.candidate import Candidate, ensure_candidates
from ..models.config import DEFAULT_CONFIG, RankingConfig, resolve_config
from ..models.location import coerce_location
from ..models.scoring import RankedCandidate
from .blended_scoring import build_ranked_candidate

logger = logging.getLogger(__name__)


def rank_candidates(
    candidates: List[Union[Dict[str, Any], Candidate]],
    requester_location: Optional[Any] = None,
    config: Optional[RankingConfig] = DEFAULT_CONFIG,
) -> List[RankedCandidate]:
    """
    Rank candidates with blended scoring: w1*rating + w2*proximity.

    requester_location may be a GeoLocation, a (lat, lon) pair, a mapping, or None.
    A malformed location is treated as absent. Returns at most config.output_limit
    items sorted by score descending; equal scores keep their input order.
    """
    config = resolve_config(config)
    location = coerce_location(requester_location)
    if requester_location is not None and location is None:
        logger.info("[ranking] requester location unusable, ranking without distance")

    # 1) Score each candidate
    typed = ensure_candidates(candidates)
    ranked = [build_ranked_candidate(c, location, config) for c in typed]

    # 2) Stable sort by score (reverse=True keeps equal items in input order)
    ranked.sort(key=lambda r: r.score, reverse=True)

    # 3) Truncate
    top = ranked[: config.output_limit]
    logger.debug(
        "[ranking] ranked %d candidates (location=%s), returning %d",
        len(ranked), location is not None, len(top),
    )
    return top
