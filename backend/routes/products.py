"""Ranked product feed endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ranking import rank_products

from ..models import RankedProductsRequest, RankedProductsResponse
from ..services import ProductSourceError
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ranked", response_model=RankedProductsResponse)
def get_ranked_products(
    request: Optional[RankedProductsRequest] = None,
    state: AppState = Depends(get_state),
):
    """
    Products ranked by seller rating and, when the buyer sends coordinates, proximity.
    Latitude/longitude that are missing or not numbers give the locationless ranking.
    """
    request = request or RankedProductsRequest()
    logger.info("[products] getRankedProducts called: %s", request.model_dump())
    source = state.product_source
    if source is None:
        raise HTTPException(status_code=503, detail="Product source not configured")

    config = state.ranking_config
    location = request.requester_location()
    try:
        candidates = source.get_candidates(config.candidate_limit)
    except ProductSourceError as e:
        logger.error("[products] error getting ranked products: %s", e)
        raise HTTPException(status_code=500, detail="Failed to retrieve product ranking.")
    logger.info("[products] fetched %d initial candidates", len(candidates))
    if location is None:
        logger.info("[products] buyer location not provided, ranking by rating only")

    products = rank_products(candidates, location, config)
    logger.info("[products] returning %d ranked products", len(products))
    return RankedProductsResponse(products=products)
