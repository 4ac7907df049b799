"""Scheduled maintenance endpoints (called by Cloud Scheduler or cron)."""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from ..models import SweepRequest, SweepResponse
from ..services import SweepError
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_scheduler_token(state: AppState, token: Optional[str]) -> None:
    expected = state.config.scheduler_token
    if not expected:
        return
    if not token or not hmac.compare_digest(token, expected):
        raise HTTPException(status_code=401, detail="Invalid scheduler token")


@router.post("/sweep", response_model=SweepResponse)
def sweep_stale_listings(
    request: Optional[SweepRequest] = None,
    x_scheduler_token: Optional[str] = Header(None, alias="X-Scheduler-Token"),
    state: AppState = Depends(get_state),
):
    """Delete listings older than LISTING_MAX_AGE_DAYS and their images."""
    _check_scheduler_token(state, x_scheduler_token)
    sweeper = state.sweeper
    if sweeper is None:
        raise HTTPException(status_code=503, detail="Listing sweep not configured")
    request = request or SweepRequest()
    logger.info("[maintenance] running stale listing sweep (dry_run=%s)", request.dry_run)
    try:
        result = sweeper.run(dry_run=request.dry_run)
    except SweepError as e:
        logger.error("[maintenance] sweep failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete old products.")
    return SweepResponse(**result.to_dict())
