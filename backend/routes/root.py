"""Root and health endpoints."""

from fastapi import APIRouter, Depends

from ..state import AppState, get_state

API_TITLE = "Marketplace Backend API"
API_VERSION = "1.0.0"

router = APIRouter()


@router.get("/")
def root(state: AppState = Depends(get_state)):
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "status": "ready" if state.product_source is not None else "not_configured",
        "endpoints": {
            "products": ["/api/products/ranked"],
            "assistant": ["/api/assistant/ask"],
            "maintenance": ["/api/maintenance/sweep"],
        },
    }


@router.get("/api/health")
def health(state: AppState = Depends(get_state)):
    config = state.ranking_config
    return {
        "status": "healthy",
        "product_source": state.product_source_name,
        "assistant": {"available": state.assistant is not None},
        "sweep": {"available": state.sweeper is not None},
        "ranking": {
            "rating_weight": config.rating_weight,
            "distance_weight": config.distance_weight,
            "max_distance_km": config.max_distance_km,
            "output_limit": config.output_limit,
        },
    }
