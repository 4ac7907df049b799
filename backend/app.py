"""
Marketplace backend: FastAPI app factory.

Use: uvicorn backend.app:app
Or:  from backend import create_app
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .logging_setup import setup_logging
from .routes import register_routes
from .routes.root import API_TITLE, API_VERSION
from .state import AppState, build_state

logger = logging.getLogger(__name__)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """
    Build FastAPI app with CORS and routes.

    state: prebuilt AppState (tests pass fakes); built from the environment when None.
    """
    if state is None:
        config = get_config()
        setup_logging(config.log_level)
        _, errors = config.validate()
        for err in errors:
            logger.warning("[startup] config: %s", err)
        state = build_state(config)

    app = FastAPI(
        title=API_TITLE,
        description="Ranked product feed, shopping assistant, and listing maintenance",
        version=API_VERSION,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.app_state = state
    register_routes(app)
    logger.info(
        "[startup] %s ready (product_source=%s, assistant=%s, sweep=%s)",
        API_TITLE,
        state.product_source_name,
        state.assistant is not None,
        state.sweeper is not None,
    )
    return app
