"""Application state: config, ranking parameters, and the backend collaborators."""

import logging
from typing import Any, Optional

from fastapi import Request

from ranking import RankingConfig

from .config import ServerConfig
from .services import (
    FirestoreProductSource,
    GeminiAssistant,
    JsonProductSource,
    ProductSource,
    StaleListingSweeper,
    create_firestore_client,
    create_storage_bucket,
)

logger = logging.getLogger(__name__)


class AppState:
    """
    Everything a request handler needs, built once and attached to app.state.

    Collaborators are optional: a missing one makes its endpoint answer 503.
    """

    def __init__(
        self,
        config: ServerConfig,
        ranking_config: Optional[RankingConfig] = None,
        product_source: Optional[ProductSource] = None,
        assistant: Optional[GeminiAssistant] = None,
        sweeper: Optional[StaleListingSweeper] = None,
    ):
        self.config = config
        self.ranking_config = ranking_config or RankingConfig()
        self.product_source = product_source
        self.assistant = assistant
        self.sweeper = sweeper

    @property
    def product_source_name(self) -> Optional[str]:
        return type(self.product_source).__name__ if self.product_source is not None else None


def build_state(config: ServerConfig) -> AppState:
    """Create the Firestore/storage/LLM handles the config asks for."""
    ranking_config = config.load_ranking_config()
    product_source: Optional[ProductSource] = None
    sweeper: Optional[StaleListingSweeper] = None
    assistant: Optional[GeminiAssistant] = None

    db: Any = None
    if config.data_source == "firebase":
        try:
            db = create_firestore_client(
                project_id=config.firebase_project_id,
                credentials_path=config.firebase_credentials_path,
            )
            product_source = FirestoreProductSource(db, collection=config.products_collection)
        except Exception as e:
            logger.warning("[startup] Firestore unavailable, ranking disabled: %s", e)
            db = None
    elif config.data_source == "json" and config.products_json_path:
        try:
            product_source = JsonProductSource(config.products_json_path)
        except (OSError, ValueError) as e:
            logger.warning("[startup] Could not load products JSON: %s", e)
    logger.info("[startup] Product source: %s", type(product_source).__name__ if product_source is not None else None)

    if db is not None:
        try:
            bucket = create_storage_bucket(
                config.firebase_storage_bucket,
                project_id=config.firebase_project_id,
                credentials_path=config.firebase_credentials_path,
            )
            sweeper = StaleListingSweeper(
                db,
                bucket,
                collection=config.products_collection,
                max_age_days=config.listing_max_age_days,
                batch_limit=config.sweep_batch_limit,
            )
        except Exception as e:
            logger.warning("[startup] Storage bucket unavailable, sweep disabled: %s", e)

    if config.gemini_api_key:
        assistant = GeminiAssistant(api_key=config.gemini_api_key)

    return AppState(
        config,
        ranking_config=ranking_config,
        product_source=product_source,
        assistant=assistant,
        sweeper=sweeper,
    )


def get_state(request: Request) -> AppState:
    """FastAPI dependency: the AppState of the app serving this request."""
    return request.app.state.app_state
