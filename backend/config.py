"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ranking import RankingConfig

# Single .env at the project root for the API server and the scripts
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    # API Keys
    gemini_api_key: Optional[str] = None

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data source: "json" | "firebase" | None (no product source; ranking endpoint answers 503)
    data_source: Optional[str] = None
    # When data_source=json: path to a products JSON array
    products_json_path: Optional[Path] = None
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None
    firebase_storage_bucket: Optional[str] = None
    products_collection: str = "products"

    # Shared secret the scheduler sends as X-Scheduler-Token on /api/maintenance/sweep
    scheduler_token: Optional[str] = None
    # Listings older than this are removed by the sweep
    listing_max_age_days: int = 7
    sweep_batch_limit: int = 500

    # Optional JSON file merged over the default RankingConfig
    ranking_config_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or None
        if data_source and data_source not in ("json", "firebase"):
            data_source = None

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            data_source=data_source,
            products_json_path=_path_env("PRODUCTS_JSON_PATH", base_dir / "data" / "products.json"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            firebase_storage_bucket=os.getenv("FIREBASE_STORAGE_BUCKET") or None,
            products_collection=os.getenv("PRODUCTS_COLLECTION", "products"),
            scheduler_token=os.getenv("SCHEDULER_TOKEN") or None,
            listing_max_age_days=int(os.getenv("LISTING_MAX_AGE_DAYS", "7")),
            sweep_batch_limit=int(os.getenv("SWEEP_BATCH_LIMIT", "500")),
            ranking_config_path=_path_env("RANKING_CONFIG_PATH"),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "json":
            if not self.products_json_path or not self.products_json_path.exists():
                errors.append(f"Products JSON not found: {self.products_json_path}")

        if self.data_source == "firebase" and not self.firebase_credentials_path:
            errors.append("DATA_SOURCE=firebase requires FIREBASE_CREDENTIALS_PATH")

        if self.ranking_config_path and not self.ranking_config_path.exists():
            errors.append(f"Ranking config not found: {self.ranking_config_path}")

        if self.listing_max_age_days < 1:
            errors.append("LISTING_MAX_AGE_DAYS must be at least 1")

        return len(errors) == 0, errors

    def load_ranking_config(self) -> RankingConfig:
        """RankingConfig from ranking_config_path, or the defaults."""
        if not self.ranking_config_path:
            return RankingConfig()
        with open(self.ranking_config_path) as f:
            return RankingConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
