"""
Marketplace backend: ranked product feed, shopping assistant, listing maintenance.

Usage: uvicorn backend.server:app --reload --port 8000
"""

from .app import create_app
from .config import ServerConfig, get_config, reload_config
from .state import AppState, build_state

__all__ = [
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "AppState",
    "build_state",
]
