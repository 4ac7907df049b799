"""
Logging for the API server and the maintenance scripts.

Application loggers (backend.*, ranking.*) follow LOG_LEVEL; the Firebase,
HTTP and LiteLLM clients are held at WARNING or above so each request does not
produce a line per upstream call.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

APP_LOGGERS = ("backend", "ranking")
CLIENT_LOGGERS = ("LiteLLM", "httpx", "google.auth", "google.api_core", "urllib3")

_HANDLER_NAME = "marketplace-console"


def parse_level(log_level: Optional[str]) -> int:
    """logging level for a name like "info" or "DEBUG"; None means INFO."""
    name = (log_level or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {log_level}")
    return level


def setup_logging(log_level: Optional[str] = "INFO") -> int:
    """
    Attach one console handler to the root logger and apply the level.

    Safe to call again (app reloads, scripts that build the app): the handler is
    found by name and only its level is updated. Returns the numeric level.
    """
    level = parse_level(log_level)
    root = logging.getLogger()

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    handler.setLevel(level)
    root.setLevel(level)

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level
