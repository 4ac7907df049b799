#!/usr/bin/env python3
"""
Marketplace backend server: entrypoint.

    python -m backend.server
    uvicorn backend.server:app --reload --port 8000
"""

from .app import create_app
from .config import get_config

app = create_app()

if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
