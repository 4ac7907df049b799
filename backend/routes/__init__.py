"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .assistant import router as assistant_router
from .maintenance import router as maintenance_router
from .products import router as products_router
from .root import router as root_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(products_router, prefix="/api/products", tags=["products"])
    app.include_router(assistant_router, prefix="/api/assistant", tags=["assistant"])
    app.include_router(maintenance_router, prefix="/api/maintenance", tags=["maintenance"])
