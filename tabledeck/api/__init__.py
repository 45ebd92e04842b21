from tabledeck.api.export import router as export_router
from tabledeck.api.health import router as health_router

__all__ = [
    "export_router",
    "health_router",
]
