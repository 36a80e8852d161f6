"""Routers package - API endpoint routers."""

from .health import router as health_router
from .scores import router as scores_router
from .sessions import router as sessions_router
from .reports import router as reports_router

__all__ = [
    "health_router",
    "scores_router",
    "sessions_router",
    "reports_router",
]
