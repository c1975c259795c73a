"""API routers."""

from .pages import router as pages_router
from .settings import router as settings_router

__all__ = [
    "pages_router",
    "settings_router",
]
