"""FastAPI application for the settings-pages REST API."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..builder import SettingsPages
from ..config import Settings, get_settings
from ..demo import register_demo_pages
from ..errors import SettingsPagesError
from ..logging_config import configure_logging
from ..storage import SqlBackend
from .routers import pages_router, settings_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings

    # Tests configure logging through pytest
    if "pytest" not in sys.modules:
        log_file = configure_logging(
            settings.log_dir,
            settings.log_max_bytes,
            settings.log_retention_days,
            settings.debug,
            settings.uvicorn_log_level,
        )
        logger.info(f"Logging to {log_file}")

    pages: SettingsPages = app.state.settings_pages
    logger.info(
        f"Serving {len(pages.pages)} settings pages under {settings.api_prefix or '/'}"
    )

    yield

    backend = pages.store.backend
    if isinstance(backend, SqlBackend):
        try:
            backend.dispose()
        except Exception:
            logger.exception("Error while disposing settings database engine")


async def handle_settings_error(request: Request, exc: SettingsPagesError) -> JSONResponse:
    """Translate core errors into JSON error responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(
    settings_pages: Optional[SettingsPages] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        settings_pages: Registered pages and storage. Built from
            configuration when omitted.
        settings: Server configuration. Loaded from the environment when
            omitted.

    Returns:
        The configured FastAPI app.
    """
    settings = settings or get_settings()
    if settings_pages is None:
        settings_pages = SettingsPages.from_config(settings)
        if settings.load_demo_pages:
            register_demo_pages(settings_pages)

    app = FastAPI(
        title="Settings Pages",
        description="Declarative settings pages with a JSON read/write API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.settings_pages = settings_pages

    app.add_exception_handler(SettingsPagesError, handle_settings_error)

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(settings_router, prefix=settings.api_prefix)
    app.include_router(pages_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "pages": len(settings_pages.pages)}

    return app
