# api/main.py
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.auth import router as auth_router
from api.contractors import router as contractors_router
from api.dashboard import router as dashboard_router
from api.errors import setup_exception_handlers
from api.exports import router as exports_router
from api.productivity import router as productivity_router
from api.uploads import router as uploads_router
from tracker import __version__
from tracker.auth.password import PasswordManager
from tracker.auth.rate_limit import LoginRateLimiter
from tracker.common.config import Settings, get_settings
from tracker.common.logging import configure_logging
from tracker.seed import seed_storage
from tracker.storage import create_storage
from tracker.storage.base import ProductivityStorage

logger = logging.getLogger(__name__)

API_DESCRIPTION = """
REST API for contractor productivity tracking.

## Features

### Uploads (admin)
- Monthly productivity CSV and contractor roster CSV
- Row-level error reporting (first 10 errors)

### Contractors
- Roster CRUD; delete archives and keeps history

### Rankings
- Monthly rankings, top performers, under-performers by contractor type

### Dashboard
- Monthly summary, upcoming birthdays, anniversaries and holidays

### Exports (admin)
- Spreadsheet-safe CSV downloads
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create storage, seed it, and establish the admin password."""
    settings: Settings = app.state.settings

    if app.state.storage is None:
        app.state.storage = create_storage(settings)
    if settings.seed_on_startup:
        seed_storage(app.state.storage)
    app.state.password_manager.initialize()

    logger.info(f"Tracker API started ({settings.environment}, {settings.storage_backend} storage)")
    yield
    logger.info("Tracker API stopped")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[ProductivityStorage] = None,
    password_manager: Optional[PasswordManager] = None,
    rate_limiter: Optional[LoginRateLimiter] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Collaborators default to ones built from settings; tests pass their own.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, log_file=settings.log_file)

    app = FastAPI(
        title="Contractor Productivity Tracker API",
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.password_manager = password_manager or PasswordManager.from_settings(settings)
    app.state.rate_limiter = rate_limiter or LoginRateLimiter(
        max_attempts=settings.max_login_attempts,
        window_seconds=settings.login_window_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(contractors_router)
    app.include_router(productivity_router)
    app.include_router(uploads_router)
    app.include_router(dashboard_router)
    app.include_router(exports_router)

    @app.get("/", tags=["Health"])
    def root():
        """API health check endpoint."""
        return {
            "status": "healthy",
            "message": "Contractor Productivity Tracker API is running",
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"])
    def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "version": __version__,
            "storage": settings.storage_backend,
            "endpoints": {
                "contractors": "/api/contractors",
                "rankings": "/api/rankings/{month}",
                "dashboard": "/api/dashboard/summary",
                "docs": "/docs",
                "redoc": "/redoc"
            }
        }

    return app


app = create_app()
