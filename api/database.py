# api/database.py
"""Storage and settings dependencies for FastAPI."""

from datetime import date

from fastapi import Request

from tracker.auth.password import PasswordManager
from tracker.auth.rate_limit import LoginRateLimiter
from tracker.common.config import Settings
from tracker.storage.base import ProductivityStorage


def get_storage(request: Request) -> ProductivityStorage:
    """
    FastAPI dependency that provides the storage backend.
    The backend is created once at startup and shared by every request.
    """
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_manager(request: Request) -> PasswordManager:
    return request.app.state.password_manager


def get_rate_limiter(request: Request) -> LoginRateLimiter:
    return request.app.state.rate_limiter


def get_today() -> date:
    """Today's date for the "coming up" sections; tests override it."""
    return date.today()
