# api/auth.py
"""Admin login, logout, status and password change."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.database import get_app_settings, get_password_manager, get_rate_limiter
from api.schemas import (
    AuthStatusResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from tracker.auth.password import PasswordManager
from tracker.auth.rate_limit import LoginRateLimiter
from tracker.auth.tokens import create_access_token, is_admin_token
from tracker.common.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

security = HTTPBearer(auto_error=False)


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def is_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings)
) -> bool:
    """Whether the request carries a valid admin token (never raises)."""
    return is_admin_token(settings, credentials.credentials if credentials else None)


def require_admin(admin: bool = Depends(is_admin)) -> None:
    """Guard for write and export endpoints."""
    if not admin:
        raise HTTPException(status_code=401, detail="Admin access required")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    passwords: PasswordManager = Depends(get_password_manager),
    limiter: LoginRateLimiter = Depends(get_rate_limiter)
):
    """
    Exchange the admin password for a bearer token.

    - 429 after too many attempts from one client within the window
    - 401 on a wrong password
    """
    key = client_key(request)
    limiter.hit(key)

    if not passwords.verify_password(body.password):
        logger.warning(f"Failed login attempt from {key}")
        raise HTTPException(status_code=401, detail="Invalid password")

    limiter.reset(key)
    logger.info(f"Admin login from {key}")
    return LoginResponse(success=True, message="Login successful", token=create_access_token(settings))


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logout successful")


@router.get("/status", response_model=AuthStatusResponse)
def auth_status(admin: bool = Depends(is_admin)):
    return AuthStatusResponse(is_admin=admin)


@router.post("/change-password", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def change_password(
    body: ChangePasswordRequest,
    passwords: PasswordManager = Depends(get_password_manager)
):
    """
    Change the admin password.

    - 400 when the new password is shorter than 8 characters
    - 401 when the current password is wrong
    """
    try:
        changed = passwords.change_password(body.current_password, body.new_password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not changed:
        raise HTTPException(status_code=401, detail="Current password is incorrect")
    return MessageResponse(message="Password changed successfully. The new password is now active.")
