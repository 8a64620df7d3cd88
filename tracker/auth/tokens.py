# tracker/auth/tokens.py
"""Admin session tokens (signed JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from tracker.common.config import Settings

ADMIN_SUBJECT = "admin"
ADMIN_ROLE = "admin"


def create_access_token(settings: Settings, data: Optional[Dict[str, Any]] = None) -> str:
    payload = {"sub": ADMIN_SUBJECT, "role": ADMIN_ROLE}
    payload.update(data or {})
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a token; None when it is invalid or expired."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def is_admin_token(settings: Settings, token: Optional[str]) -> bool:
    if not token:
        return False
    payload = decode_access_token(settings, token)
    return bool(payload) and payload.get("role") == ADMIN_ROLE
