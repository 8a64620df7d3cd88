# tracker/auth/__init__.py
"""
Auth - admin password, login rate limiting and session tokens.
"""

from tracker.auth.password import MIN_PASSWORD_LENGTH, PasswordManager
from tracker.auth.rate_limit import AttemptStore, LoginRateLimiter, MemoryAttemptStore
from tracker.auth.tokens import create_access_token, decode_access_token, is_admin_token

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "PasswordManager",
    "AttemptStore",
    "LoginRateLimiter",
    "MemoryAttemptStore",
    "create_access_token",
    "decode_access_token",
    "is_admin_token",
]
