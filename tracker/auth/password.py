# tracker/auth/password.py
"""
Admin password manager.

There is a single shared admin password. Its salted hash lives in a small
JSON file next to the data, together with where it came from ("env" when
set from ADMIN_PASSWORD, "dev" for the development default).
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from passlib.context import CryptContext

from tracker.common.config import Settings
from tracker.common.exceptions import PasswordConfigurationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
DEV_DEFAULT_PASSWORD = "admin123"

ORIGIN_ENV = "env"
ORIGIN_DEV = "dev"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordManager:
    """Loads, verifies and rotates the admin password."""

    def __init__(
        self,
        password_file: str,
        environment: str = "development",
        env_password: Optional[str] = None
    ):
        self.password_file = Path(password_file)
        self.environment = environment
        self.env_password = env_password
        self._stored: Optional[Dict[str, Any]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordManager":
        return cls(
            password_file=settings.password_file,
            environment=settings.environment,
            env_password=settings.admin_password,
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def origin(self) -> Optional[str]:
        return self._stored["origin"] if self._stored else None

    # INITIALIZATION

    def initialize(self) -> None:
        """
        Establish the admin password at startup.

        Raises:
            PasswordConfigurationError: When production would run with a
                development password, or ADMIN_PASSWORD is missing/too short
        """
        if self._load_from_file():
            if self.is_production and self.origin == ORIGIN_DEV:
                raise PasswordConfigurationError(
                    "Development password file detected in production. Please set "
                    "ADMIN_PASSWORD environment variable to initialize a secure production password."
                )
            if self.is_production and self.env_password:
                logger.info("Production environment with ADMIN_PASSWORD set; reinitializing from environment")
                self._store_env_password(self.env_password)
                return
            logger.info("Admin password loaded from secure storage")
            return

        if not self.env_password:
            if self.is_production:
                raise PasswordConfigurationError(
                    "ADMIN_PASSWORD environment variable is required in production. "
                    "Please set a secure password."
                )
            logger.warning(
                "ADMIN_PASSWORD not set. Using default password for development only. "
                "Set ADMIN_PASSWORD before deploying to production."
            )
            self._store(DEV_DEFAULT_PASSWORD, ORIGIN_DEV)
            return

        self._store_env_password(self.env_password)

    def _store_env_password(self, password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PasswordConfigurationError(
                f"ADMIN_PASSWORD must be at least {MIN_PASSWORD_LENGTH} characters long for security."
            )
        logger.info("Initializing admin password from environment variable")
        self._store(password, ORIGIN_ENV)

    # VERIFY / CHANGE

    def verify_password(self, password: Optional[str]) -> bool:
        if self._stored is None:
            self.initialize()
        if not password or self._stored is None:
            return False
        return pwd_context.verify(password, self._stored["hash"])

    def change_password(self, current_password: str, new_password: str) -> bool:
        """
        Replace the password after checking the current one.

        Returns:
            False when the current password is wrong

        Raises:
            ValueError: When the new password is too short
        """
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long for security"
            )
        if not self.verify_password(current_password):
            return False

        self._store(new_password, self.origin or ORIGIN_ENV)
        logger.info("Admin password changed successfully")
        return True

    # FILE HANDLING

    def _store(self, password: str, origin: str) -> None:
        self._stored = {
            "hash": pwd_context.hash(password),
            "origin": origin,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "environment": self.environment,
        }
        self._save_to_file()

    def _load_from_file(self) -> bool:
        if not self.password_file.exists():
            return False
        try:
            self._stored = json.loads(self.password_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load password file {self.password_file}: {e}")
            self._stored = None
            return False
        return True

    def _save_to_file(self) -> None:
        self.password_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.password_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self._stored, f, indent=2)
