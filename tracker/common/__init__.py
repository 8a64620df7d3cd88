"""
Common utilities shared across the tracker.
Includes settings, logging, and custom exceptions.
"""

from tracker.common.config import Settings, get_settings
from tracker.common.exceptions import (
    TrackerError,
    EmptyFileError,
    HeaderMismatchError,
    NoValidRowsError,
    ContractorNotFoundError,
    DuplicateContractorError,
    StorageError,
    PasswordConfigurationError,
    RateLimitExceededError,
)
from tracker.common.logging import configure_logging, log_section

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Exceptions
    "TrackerError",
    "EmptyFileError",
    "HeaderMismatchError",
    "NoValidRowsError",
    "ContractorNotFoundError",
    "DuplicateContractorError",
    "StorageError",
    "PasswordConfigurationError",
    "RateLimitExceededError",
    # Logging
    "configure_logging",
    "log_section",
]
