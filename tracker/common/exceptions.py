"""
Custom exceptions for the productivity tracker.
Whole-file rejections, batch failures and storage problems each get a type;
per-row problems are collected as strings and never raised.
"""

from typing import Optional, Dict, Any, List


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmptyFileError(TrackerError):
    """Raised when an upload has no header or no data rows."""

    def __init__(self, message: str = "CSV file must contain headers and at least one data row", **kwargs):
        super().__init__(message, **kwargs)


class HeaderMismatchError(TrackerError):
    """Raised when the header row does not match the expected column set."""

    def __init__(
        self,
        message: str,
        expected: List[str],
        received: List[str],
        suggested_mode: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["expected"] = expected
        details["received"] = received
        if suggested_mode:
            details["suggested_mode"] = suggested_mode
        super().__init__(message, details=details, **kwargs)
        self.expected = expected
        self.received = received
        self.suggested_mode = suggested_mode


class NoValidRowsError(TrackerError):
    """Raised when every data row of an upload was rejected."""

    def __init__(self, message: str, errors: List[str], **kwargs):
        details = kwargs.pop("details", {})
        details["error_count"] = len(errors)
        super().__init__(message, details=details, **kwargs)
        self.errors = errors


class ContractorNotFoundError(TrackerError):
    """Raised when an operation targets a contractor id that does not exist."""

    def __init__(self, contractor_id: int, **kwargs):
        super().__init__(
            "Contractor not found",
            details={"contractor_id": contractor_id},
            **kwargs
        )
        self.contractor_id = contractor_id


class DuplicateContractorError(TrackerError):
    """Raised when creating a contractor with an id that is already taken."""

    def __init__(self, contractor_id: int, **kwargs):
        super().__init__(
            f"Contractor with id {contractor_id} already exists",
            details={"contractor_id": contractor_id},
            **kwargs
        )
        self.contractor_id = contractor_id


class StorageError(TrackerError):
    """Raised when the persistence layer fails."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details, **kwargs)


class PasswordConfigurationError(TrackerError):
    """Raised when the admin password cannot be initialized safely."""


class RateLimitExceededError(TrackerError):
    """Raised when a client exceeds the allowed login attempts."""

    def __init__(self, key: str, retry_after: int, **kwargs):
        super().__init__(
            "Too many login attempts. Please try again in 15 minutes.",
            details={"key": key, "retry_after": retry_after},
            **kwargs
        )
        self.key = key
        self.retry_after = retry_after
