"""
Header index exception hierarchy.

Typed exceptions for header insertion and persistence so callers can tell a
duplicate from an orphan from a corrupt file without parsing messages.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class HeaderDBError(Exception):
    """Base exception for all header index errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether the operation can be retried
    """

    recoverable = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if recoverable is not None:
            self.recoverable = recoverable


# ==================== Validation Errors ====================


class ValidationError(HeaderDBError):
    """Raised when a header cannot be accepted into the index."""
    pass


class DuplicateBlockError(ValidationError):
    """Raised when a header with the same hash is already indexed."""
    pass


class OrphanBlockError(ValidationError):
    """Raised when a header's parent hash is not present in the index."""
    recoverable = True  # Parent may arrive later


class InvalidGenesisError(ValidationError):
    """Raised when the first header does not match the expected genesis hash."""
    pass


class InvalidHeaderError(ValidationError):
    """Raised when serialized header bytes are malformed."""
    pass


# ==================== Storage Errors ====================


class StorageError(HeaderDBError):
    """Raised when header file operations fail."""
    pass


class CorruptFileError(StorageError):
    """Raised when a header file is not a whole number of records."""
    pass


# ==================== Configuration Errors ====================


class ConfigurationError(HeaderDBError):
    """Raised when network parameters or index settings are invalid."""
    pass


# ==================== Utility Functions ====================


def is_recoverable_error(exc: Exception) -> bool:
    """Check if an exception represents a recoverable error.

    Args:
        exc: The exception to check

    Returns:
        True if the error is recoverable and the operation can be retried
    """
    if isinstance(exc, HeaderDBError):
        return exc.recoverable
    return isinstance(exc, (TimeoutError, InterruptedError))


def get_error_context(exc: Exception) -> Dict[str, Any]:
    """Extract error context from an exception for logging.

    Args:
        exc: The exception to extract context from

    Returns:
        Dictionary containing error type, message, and any additional details
    """
    context: Dict[str, Any] = {
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    if isinstance(exc, HeaderDBError):
        context["recoverable"] = exc.recoverable
        if exc.details:
            context["details"] = exc.details

    return context
