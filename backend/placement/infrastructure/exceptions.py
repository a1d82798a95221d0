"""
Custom Exceptions for the Placement Tracker

Hierarchical exception classes for proper error handling across layers.
"""

from typing import Optional, Dict, Any, List


class PlacementTrackerError(Exception):
    """Base exception for all Placement Tracker errors."""

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

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class InvalidArgumentError(PlacementTrackerError):
    """Raised when an argument is malformed or out of range."""
    pass


class DatabaseError(PlacementTrackerError):
    """Raised when database operations fail."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details, original_error)


class NotFoundError(DatabaseError):
    """Raised when a referenced candidate, drive or round does not exist."""
    pass


class ConflictError(DatabaseError):
    """Raised when a uniqueness rule is violated (duplicate registration or round)."""
    pass


class EligibilityRejectedError(PlacementTrackerError):
    """Raised when a candidate fails one or more drive eligibility rules."""

    def __init__(
        self,
        reasons: List[str],
        message: str = "Candidate is not eligible for this drive",
    ):
        self.reasons = list(reasons)
        super().__init__(message, {"reasons": self.reasons})


class ConfigurationError(PlacementTrackerError):
    """Raised when configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(message, details, original_error)
