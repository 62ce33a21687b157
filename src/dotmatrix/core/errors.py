"""Custom exception hierarchy for the dot-matrix display.

Malformed drawing input is mostly dropped silently; these errors cover
configuration, the drawing surface and explicit validation failures.
"""

from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class DotMatrixError(Exception):
    """Base exception for all dot-matrix errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
        severity: Error severity level
    """

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
        }


class ConfigurationError(DotMatrixError):
    """Configuration validation or loading error.

    Raised when:
    - Config values fail validation
    - An unknown draw mode is requested
    """

    pass


class SurfaceError(DotMatrixError):
    """Drawing surface errors.

    Raised when:
    - A fill style cannot be parsed by the surface
    - The surface rejects a drawing operation

    Always logged at CRITICAL level as nothing more can be painted.
    """

    severity = ErrorSeverity.CRITICAL


class ValidationError(DotMatrixError):
    """Input validation errors.

    Raised when:
    - Coordinates fall outside the grid in strict mode
    - Grid dimensions are negative
    - Font data is malformed
    """

    severity = ErrorSeverity.WARNING
