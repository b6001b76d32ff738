"""
Custom exceptions for the wellness scoring engine.

The engine is a total function over valid inputs, so the only errors it
raises are caller errors: malformed or out-of-range records. Each exception
carries:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    RATING_OUT_OF_RANGE = "RATING_OUT_OF_RANGE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


class WellnessEngineError(Exception):
    """
    Base exception for all wellness engine errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(WellnessEngineError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class InvalidInputError(ValidationError):
    """Raised when an input record has the wrong shape or type."""

    def __init__(
        self,
        message: str,
        record: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if record:
            details["record"] = record
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details)
        self.code = ErrorCode.INVALID_INPUT

    @classmethod
    def from_pydantic(cls, record: str, exc: Any) -> "InvalidInputError":
        """Build from a pydantic ValidationError raised while parsing ``record``."""
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return cls(
            message=f"Invalid {record} record",
            record=record,
            errors=errors,
        )


class RatingOutOfRangeError(ValidationError):
    """Raised when a rating falls outside its declared scale.

    Ratings are rejected rather than clamped; clamping would silently bias
    the averages callers compute from them.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        minimum: float,
        maximum: float,
    ) -> None:
        super().__init__(
            message=f"{field} must be between {minimum:g} and {maximum:g}, got {value}",
            field=field,
            details={"value": value, "min": minimum, "max": maximum},
        )
        self.code = ErrorCode.RATING_OUT_OF_RANGE


# ============================================================================
# Data Errors (422)
# ============================================================================

class InsufficientDataError(WellnessEngineError):
    """Raised when an operation needs a score but the day had no usable data."""

    def __init__(
        self,
        message: str = "No usable health or work metrics for this day",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INSUFFICIENT_DATA,
            status_code=422,
            details=details,
        )
