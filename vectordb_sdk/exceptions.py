"""Client exception hierarchy.

All custom exceptions inherit from VectorDBError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "VDB-1000"
    CONFIGURATION_ERROR = "VDB-1001"

    # Caller construction errors (2xxx)
    VALIDATION_ERROR = "VDB-2000"
    INVALID_FILTER = "VDB-2001"
    CONFLICTING_ANCHORS = "VDB-2002"
    UNSUPPORTED_FIELD_TYPE = "VDB-2003"
    UNSUPPORTED_DATABASE_KIND = "VDB-2004"

    # Transport and server errors (3xxx)
    TRANSPORT_ERROR = "VDB-3000"
    TIMEOUT = "VDB-3001"
    SERVER_ERROR = "VDB-3002"
    NOT_FOUND = "VDB-3003"
    INVALID_RESPONSE = "VDB-3004"


class VectorDBError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logs."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(VectorDBError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(VectorDBError):
    """Caller construction error, detected before any request is sent."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class FilterError(ValidationError):
    """Malformed filter expression."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.INVALID_FILTER, details)


class SearchAnchorError(ValidationError):
    """Search supplied more than one similarity anchor."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFLICTING_ANCHORS, details)


class FieldTypeError(ValidationError):
    """Document field holds a value outside {str, int, float}."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.UNSUPPORTED_FIELD_TYPE, details)


class DatabaseKindError(ValidationError):
    """Operation is not available for this kind of database."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.UNSUPPORTED_DATABASE_KIND, details)


class TransportError(VectorDBError):
    """Connection, timeout or HTTP status failure."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ServerError(VectorDBError):
    """The service answered with a non-zero result code.

    Attributes:
        server_code: Result code reported by the service.
    """

    def __init__(
        self,
        message: str,
        server_code: int,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.server_code = server_code
        super().__init__(message, code, {"server_code": server_code, **(details or {})})
