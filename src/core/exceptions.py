"""Structured exception hierarchy for consistent error handling.

This module defines the error model shared by request handlers and the
boot sequence.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **ApiError**: Typed request error carrying HTTP status, message and code
- **Specialized exceptions**: Thin ApiError subclasses with preset status codes
- **Boot errors**: Failures raised while building the route table

An ApiError is logged at the moment it is constructed, so a failure is
recorded at the point of detection even if it never reaches the error
translation layer. Anything raised from a handler that is not an ApiError
is reported to clients as a masked 500.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Final

from loguru import logger

DEFAULT_HTTP_STATUS: Final[int] = 500
UNKNOWN_ERROR_MESSAGE: Final[str] = "UNKNOWN ERROR"


class ErrorCode(Enum):
    """Standardized error codes for API errors.

    Handlers may pass any string as an error code; these are the ones the
    scaffold itself uses.
    """

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed due to invalid or malformed data."""

    NOT_FOUND = "NOT_FOUND"
    """The requested resource could not be found."""


class ApiError(Exception):
    """Typed error that handlers raise to send a specific response.

    Every field is optional: the status falls back to 500 and the message
    to ``UNKNOWN ERROR``. The user message currently mirrors the message.
    Instances are read-only once created.

    Args:
        message: Human-readable error message
        http_status: HTTP status code of the response
        error_code: Stable machine-readable identifier (string or ErrorCode enum)
    """

    def __init__(
        self,
        message: str | None = None,
        http_status: int | None = None,
        error_code: str | ErrorCode | None = None,
    ) -> None:
        self._message = message or UNKNOWN_ERROR_MESSAGE
        self._user_message = self._message
        self._http_status = (
            http_status if http_status is not None else DEFAULT_HTTP_STATUS
        )
        self._error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )

        super().__init__(self._message)

        logger.opt(depth=1).bind(
            http_status=self._http_status,
            error_code=self._error_code,
            user_message=self._user_message,
        ).error("{}: {}", type(self).__name__, self._message)

    @property
    def message(self) -> str:
        """Internal/debug message."""
        return self._message

    @property
    def user_message(self) -> str:
        """Message meant for API clients."""
        return self._user_message

    @property
    def http_status(self) -> int:
        """HTTP status code of the error response."""
        return self._http_status

    @property
    def error_code(self) -> str | None:
        """Machine-readable error identifier, if any."""
        return self._error_code

    def to_dict(self) -> dict[str, Any]:
        """Return the public fields of the error.

        Returns:
            dict[str, Any]: message, user_message, http_status and error_code
        """
        return {
            "message": self._message,
            "user_message": self._user_message,
            "http_status": self._http_status,
            "error_code": self._error_code,
        }

    def __str__(self) -> str:
        if self._error_code:
            return f"[{self._error_code}] {self._message}"
        return self._message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self._message!r}, "
            f"http_status={self._http_status}, error_code={self._error_code!r})"
        )


class ValidationError(ApiError):
    """Exception raised when input sent by the client is invalid.

    Args:
        message: Description of the validation failure
        error_code: Error code (defaults to VALIDATION_ERROR)
    """

    def __init__(
        self,
        message: str | None = None,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(message, 400, error_code)


class NotFoundError(ApiError):
    """Exception raised when a requested resource cannot be found.

    Args:
        message: Description of what resource was not found
        error_code: Error code (defaults to NOT_FOUND)
    """

    def __init__(
        self,
        message: str | None = None,
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
    ) -> None:
        super().__init__(message, 404, error_code)


class RouteDiscoveryError(Exception):
    """Raised when the endpoints root cannot be scanned.

    The application cannot serve without its route table, so this error
    aborts startup.

    Args:
        root: The endpoints root that failed to scan
        reason: Why the scan failed
    """

    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot discover routes in {root}: {reason}")


class EndpointLoadError(Exception):
    """Raised when a discovered endpoint module has no usable router.

    Args:
        relative_path: Path of the module relative to the endpoints root
        reason: Why the module was rejected
    """

    def __init__(self, relative_path: Path, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Endpoint {relative_path} is invalid: {reason}")
