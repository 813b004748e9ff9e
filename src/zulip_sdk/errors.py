"""Exception classes for the Zulip SDK."""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import Optional


class ZulipError(Exception):
    """Base exception for all Zulip SDK errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize Zulip error.

        Args:
            message: Error message
            error_code: Optional error code
            details: Optional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ZulipTransportError(ZulipError):
    """The HTTP layer failed before a JSON body could be interpreted."""

    def __init__(
        self,
        message: str = "Transport failure",
        error_code: str = "TRANSPORT_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Description of the underlying failure
            error_code: Error code
            details: Optional error details
        """
        super().__init__(message, error_code, details)


class ZulipTimeoutError(ZulipTransportError):
    """Request timeout error."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize timeout error.

        Args:
            message: Error message
            timeout: Timeout value in seconds
            details: Optional error details
        """
        super().__init__(message, "TIMEOUT", details)
        self.timeout = timeout

    def __str__(self) -> str:
        """String representation of the timeout error."""
        base = super().__str__()
        if self.timeout:
            return f"{base} (timeout: {self.timeout}s)"
        return base


class ZulipAPIError(ZulipError):
    """The server answered with an error result."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        response: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Server-supplied ``msg``
            status_code: HTTP status code
            code: Server-supplied error ``code`` (e.g. ``BAD_REQUEST``)
            response: Raw decoded response body
            details: Optional error details
        """
        super().__init__(message, code, details)
        self.status_code = status_code
        self.code = code
        self.response = response

    def __str__(self) -> str:
        """String representation of the API error."""
        base = super().__str__()
        if self.status_code:
            return f"HTTP {self.status_code}: {base}"
        return base


class ZulipResponseError(ZulipError):
    """The response lacked an expected field or was not a JSON object."""

    def __init__(
        self,
        message: str,
        response: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize response error.

        Args:
            message: Error message
            response: Raw decoded response body, kept for diagnostics
            details: Optional error details
        """
        super().__init__(message, "RESPONSE_ERROR", details)
        self.response = response


class ZulipConfigurationError(ZulipError):
    """Configuration error."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            details: Optional error details
        """
        super().__init__(message, "CONFIGURATION_ERROR", details)
