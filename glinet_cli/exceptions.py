"""
Custom exceptions for the GL.iNet router CLI.

This module defines all custom exceptions used throughout glinet-cli. All
exceptions inherit from GlinetError so the command layer can catch every
library-specific failure in one place and report it to the user.

Example usage:
    try:
        store = load(path)
        handle = resolve_session(store)
    except AmbiguousSelectionError as e:
        print(f"Cannot pick a router: {e}")
    except GlinetError as e:
        print(f"glinet error: {e}")

License: MIT
"""

from typing import Any, Optional


class GlinetError(Exception):
    """
    Base exception for all glinet-cli errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize GlinetError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class CorruptConfigError(GlinetError):
    """
    Raised when the config file exists but cannot be parsed.

    The file is never repaired automatically. The user must inspect or
    delete it.

    Attributes:
        message: Human-readable error message
        details: May include 'path', 'parse_error'
    """


class UnsupportedVersionError(GlinetError):
    """
    Raised when the config file carries an unknown schema version.

    Attributes:
        message: Human-readable error message
        details: May include 'path', 'version', 'supported'
    """


class AmbiguousSelectionError(GlinetError):
    """
    Raised when a single stored router is required but the store holds
    zero or several.

    Attributes:
        message: Human-readable error message
        details: May include 'count', 'addresses'
    """


class ConfigIOError(GlinetError):
    """
    Raised when the config file cannot be written.

    This exception is raised when:
    - The parent directory cannot be created
    - Permission is denied
    - The disk is full

    Attributes:
        message: Human-readable error message
        details: May include 'path', 'original_error'
    """


class GlinetAuthenticationError(GlinetError):
    """
    Raised when the router answers the login request without a usable token.

    This exception is raised when:
    - The password is wrong
    - The login response is not JSON
    - The login response has no 'token' field

    Attributes:
        message: Human-readable error message
        details: May include 'address', 'status_code', 'response'
    """


class GlinetConnectionError(GlinetError):
    """
    Raised when the router cannot be reached.

    This exception is raised when:
    - Network connection cannot be established
    - Connection is refused
    - SSL/TLS handshake fails

    Attributes:
        message: Human-readable error message
        details: May include 'host', 'error_type', 'original_error'
    """


class GlinetTimeoutError(GlinetConnectionError):
    """
    Raised when a request to the router times out.

    Attributes:
        message: Human-readable error message
        details: May include 'host', 'timeout', 'operation'
    """


class GlinetHTTPError(GlinetError):
    """
    Raised when the router answers an API call with an unexpected status.

    An expired session token typically surfaces as this error.

    Attributes:
        message: Human-readable error message
        details: May include 'status_code', 'operation', 'response_text'
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize GlinetHTTPError.

        Args:
            message: Human-readable error message
            status_code: HTTP status code if available
            details: Optional dictionary with additional error context
        """
        super().__init__(message, details)
        self.status_code = status_code
        if status_code and self.details is not None:
            self.details["status_code"] = status_code


class GlinetParsingError(GlinetError):
    """
    Raised when an API response body cannot be decoded.

    Attributes:
        message: Human-readable error message
        details: May include 'operation', 'parse_error', 'response'
    """


def wrap_connection_error(original_error: Exception, host: str, operation: str) -> GlinetConnectionError:
    """
    Wrap a requests transport exception in GlinetConnectionError.

    Args:
        original_error: The original exception
        host: Router address that failed
        operation: Request path or action being performed

    Returns:
        GlinetConnectionError (or GlinetTimeoutError) with context
    """
    import requests

    if isinstance(original_error, requests.exceptions.Timeout):
        return GlinetTimeoutError(
            f"Request to {host} timed out",
            details={
                "host": host,
                "operation": operation,
                "original_error": str(original_error),
            },
        )

    message = f"Failed to connect to {host}"
    if isinstance(original_error, requests.exceptions.SSLError):
        message = f"TLS handshake with {host} failed"
    elif isinstance(original_error, requests.exceptions.ConnectionError):
        message = f"Connection to {host} failed - router may be offline or unreachable"

    return GlinetConnectionError(
        message,
        details={
            "host": host,
            "operation": operation,
            "error_type": type(original_error).__name__,
            "original_error": str(original_error),
        },
    )


# Export all exceptions
__all__ = [
    "AmbiguousSelectionError",
    "ConfigIOError",
    "CorruptConfigError",
    "GlinetAuthenticationError",
    "GlinetConnectionError",
    "GlinetError",
    "GlinetHTTPError",
    "GlinetParsingError",
    "GlinetTimeoutError",
    "UnsupportedVersionError",
    "wrap_connection_error",
]
