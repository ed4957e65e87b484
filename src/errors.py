"""
Errors raised by the administration client and resource handlers.

Every failure is surfaced to the immediate caller; nothing in this package
retries or recovers internally. Errors that originate from an HTTP response
carry the status code and the raw response body for diagnostics.
"""

from typing import Optional


class AdministrationError(Exception):
    """Base class for all administration errors."""


class ConfigurationError(AdministrationError):
    """A required setting is missing or invalid. Raised before any network call."""


class AuthError(AdministrationError):
    """The authorization endpoint refused the client credentials."""

    def __init__(self, status: int, body: str, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message or f"authentication failed: status: {status}, body: {body}")


class TransportError(AdministrationError):
    """An outbound request could not be completed."""


class RequestTimeoutError(TransportError, TimeoutError):
    """The request exceeded the fixed request deadline."""


class RemoteError(TransportError):
    """The API answered with a status outside 200/201/204."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"status: {status}, body: {body}")


class NotFoundError(RemoteError):
    """The API reported that the requested resource does not exist."""


class ProtocolError(AdministrationError):
    """A successful response did not carry the expected payload."""


class StateError(AdministrationError):
    """An operation was invoked from a lifecycle state that does not allow it."""
