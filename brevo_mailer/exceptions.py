"""
Exceptions raised by the Brevo transport and its factories.

Everything a send can fail with derives from TransportError, so callers
that only care about "the email did not go out" catch that one class.
"""

from typing import Optional, Any


class TransportError(Exception):
    """Base class for failures while sending a message."""


class HttpTransportError(TransportError):
    """The provider answered with an error, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class AddressEncodingError(TransportError):
    """An address domain could not be converted to its ASCII form."""


class InvalidArgumentError(ValueError):
    """Raised when a service is configured with unusable values."""


class UnsupportedSchemeError(InvalidArgumentError):
    """The DSN scheme does not name a known transport."""


class IncompleteDsnError(InvalidArgumentError):
    """The DSN lacks a mandatory part such as the API key."""
