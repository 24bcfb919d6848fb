"""
CredHub client errors.

Everything the library raises derives from CredHubError, so callers can catch
one type. Build-time failures are also ValueErrors.
"""

from __future__ import annotations


class CredHubError(Exception):
    """Base class for all credhub client errors."""


class InvalidArgumentError(CredHubError, ValueError):
    """A request or name failed validation before anything was sent."""


class UnknownCredentialTypeError(CredHubError):
    """The wire ``type`` tag is not one of the known credential types."""

    def __init__(self, type_tag: object) -> None:
        super().__init__(f"Unknown credential type: {type_tag!r}")
        self.type_tag = type_tag


class InvalidResponseError(CredHubError):
    """A response payload is missing required keys or has the wrong shape."""


class TransportError(CredHubError):
    """The request could not be completed (connection, timeout, TLS)."""


class CredHubHTTPError(TransportError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
