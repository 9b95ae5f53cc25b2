"""Custom exception hierarchy for phonedir."""

from __future__ import annotations


class DirectoryError(Exception):
    """Base exception for all phonedir errors."""


class DirectoryConfigError(DirectoryError):
    """Invalid or missing configuration."""


class DirectoryTransportError(DirectoryError):
    """HTTP-level failure (network, 5xx, invalid JSON, unexpected payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DirectoryApiError(DirectoryError):
    """Server rejected the request with a 4xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DirectoryValidationError(DirectoryApiError):
    """Server refused the submitted record (e.g. name too short).

    ``str(exc)`` is the server-supplied message, suitable for display.
    """


class DirectoryNotFoundError(DirectoryApiError):
    """The target record no longer exists server-side (HTTP 404).

    Raised by ``update`` and ``remove`` when another client deleted the
    record after the local list was fetched.
    """
