"""HTTP/JSON transport and status-code mapping."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from phonedir.config import DirectoryConfig
from phonedir.exceptions import (
    DirectoryNotFoundError,
    DirectoryTransportError,
    DirectoryValidationError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def _error_message(text: str, status: int) -> str:
    """Pull the server's message out of an error body.

    Error bodies look like ``{"error": "..."}``; anything else is passed
    through truncated.
    """
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    stripped = text.strip()
    return stripped[:200] if stripped else f"HTTP {status}"


def raise_for_status(status: int, text: str, *, endpoint: str) -> None:
    """Map a non-2xx status to the matching exception."""
    if 200 <= status < 300:
        return
    message = _error_message(text, status)
    if status == 404:
        raise DirectoryNotFoundError(message, status_code=status, endpoint=endpoint)
    if 400 <= status < 500:
        raise DirectoryValidationError(message, status_code=status, endpoint=endpoint)
    raise DirectoryTransportError(
        f"HTTP {status} from {endpoint}: {message}",
        status_code=status,
        endpoint=endpoint,
    )


class JsonTransport:
    """HTTP transport speaking JSON to a single resource collection."""

    def __init__(
        self,
        config: DirectoryConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for an empty body (e.g. ``204 No Content``).
        """
        url = f"{self._config.base_url}{path}"
        endpoint = f"{method} {path or '/'}"
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise DirectoryTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise DirectoryTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s -> HTTP %d", endpoint, status)
        raise_for_status(status, text, endpoint=endpoint)

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DirectoryTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
