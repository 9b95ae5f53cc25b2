"""High-level async client for the remote person collection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from phonedir._api import persons as _persons_api
from phonedir._transport import JsonTransport, Transport
from phonedir.config import DirectoryConfig
from phonedir.exceptions import DirectoryError
from phonedir.models.person import Person
from phonedir.models.requests import PersonDraft

_logger = logging.getLogger(__name__)


class DirectoryClient:
    """Async client for a JSON person collection.

    Usage::

        async with DirectoryClient(config) as client:
            persons = await client.list()

    Every call is a single attempt. Failures are raised as
    :class:`~phonedir.exceptions.DirectoryTransportError`,
    :class:`~phonedir.exceptions.DirectoryValidationError` or
    :class:`~phonedir.exceptions.DirectoryNotFoundError`; nothing is
    swallowed here.
    """

    def __init__(
        self,
        config: DirectoryConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or DirectoryConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> DirectoryConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DirectoryClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise DirectoryError("Client not initialized. Use 'async with DirectoryClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Collection operations
    # ------------------------------------------------------------------

    async def list(self) -> list[Person]:
        """Fetch the full current collection."""
        persons = await _persons_api.fetch_persons(self._require_transport())
        _logger.debug("Fetched %d person(s)", len(persons))
        return persons

    async def create(self, draft: PersonDraft | Mapping[str, Any]) -> Person:
        """Create a record and return the server's canonical version."""
        if not isinstance(draft, PersonDraft):
            draft = PersonDraft.model_validate(dict(draft))
        return await _persons_api.create_person(self._require_transport(), draft)

    async def update(self, person_id: str, record: Person) -> Person:
        """Replace the record stored under *person_id* and return the canonical version."""
        return await _persons_api.update_person(self._require_transport(), person_id, record)

    async def remove(self, person_id: str) -> None:
        """Delete the record stored under *person_id*."""
        await _persons_api.delete_person(self._require_transport(), person_id)
