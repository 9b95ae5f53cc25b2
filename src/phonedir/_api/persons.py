"""Person collection endpoints.

Thin functions over a :class:`~phonedir._transport.Transport`; each one is
a single attempt with no retries. Parsing failures surface as
:class:`~phonedir.exceptions.DirectoryTransportError` since the server sent
something that is not a person record.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from phonedir._transport import Transport
from phonedir.exceptions import DirectoryTransportError
from phonedir.models.person import Person
from phonedir.models.requests import PersonDraft


def record_path(person_id: str) -> str:
    """Path of a single record relative to the collection URL."""
    return f"/{quote(str(person_id), safe='')}"


def _parse_person(endpoint: str, data: Any) -> Person:
    if not isinstance(data, dict):
        raise DirectoryTransportError(
            f"{endpoint} returned {type(data).__name__}, expected a person object",
            endpoint=endpoint,
        )
    try:
        return Person.model_validate(data)
    except ValidationError as exc:
        raise DirectoryTransportError(
            f"{endpoint} returned an invalid person: {exc.error_count()} error(s)",
            endpoint=endpoint,
        ) from exc


async def fetch_persons(transport: Transport) -> list[Person]:
    """Fetch the full collection."""
    endpoint = "GET /"
    decoded = await transport.request("GET", "")
    if not isinstance(decoded, list):
        raise DirectoryTransportError(
            f"{endpoint} returned {type(decoded).__name__}, expected a list",
            endpoint=endpoint,
        )
    persons = [_parse_person(endpoint, item) for item in decoded]
    seen: set[str] = set()
    for person in persons:
        if person.id in seen:
            raise DirectoryTransportError(
                f"{endpoint} returned duplicate person id {person.id!r}",
                endpoint=endpoint,
            )
        seen.add(person.id)
    return persons


async def create_person(transport: Transport, draft: PersonDraft) -> Person:
    """Create a record; the server assigns the id."""
    decoded = await transport.request("POST", "", draft.to_payload())
    return _parse_person("POST /", decoded)


async def update_person(transport: Transport, person_id: str, record: Person) -> Person:
    """Replace the record stored under *person_id*."""
    path = record_path(person_id)
    decoded = await transport.request("PUT", path, record.to_payload())
    return _parse_person(f"PUT {path}", decoded)


async def delete_person(transport: Transport, person_id: str) -> None:
    """Delete the record stored under *person_id*."""
    await transport.request("DELETE", record_path(person_id))
