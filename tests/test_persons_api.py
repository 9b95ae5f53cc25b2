from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from phonedir._api.persons import create_person, delete_person, fetch_persons, record_path, update_person
from phonedir.client import DirectoryClient
from phonedir.exceptions import DirectoryError, DirectoryTransportError
from phonedir.models.person import Person
from phonedir.models.requests import PersonDraft


class _FakeTransport:
    def __init__(self, response: Any = None) -> None:
        self.response = response
        self.requests: list[tuple[str, str, dict[str, Any] | None]] = []

    async def request(self, method: str, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        self.requests.append((method, path, dict(payload) if payload is not None else None))
        return self.response


def test_record_path_quotes_id() -> None:
    assert record_path("64a1") == "/64a1"
    assert record_path("a/b c") == "/a%2Fb%20c"


@pytest.mark.asyncio
async def test_fetch_persons_parses_list() -> None:
    transport = _FakeTransport([{"id": 1, "name": "Ada", "number": "1"}, {"_id": "x", "name": "Mary"}])

    persons = await fetch_persons(transport)

    assert [(p.id, p.name, p.number) for p in persons] == [("1", "Ada", "1"), ("x", "Mary", "")]
    assert transport.requests == [("GET", "", None)]


@pytest.mark.asyncio
async def test_fetch_persons_rejects_non_list() -> None:
    with pytest.raises(DirectoryTransportError, match="expected a list"):
        await fetch_persons(_FakeTransport({"persons": []}))


@pytest.mark.asyncio
async def test_invalid_item_fails_whole_list() -> None:
    transport = _FakeTransport([{"id": "1", "name": "Ada"}, {"id": "2", "name": ""}])
    with pytest.raises(DirectoryTransportError, match="invalid person"):
        await fetch_persons(transport)


@pytest.mark.asyncio
async def test_duplicate_ids_fail_whole_list() -> None:
    transport = _FakeTransport([{"id": "1", "name": "Ada"}, {"id": 1, "name": "Ada Twin"}])
    with pytest.raises(DirectoryTransportError, match="duplicate person id"):
        await fetch_persons(transport)


@pytest.mark.asyncio
async def test_create_posts_draft_body() -> None:
    transport = _FakeTransport({"id": "9", "name": "Ada", "number": "555"})

    created = await create_person(transport, PersonDraft(name=" Ada ", number="555"))

    assert created.id == "9"
    assert transport.requests == [("POST", "", {"name": "Ada", "number": "555"})]


@pytest.mark.asyncio
async def test_update_puts_record_body_without_id() -> None:
    transport = _FakeTransport({"id": "9", "name": "Ada", "number": "2"})

    await update_person(transport, "9", Person(id="9", name="Ada", number="2"))

    assert transport.requests == [("PUT", "/9", {"name": "Ada", "number": "2"})]


@pytest.mark.asyncio
async def test_update_with_empty_body_is_transport_error() -> None:
    with pytest.raises(DirectoryTransportError, match="expected a person object"):
        await update_person(_FakeTransport(None), "9", Person(id="9", name="Ada", number="2"))


@pytest.mark.asyncio
async def test_delete_ignores_body() -> None:
    transport = _FakeTransport(None)
    await delete_person(transport, "9")
    assert transport.requests == [("DELETE", "/9", None)]


@pytest.mark.asyncio
async def test_client_with_injected_transport() -> None:
    transport = _FakeTransport({"id": "9", "name": "Ada", "number": "555"})

    async with DirectoryClient(transport=transport) as client:
        created = await client.create({"name": "Ada", "number": "555"})

    assert created.id == "9"


@pytest.mark.asyncio
async def test_client_requires_context() -> None:
    client = DirectoryClient()
    with pytest.raises(DirectoryError, match="not initialized"):
        await client.list()
