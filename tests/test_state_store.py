from __future__ import annotations

import pytest

from phonedir.models.person import Person
from phonedir.state.store import DirectoryStore, matches_filter


def _p(pid: str, name: str, number: str = "") -> Person:
    return Person(id=pid, name=name, number=number)


def test_append_preserves_insertion_order() -> None:
    store = DirectoryStore()
    store.append(_p("2", "Mary"))
    store.append(_p("1", "Ada"))

    assert [p.id for p in store.snapshot()] == ["2", "1"]


def test_duplicate_id_rejected() -> None:
    store = DirectoryStore([_p("1", "Ada")])
    with pytest.raises(ValueError):
        store.append(_p("1", "Other"))
    with pytest.raises(ValueError):
        DirectoryStore([_p("1", "Ada"), _p("1", "Ada")])


def test_replace_keeps_position() -> None:
    store = DirectoryStore([_p("1", "Ada", "1"), _p("2", "Mary", "2"), _p("3", "Bob", "3")])

    assert store.replace(_p("2", "MARY", "22"))

    assert [(p.id, p.name, p.number) for p in store] == [
        ("1", "Ada", "1"),
        ("2", "MARY", "22"),
        ("3", "Bob", "3"),
    ]


def test_replace_missing_id_is_noop() -> None:
    store = DirectoryStore([_p("1", "Ada")])
    assert not store.replace(_p("9", "Ghost"))
    assert [p.id for p in store] == ["1"]


def test_remove_is_idempotent() -> None:
    store = DirectoryStore([_p("1", "Ada")])
    assert store.remove("1") is not None
    assert store.remove("1") is None
    assert len(store) == 0


def test_find_by_name_ignores_case() -> None:
    store = DirectoryStore([_p("1", "Ada Lovelace")])
    found = store.find_by_name("ada LOVELACE")
    assert found is not None and found.id == "1"
    assert store.find_by_name("Ada") is None


def test_filter_substring_case_insensitive() -> None:
    store = DirectoryStore([_p("1", "Ada"), _p("2", "Mary")])

    assert [p.name for p in store.filter("da")] == ["Ada"]
    assert [p.name for p in store.filter("")] == ["Ada", "Mary"]
    assert store.filter("zzz") == ()
    assert len(store) == 2


def test_filter_treats_text_literally() -> None:
    store = DirectoryStore([_p("1", "Ada (work)"), _p("2", "Mary")])

    assert [p.name for p in store.filter("(w")] == ["Ada (work)"]
    assert store.filter(".*") == ()


def test_matches_filter_empty_text() -> None:
    assert matches_filter(_p("1", "Ada"), "")


def test_snapshot_is_detached() -> None:
    store = DirectoryStore([_p("1", "Ada")])
    snap = store.snapshot()
    store.remove("1")
    assert [p.id for p in snap] == ["1"]
