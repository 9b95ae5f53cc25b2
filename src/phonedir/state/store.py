"""Ordered in-memory person store.

Owned by :class:`phonedir.controller.DirectoryController`; that is the only
component allowed to mutate it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from phonedir.models.person import Person


def matches_filter(person: Person, text: str) -> bool:
    """Case-insensitive literal substring match against the person's name."""
    needle = text.casefold()
    if not needle:
        return True
    return needle in person.name.casefold()


class DirectoryStore:
    """Ordered collection of :class:`Person` keyed by id.

    Insertion order is preserved; :meth:`replace` keeps the entry's
    position. Ids are unique within the store.
    """

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._persons: list[Person] = []
        self.reset(persons)

    def __len__(self) -> int:
        return len(self._persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(tuple(self._persons))

    def __contains__(self, person_id: object) -> bool:
        return any(p.id == person_id for p in self._persons)

    def reset(self, persons: Iterable[Person]) -> None:
        """Replace the whole content (initial load only)."""
        seen: set[str] = set()
        items: list[Person] = []
        for person in persons:
            if person.id in seen:
                raise ValueError(f"duplicate person id {person.id!r}")
            seen.add(person.id)
            items.append(person)
        self._persons = items

    def snapshot(self) -> tuple[Person, ...]:
        return tuple(self._persons)

    def get(self, person_id: str) -> Person | None:
        for person in self._persons:
            if person.id == person_id:
                return person
        return None

    def find_by_name(self, name: str) -> Person | None:
        """First person whose name equals *name*, ignoring case."""
        for person in self._persons:
            if person.has_name(name):
                return person
        return None

    def append(self, person: Person) -> None:
        if person.id in self:
            raise ValueError(f"duplicate person id {person.id!r}")
        self._persons.append(person)

    def replace(self, person: Person) -> bool:
        """Swap in *person* at the position of the entry with the same id.

        Returns ``False`` (and changes nothing) when no such entry exists.
        """
        for index, existing in enumerate(self._persons):
            if existing.id == person.id:
                self._persons[index] = person
                return True
        return False

    def remove(self, person_id: str) -> Person | None:
        """Drop the entry with *person_id*; missing ids are ignored."""
        for index, existing in enumerate(self._persons):
            if existing.id == person_id:
                return self._persons.pop(index)
        return None

    def filter(self, text: str) -> tuple[Person, ...]:
        """Visible subset for a filter string; the store itself is untouched."""
        return tuple(p for p in self._persons if matches_filter(p, text))
