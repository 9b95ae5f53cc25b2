"""Person model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from phonedir.models._base import DirectoryBaseModel


def fold_name(name: str) -> str:
    """Key used for case-insensitive name comparison."""
    return name.strip().casefold()


class Person(DirectoryBaseModel):
    """A directory entry as returned by the server (the canonical record)."""

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    """Server-assigned identifier. Opaque, stable once created, never reused."""
    name: str = Field(..., min_length=1)
    """Display name; unique within the directory, compared case-insensitively."""
    number: str = ""
    """Free-form phone number."""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # JSON stores hand out integer ids, document stores hand out strings.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def folded_name(self) -> str:
        return fold_name(self.name)

    def has_name(self, name: str) -> bool:
        """Whether *name* refers to this person, ignoring case."""
        return self.folded_name == fold_name(name)

    def to_payload(self) -> dict[str, str]:
        """JSON body for a write request."""
        return {"name": self.name, "number": self.number}
