"""Pydantic request models for write operations.

These models provide a consistent "validate -> normalize -> execute" flow.
They are used internally by :class:`phonedir.client.DirectoryClient`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PersonDraft(BaseModel):
    """Not-yet-submitted name/number pair."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    name: str
    number: str = ""

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "number": self.number}
