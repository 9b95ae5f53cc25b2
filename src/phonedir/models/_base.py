"""Base model for directory API payloads.

Every directory model inherits from :class:`DirectoryBaseModel` which
provides:

* frozen instances.
* ``extra="ignore"``; server bookkeeping fields such as ``__v`` are dropped.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DirectoryBaseModel(BaseModel):
    """Base for models parsed from server responses."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        # Only auto-stash raw when not explicitly provided (i.e. model_validate
        # from an API dict). Keyword construction with raw= keeps the caller's value.
        if not isinstance(values, dict) or "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
