"""Transient notification model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A single success/error banner.

    ``token`` identifies this instance; an expiry scheduled for one token
    never clears a notification carrying another.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    kind: NotificationKind
    token: int = Field(..., ge=1)

    @property
    def is_error(self) -> bool:
        return self.kind is NotificationKind.ERROR
