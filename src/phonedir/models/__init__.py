"""Data models for directory API payloads and controller state."""

from phonedir.models._base import DirectoryBaseModel
from phonedir.models.notification import Notification, NotificationKind
from phonedir.models.person import Person, fold_name
from phonedir.models.requests import PersonDraft

__all__ = [
    "DirectoryBaseModel",
    "Notification",
    "NotificationKind",
    "Person",
    "PersonDraft",
    "fold_name",
]
