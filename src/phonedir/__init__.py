"""phonedir - Async phonebook client with local reconciliation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("phonedir")
except PackageNotFoundError:
    __version__ = "0+local"
from phonedir.client import DirectoryClient
from phonedir.config import DirectoryConfig
from phonedir.controller import DirectoryController, DirectoryView, IntentOutcome
from phonedir.exceptions import (
    DirectoryApiError,
    DirectoryConfigError,
    DirectoryError,
    DirectoryNotFoundError,
    DirectoryTransportError,
    DirectoryValidationError,
)
from phonedir.models import Notification, NotificationKind, Person, PersonDraft
from phonedir.state.notifications import NotificationCenter
from phonedir.state.store import DirectoryStore

__all__ = [
    "__version__",
    "DirectoryApiError",
    "DirectoryClient",
    "DirectoryConfig",
    "DirectoryConfigError",
    "DirectoryController",
    "DirectoryError",
    "DirectoryNotFoundError",
    "DirectoryStore",
    "DirectoryTransportError",
    "DirectoryValidationError",
    "DirectoryView",
    "IntentOutcome",
    "Notification",
    "NotificationCenter",
    "NotificationKind",
    "Person",
    "PersonDraft",
]
