"""Reconciliation controller.

Turns user intents (submit the form, delete an entry, change the filter)
into remote create/update/remove calls and merges each settlement back into
the local store and notification slot.

Conflict rule: a 404 on update means the local copy is stale. The entry is
evicted and the user told; it is never retried as a create.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from phonedir._constants import NOTIFICATION_TIMEOUT
from phonedir.exceptions import (
    DirectoryApiError,
    DirectoryError,
    DirectoryNotFoundError,
    DirectoryValidationError,
)
from phonedir.models.notification import Notification, NotificationKind
from phonedir.models.person import Person, fold_name
from phonedir.models.requests import PersonDraft
from phonedir.state.notifications import NotificationCenter
from phonedir.state.store import DirectoryStore

_logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
"""Synchronous yes/no decision from a human, given a prompt."""


class RemoteDirectory(Protocol):
    """What the controller needs from :class:`phonedir.client.DirectoryClient`."""

    async def list(self) -> list[Person]: ...

    async def create(self, draft: PersonDraft) -> Person: ...

    async def update(self, person_id: str, record: Person) -> Person: ...

    async def remove(self, person_id: str) -> None: ...


class IntentOutcome(StrEnum):
    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    STALE_REMOVED = "stale_removed"
    FAILED = "failed"
    DECLINED = "declined"
    IGNORED = "ignored"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class DirectoryView:
    """Read-only projection handed to the presentation layer."""

    persons: tuple[Person, ...]
    visible_persons: tuple[Person, ...]
    filter_text: str
    draft_name: str
    draft_number: str
    notification: Notification | None


class DirectoryController:
    """Owns the person store and notification slot; the only writer of both.

    Parameters
    ----------
    client
        Remote gateway (normally an entered :class:`~phonedir.client.DirectoryClient`).
    confirm
        Called with a prompt before overwriting or deleting a record. No
        default answer is assumed.
    notification_timeout
        Seconds before a notification expires on its own.
    on_change
        Called with a fresh :class:`DirectoryView` after every state change.
    """

    def __init__(
        self,
        client: RemoteDirectory,
        confirm: Confirm,
        *,
        notification_timeout: float = NOTIFICATION_TIMEOUT,
        on_change: Callable[[DirectoryView], None] | None = None,
    ) -> None:
        self._client = client
        self._confirm = confirm
        self._on_change = on_change
        self._store = DirectoryStore()
        self._notifications = NotificationCenter(
            timeout=notification_timeout,
            on_change=lambda _notification: self._emit(),
        )
        self._loaded = False
        self._in_flight: set[Hashable] = set()
        self._draft_name = ""
        self._draft_number = ""
        self._filter_text = ""

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    @property
    def persons(self) -> tuple[Person, ...]:
        return self._store.snapshot()

    @property
    def visible_persons(self) -> tuple[Person, ...]:
        return self._store.filter(self._filter_text)

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def draft_name(self) -> str:
        return self._draft_name

    @property
    def draft_number(self) -> str:
        return self._draft_number

    @property
    def notification(self) -> Notification | None:
        return self._notifications.current

    @property
    def view(self) -> DirectoryView:
        return DirectoryView(
            persons=self.persons,
            visible_persons=self.visible_persons,
            filter_text=self._filter_text,
            draft_name=self._draft_name,
            draft_number=self._draft_number,
            notification=self.notification,
        )

    def is_busy(self, person_id: str) -> bool:
        """Whether an intent against *person_id* is in flight."""
        return ("id", person_id) in self._in_flight

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def load(self) -> IntentOutcome:
        """Populate the store from the server, once."""
        if self._loaded:
            return IntentOutcome.IGNORED
        if not self._claim(("load",)):
            return IntentOutcome.BUSY
        try:
            persons = await self._client.list()
        except DirectoryError as exc:
            _logger.debug("Initial load failed", exc_info=True)
            self._notify(f"Could not load phonebook: {exc}", NotificationKind.ERROR)
            return IntentOutcome.FAILED
        finally:
            self._release(("load",))

        fetched_ids = {p.id for p in persons}
        # Entries created while the list call was in flight are kept.
        local_only = [p for p in self._store if p.id not in fetched_ids]
        try:
            self._store.reset([*persons, *local_only])
        except ValueError as exc:
            _logger.debug("Initial load returned an inconsistent list", exc_info=True)
            self._notify(f"Could not load phonebook: {exc}", NotificationKind.ERROR)
            return IntentOutcome.FAILED
        self._loaded = True
        _logger.info("Loaded %d person(s)", len(persons))
        self._emit()
        return IntentOutcome.LOADED

    def set_draft_name(self, name: str) -> None:
        self._draft_name = name
        self._emit()

    def set_draft_number(self, number: str) -> None:
        self._draft_number = number
        self._emit()

    def change_filter(self, text: str) -> tuple[Person, ...]:
        """Set the filter text and return the visible subset."""
        self._filter_text = text
        self._emit()
        return self.visible_persons

    async def submit(self, name: str | None = None, number: str | None = None) -> IntentOutcome:
        """Add a person, or overwrite the number of an existing one.

        *name* and *number* default to the current drafts. An empty name is
        ignored without a network call or notification.
        """
        name = (self._draft_name if name is None else name).strip()
        number = (self._draft_number if number is None else number).strip()
        if not name:
            return IntentOutcome.IGNORED

        existing = self._store.find_by_name(name)
        if existing is None:
            return await self._create(PersonDraft(name=name, number=number))
        return await self._update_existing(existing, number)

    async def delete(self, person_id: str) -> IntentOutcome:
        """Remove a person after confirmation.

        "Already gone" on the server counts as success: the entry is removed
        locally either way. Any other failure keeps the entry.
        """
        person = self._store.get(person_id)
        if person is None:
            return IntentOutcome.IGNORED
        key = ("id", person_id)
        if not self._claim(key):
            return IntentOutcome.BUSY
        try:
            if not self._confirm(f"Delete {person.name}?"):
                return IntentOutcome.DECLINED
            try:
                await self._client.remove(person_id)
            except DirectoryNotFoundError:
                _logger.info("Person %s was already removed from the server", person_id)
            except DirectoryError as exc:
                _logger.debug("Delete of %s failed", person_id, exc_info=True)
                self._notify(f"Could not delete {person.name}: {exc}", NotificationKind.ERROR)
                return IntentOutcome.FAILED
        finally:
            self._release(key)

        self._store.remove(person_id)
        _logger.info("Deleted person %s", person_id)
        self._notify(f"Deleted {person.name}", NotificationKind.SUCCESS)
        return IntentOutcome.DELETED

    def close(self) -> None:
        """Cancel the pending notification timer."""
        self._notifications.close()

    # ------------------------------------------------------------------
    # Submit branches
    # ------------------------------------------------------------------

    async def _create(self, draft: PersonDraft) -> IntentOutcome:
        key = ("name", fold_name(draft.name))
        if not self._claim(key):
            return IntentOutcome.BUSY
        try:
            created = await self._client.create(draft)
        except DirectoryApiError as exc:
            # Any 4xx on create is a rejection of the submitted record.
            self._notify(str(exc), NotificationKind.ERROR)
            return IntentOutcome.FAILED
        except DirectoryError as exc:
            _logger.debug("Create of %r failed", draft.name, exc_info=True)
            self._notify(f"Could not add {draft.name}: {exc}", NotificationKind.ERROR)
            return IntentOutcome.FAILED
        finally:
            self._release(key)

        if not self._store.replace(created):
            self._store.append(created)
        self._clear_drafts()
        _logger.info("Added person %s (%s)", created.id, created.name)
        self._notify(f"Added {created.name}", NotificationKind.SUCCESS)
        return IntentOutcome.CREATED

    async def _update_existing(self, existing: Person, number: str) -> IntentOutcome:
        key = ("id", existing.id)
        if not self._claim(key):
            return IntentOutcome.BUSY
        try:
            prompt = f"{existing.name} is already added to phonebook, replace the old number with a new one?"
            if not self._confirm(prompt):
                return IntentOutcome.DECLINED
            record = existing.model_copy(update={"number": number})
            try:
                updated = await self._client.update(existing.id, record)
            except DirectoryNotFoundError:
                self._store.remove(existing.id)
                _logger.warning("Person %s vanished server-side; evicted stale entry", existing.id)
                self._notify(
                    f"Information of {existing.name} has already been removed from server",
                    NotificationKind.ERROR,
                )
                return IntentOutcome.STALE_REMOVED
            except DirectoryValidationError as exc:
                self._notify(str(exc), NotificationKind.ERROR)
                return IntentOutcome.FAILED
            except DirectoryError as exc:
                _logger.debug("Update of %s failed", existing.id, exc_info=True)
                self._notify(f"Could not update {existing.name}: {exc}", NotificationKind.ERROR)
                return IntentOutcome.FAILED
        finally:
            self._release(key)

        if not self._store.replace(updated):
            # Deleted locally while the update was in flight; last resume wins.
            _logger.debug("Person %s no longer in store, update not applied", updated.id)
        self._clear_drafts()
        _logger.info("Updated person %s", updated.id)
        self._notify(f"Updated {updated.name}", NotificationKind.SUCCESS)
        return IntentOutcome.UPDATED

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _claim(self, key: Hashable) -> bool:
        if key in self._in_flight:
            _logger.debug("Intent against %r already in flight", key)
            return False
        self._in_flight.add(key)
        return True

    def _release(self, key: Hashable) -> None:
        self._in_flight.discard(key)

    def _clear_drafts(self) -> None:
        self._draft_name = ""
        self._draft_number = ""

    def _notify(self, message: str, kind: NotificationKind) -> Notification:
        # NotificationCenter calls back into _emit.
        return self._notifications.show(message, kind)

    def _emit(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.view)
        except Exception:
            _logger.debug("on_change callback failed", exc_info=True)
