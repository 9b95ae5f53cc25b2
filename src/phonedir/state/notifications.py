"""Single-slot transient notifications with self-expiry.

Each notification carries a monotonically increasing token. Showing a new
one cancels the previous expiry timer, and an expiry callback only clears
the slot when its token is still the one on display, so a slow-to-fire
timer from an earlier message can never wipe a later message.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable

from phonedir._constants import NOTIFICATION_TIMEOUT
from phonedir.models.notification import Notification, NotificationKind

_logger = logging.getLogger(__name__)


class NotificationCenter:
    """Holds at most one :class:`Notification` and expires it after *timeout* seconds."""

    def __init__(
        self,
        *,
        timeout: float = NOTIFICATION_TIMEOUT,
        on_change: Callable[[Notification | None], None] | None = None,
    ) -> None:
        self._timeout = timeout
        self._on_change = on_change
        self._tokens = itertools.count(1)
        self._current: Notification | None = None
        self._handle: asyncio.TimerHandle | None = None

    @property
    def current(self) -> Notification | None:
        return self._current

    def show(self, message: str, kind: NotificationKind) -> Notification:
        """Display *message*, superseding whatever is currently shown.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        notification = Notification(message=message, kind=kind, token=next(self._tokens))
        self._current = notification
        self._handle = loop.call_later(self._timeout, self.expire, notification.token)
        _logger.debug("Notification #%d (%s): %s", notification.token, kind, message)
        self._emit()
        return notification

    def expire(self, token: int) -> bool:
        """Clear the slot if *token* is still on display.

        Returns ``True`` when something was cleared. Stale tokens are a no-op.
        """
        current = self._current
        if current is None or current.token != token:
            _logger.debug("Ignoring expiry of superseded notification #%d", token)
            return False
        self._current = None
        self._handle = None
        self._emit()
        return True

    def close(self) -> None:
        """Cancel any pending expiry timer; the current message stays as-is."""
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _emit(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self._current)
        except Exception:
            _logger.debug("Notification on_change callback failed", exc_info=True)
