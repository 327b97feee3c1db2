from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import ContextManager, Protocol

from meteo.models.weather import AlertEvent, Notification

logger = logging.getLogger(__name__)

APP_TITLE = "Météo"
CONFIRMATION_BODY = "Notifications enabled 🎉"


class PermissionState(str, Enum):
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"
    UNSUPPORTED = "unsupported"


@dataclass
class NotificationState:
    permission: PermissionState = PermissionState.DEFAULT
    channel_ready: bool = False


class NotificationChannel(Protocol):
    @property
    def ready(self) -> bool: ...

    def show(self, notification: Notification) -> None: ...


class OutboxChannel:
    """Queues notifications until the next response hands them to the browser.

    A queued notification with the same tag as a pending one replaces it.
    """

    def __init__(
        self,
        outbox: list[Notification],
        *,
        ready: bool,
        lock: ContextManager[object] | None = None,
    ) -> None:
        self._outbox = outbox
        self._ready = ready
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def ready(self) -> bool:
        return self._ready

    def show(self, notification: Notification) -> None:
        with self._lock:
            self._outbox[:] = [n for n in self._outbox if n.tag != notification.tag]
            self._outbox.append(notification)


class NotificationDispatcher:
    def __init__(self, *, state: NotificationState, channel: NotificationChannel) -> None:
        self._state = state
        self._channel = channel

    @property
    def permission(self) -> PermissionState:
        return self._state.permission

    def request_permission(self, outcome: PermissionState) -> PermissionState:
        """Record the answer the platform gave to the permission prompt."""
        if PermissionState.UNSUPPORTED in (self._state.permission, outcome):
            self._state.permission = PermissionState.UNSUPPORTED
            return self._state.permission
        self._state.permission = PermissionState(outcome)
        if self._state.permission is PermissionState.GRANTED:
            self._deliver(Notification(title=APP_TITLE, body=CONFIRMATION_BODY, tag="info"))
        return self._state.permission

    def report(self, permission: PermissionState) -> PermissionState:
        """Record the platform's current permission without prompting."""
        self._state.permission = PermissionState(permission)
        return self._state.permission

    def dispatch(self, event: AlertEvent) -> bool:
        if self._state.permission is not PermissionState.GRANTED:
            return False
        return self._deliver(
            Notification(
                title=f"Alert: {event.city}",
                body=event.message,
                tag=event.kind.value,
            )
        )

    def _deliver(self, notification: Notification) -> bool:
        if not self._channel.ready:
            return False
        try:
            self._channel.show(notification)
        except Exception:  # noqa: BLE001 - delivery is fire-and-forget
            logger.warning("Notification %r could not be delivered", notification.tag, exc_info=True)
            return False
        return True
