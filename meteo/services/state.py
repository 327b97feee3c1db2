from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass, field

from meteo.models.weather import AlertEvent, CityLocation, Forecast, Notification
from meteo.services.notifications import NotificationState


@dataclass
class ClientState:
    """Everything one browser client sees between requests.

    Searches are serialized by a sequence number: only the result of the most
    recently started search may update the display.
    """

    seq: int = 0
    loading: bool = False
    weather_visible: bool = False
    error: str | None = None
    city: CityLocation | None = None
    forecast: Forecast | None = None
    alerts: list[AlertEvent] = field(default_factory=list)
    notifications: NotificationState = field(default_factory=NotificationState)
    outbox: list[Notification] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def begin_search(self) -> int:
        with self.lock:
            self.seq += 1
            self.loading = True
            self.weather_visible = False
            self.error = None
            return self.seq

    def is_latest(self, ticket: int) -> bool:
        with self.lock:
            return ticket == self.seq

    def complete(
        self,
        ticket: int,
        *,
        city: CityLocation,
        forecast: Forecast,
        alerts: list[AlertEvent],
    ) -> bool:
        with self.lock:
            if ticket != self.seq:
                return False
            self.city = city
            self.forecast = forecast
            self.alerts = list(alerts)
            self.weather_visible = True
            return True

    def fail(self, ticket: int, message: str) -> bool:
        with self.lock:
            if ticket != self.seq:
                return False
            self.error = message
            return True

    def finish(self, ticket: int) -> None:
        with self.lock:
            if ticket == self.seq:
                self.loading = False

    def show_error(self, message: str) -> None:
        with self.lock:
            self.error = message

    def dismiss_error(self) -> None:
        with self.lock:
            self.error = None

    def take_outbox(self) -> list[Notification]:
        with self.lock:
            pending = list(self.outbox)
            self.outbox.clear()
            return pending


class ClientStateRegistry:
    def __init__(self, *, max_clients: int = 10_000) -> None:
        self._max_clients = max(int(max_clients), 1)
        self._lock = threading.Lock()
        self._by_client: OrderedDict[str, ClientState] = OrderedDict()

    def get(self, client_id: str) -> ClientState:
        with self._lock:
            state = self._by_client.get(client_id)
            if state is None:
                state = ClientState()
                self._by_client[client_id] = state
                while len(self._by_client) > self._max_clients:
                    self._by_client.popitem(last=False)
            else:
                self._by_client.move_to_end(client_id)
            return state

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_client)
