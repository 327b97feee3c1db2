from __future__ import annotations

import logging

from meteo.clients.openmeteo import OpenMeteoClient
from meteo.core.errors import WeatherError
from meteo.models.weather import AlertEvent, CityLocation
from meteo.services.alerts import evaluate
from meteo.services.notifications import NotificationDispatcher
from meteo.services.state import ClientState

logger = logging.getLogger(__name__)


class WeatherLookupService:
    """Runs the search → forecast → alerts flow for one client."""

    def __init__(
        self,
        *,
        client: OpenMeteoClient,
        state: ClientState,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._client = client
        self._state = state
        self._dispatcher = dispatcher

    def search(self, query: str) -> bool:
        ticket = self._state.begin_search()
        try:
            city = self._client.resolve_city(query)
            return self._show(ticket, city)
        except WeatherError as e:
            self._state.fail(ticket, str(e))
            return False
        finally:
            self._state.finish(ticket)

    def show_city(self, city: CityLocation) -> bool:
        ticket = self._state.begin_search()
        try:
            return self._show(ticket, city)
        except WeatherError as e:
            self._state.fail(ticket, str(e))
            return False
        finally:
            self._state.finish(ticket)

    def _show(self, ticket: int, city: CityLocation) -> bool:
        forecast = self._client.fetch_forecast(city.lat, city.lon)
        alerts = evaluate(forecast.hourly, forecast.origin_index, city=city.name)
        if not self._state.complete(ticket, city=city, forecast=forecast, alerts=alerts):
            logger.info("Discarding stale forecast for %s (search %s superseded)", city.name, ticket)
            return False
        self._notify(alerts)
        return True

    def _notify(self, alerts: list[AlertEvent]) -> None:
        for alert in alerts:
            self._dispatcher.dispatch(alert)
