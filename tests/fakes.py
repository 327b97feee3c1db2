from __future__ import annotations

import re
from datetime import datetime, timedelta

from meteo.core.errors import NotFoundError, QueryError, WeatherError
from meteo.models.weather import (
    CityLocation,
    CurrentConditions,
    Forecast,
    HourlyForecastSeries,
    Notification,
)

PARIS = CityLocation(name="Paris, Île-de-France, France", lat=48.85, lon=2.35)
OSLO = CityLocation(name="Oslo, Oslo, Norway", lat=59.9139, lon=10.7522)

DAY = datetime(2026, 7, 14)


def make_forecast(
    *,
    now_hour: int = 10,
    temperatures: list[float] | None = None,
    codes: list[int] | None = None,
    hours: int = 24,
    current_temperature: float = 18.4,
    current_code: int = 1,
) -> Forecast:
    """Forecast for one local day; ``temperatures``/``codes`` override hours after ``now_hour``."""
    temps = [8.0] * hours
    weather = [0] * hours
    for offset, value in enumerate(temperatures or [], start=1):
        if now_hour + offset < hours:
            temps[now_hour + offset] = value
    for offset, value in enumerate(codes or [], start=1):
        if now_hour + offset < hours:
            weather[now_hour + offset] = value
    return Forecast(
        current=CurrentConditions(
            time=DAY.replace(hour=now_hour, minute=15),
            temperature=current_temperature,
            apparent_temperature=current_temperature - 1.6,
            humidity=62.0,
            wind_speed=11.6,
            weather_code=current_code,
        ),
        hourly=HourlyForecastSeries(
            time=[DAY + timedelta(hours=h) for h in range(hours)],
            temperature=temps,
            weather_code=weather,
            precipitation_probability=[0.0] * hours,
        ),
    )


class FakeOpenMeteoClient:
    def __init__(self) -> None:
        self.locations: dict[str, CityLocation] = {"paris": PARIS, "oslo": OSLO}
        self.forecast: Forecast = make_forecast()
        self.forecast_error: WeatherError | None = None
        self.forecast_calls: list[tuple[float, float]] = []

    def close(self) -> None:
        return None

    def resolve_city(self, query: str) -> CityLocation:
        name = (query or "").strip()
        if not name:
            raise QueryError()
        try:
            return self.locations[name.lower()]
        except KeyError:
            raise NotFoundError(f'City "{name}" not found.') from None

    def fetch_forecast(self, lat: float, lon: float) -> Forecast:
        self.forecast_calls.append((lat, lon))
        if self.forecast_error is not None:
            raise self.forecast_error
        return self.forecast


class RecordingChannel:
    def __init__(self, *, ready: bool = True, fail: bool = False) -> None:
        self.ready = ready
        self.fail = fail
        self.shown: list[Notification] = []

    def show(self, notification: Notification) -> None:
        if self.fail:
            raise RuntimeError("channel closed")
        self.shown.append(notification)


def extract_csrf_token(html: str) -> str:
    match = re.search(r'name="csrf_token" value="([^"]+)"', html)
    assert match, "CSRF token input not found"
    return match.group(1)
