from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from meteo.core.config import OPEN_METEO_FORECAST_URL, OPEN_METEO_GEOCODING_URL
from meteo.core.errors import HttpError, NotFoundError, ParseError, QueryError
from meteo.models.weather import (
    CityLocation,
    CurrentConditions,
    Forecast,
    HourlyForecastSeries,
)

logger = logging.getLogger(__name__)

CURRENT_FIELDS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
]
HOURLY_FIELDS = ["temperature_2m", "weather_code", "precipitation_probability"]

GEOCODING_FAILED = "Geocoding failed."
FORECAST_FAILED = "Could not retrieve weather data."


def format_city_label(name: str, admin1: str | None, country: str | None) -> str:
    # "Paris, Île-de-France, France"
    return ", ".join([name, *(part for part in (admin1, country) if part)])


def _parse_local_time(value: Any) -> datetime:
    # Open-Meteo returns local wall-clock time without offset, e.g. "2026-01-30T22:00".
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO time string, got {value!r}")
    return datetime.fromisoformat(value)


class OpenMeteoClient:
    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        language: str = "fr",
        geocoding_url: str = OPEN_METEO_GEOCODING_URL,
        forecast_url: str = OPEN_METEO_FORECAST_URL,
    ) -> None:
        self._geocoding_url = geocoding_url
        self._forecast_url = forecast_url
        self._language = language
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
        )

    def close(self) -> None:
        self._client.close()

    def resolve_city(self, query: str) -> CityLocation:
        name = (query or "").strip()
        if not name:
            raise QueryError()

        params = {"name": name, "count": 1, "language": self._language, "format": "json"}
        try:
            resp = self._client.get(self._geocoding_url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Geocoding request for %r failed: %s", name, e)
            raise HttpError(GEOCODING_FAILED) from e
        if resp.is_error:
            logger.warning("Geocoding returned HTTP %s for %r", resp.status_code, name)
            raise NotFoundError(GEOCODING_FAILED, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ParseError(GEOCODING_FAILED) from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list) or not results:
            raise NotFoundError(f'City "{name}" not found.')

        first = results[0]
        try:
            location = CityLocation(
                name=format_city_label(
                    str(first["name"]),
                    _str_or_none(first.get("admin1")),
                    _str_or_none(first.get("country")),
                ),
                lat=float(first["latitude"]),
                lon=float(first["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(GEOCODING_FAILED) from e
        logger.debug("Resolved %r to %s (%s, %s)", name, location.name, location.lat, location.lon)
        return location

    def fetch_forecast(self, lat: float, lon: float) -> Forecast:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "timezone": "auto",
            "forecast_days": 1,
        }
        try:
            resp = self._client.get(self._forecast_url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Forecast request for (%s, %s) failed: %s", lat, lon, e)
            raise HttpError(FORECAST_FAILED) from e
        if resp.is_error:
            logger.warning("Forecast returned HTTP %s for (%s, %s)", resp.status_code, lat, lon)
            raise HttpError(FORECAST_FAILED, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ParseError(FORECAST_FAILED) from e

        try:
            return self._parse_forecast(payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Unexpected forecast payload for (%s, %s): %s", lat, lon, e)
            raise ParseError(FORECAST_FAILED) from e

    @staticmethod
    def _parse_forecast(payload: dict[str, Any]) -> Forecast:
        current: dict[str, Any] = payload["current"]
        hourly: dict[str, Any] = payload["hourly"]

        raw_time = current.get("time")
        conditions = CurrentConditions(
            time=_parse_local_time(raw_time) if raw_time is not None else None,
            temperature=float(current["temperature_2m"]),
            apparent_temperature=float(current["apparent_temperature"]),
            humidity=float(current["relative_humidity_2m"]),
            wind_speed=float(current["wind_speed_10m"]),
            weather_code=int(current["weather_code"]),
        )

        times = [_parse_local_time(t) for t in hourly["time"]]
        probabilities = hourly.get("precipitation_probability")
        if probabilities is None:
            probabilities = [None] * len(times)
        series = HourlyForecastSeries(
            time=times,
            temperature=[float(t) for t in hourly["temperature_2m"]],
            weather_code=[int(c) for c in hourly["weather_code"]],
            precipitation_probability=[_float_or_none(p) for p in probabilities],
        )
        return Forecast(current=conditions, hourly=series)


def _float_or_none(v: Any) -> float | None:
    try:
        if v is None:
            return None
        return float(v)
    except Exception:
        return None


def _str_or_none(v: Any) -> str | None:
    if v is None:
        return None
    if isinstance(v, str):
        return v
    return str(v)
