from __future__ import annotations

import math

from meteo.models.weather import AlertEvent, AlertKind, HourlyForecastSeries

# WMO weather codes for drizzle, rain, freezing rain, snow, showers and thunderstorms.
RAIN_CODES: frozenset[int] = frozenset(
    {51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 71, 73, 75, 77, 80, 81, 82, 85, 86, 95, 96, 99}
)
TEMP_THRESHOLD_C = 10.0
LOOKAHEAD_HOURS = 4


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def is_rain_code(code: int) -> bool:
    return code in RAIN_CODES


def is_warm(temperature: float) -> bool:
    return temperature > TEMP_THRESHOLD_C


def lookahead_indices(series_length: int, origin_index: int) -> list[int]:
    """Indices of the next ``LOOKAHEAD_HOURS`` hours that exist in the series."""
    return [
        idx
        for idx in range(origin_index + 1, origin_index + LOOKAHEAD_HOURS + 1)
        if 0 <= idx < series_length
    ]


def rain_message(lead_hours: int) -> str:
    plural = "s" if lead_hours > 1 else ""
    return f"🌧️ Rain expected in {lead_hours} hour{plural}!"


def heat_message(temperature: int) -> str:
    return f"🌡️ High temperature expected: {temperature}°C"


def evaluate(
    series: HourlyForecastSeries, origin_index: int, *, city: str
) -> list[AlertEvent]:
    rain_in: int | None = None
    hot_temp: int | None = None

    for idx in lookahead_indices(len(series), origin_index):
        if rain_in is not None and hot_temp is not None:
            break
        if rain_in is None and is_rain_code(series.weather_code[idx]):
            rain_in = idx - origin_index
        if hot_temp is None and is_warm(series.temperature[idx]):
            hot_temp = round_half_up(series.temperature[idx])

    alerts: list[AlertEvent] = []
    if rain_in is not None:
        alerts.append(
            AlertEvent(kind=AlertKind.RAIN, city=city, value=rain_in, message=rain_message(rain_in))
        )
    if hot_temp is not None:
        alerts.append(
            AlertEvent(kind=AlertKind.HEAT, city=city, value=hot_temp, message=heat_message(hot_temp))
        )
    return alerts
