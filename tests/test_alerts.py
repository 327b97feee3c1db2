from __future__ import annotations

from datetime import datetime, timedelta

from meteo.models.weather import AlertKind, HourlyForecastSeries
from meteo.services.alerts import (
    RAIN_CODES,
    evaluate,
    heat_message,
    lookahead_indices,
    rain_message,
    round_half_up,
)
from tests.fakes import make_forecast


def _series(temperatures: list[float], codes: list[int]) -> HourlyForecastSeries:
    start = datetime(2026, 7, 14)
    return HourlyForecastSeries(
        time=[start + timedelta(hours=h) for h in range(len(temperatures))],
        temperature=temperatures,
        weather_code=codes,
        precipitation_probability=[None] * len(temperatures),
    )


def test_last_hour_of_short_series_scans_nothing() -> None:
    series = _series([30.0, 30.0, 30.0], [61, 61, 61])
    assert lookahead_indices(len(series), 23) == []
    assert evaluate(series, 23, city="Paris") == []


def test_window_is_next_four_hours_clipped_to_series() -> None:
    assert lookahead_indices(24, 10) == [11, 12, 13, 14]
    assert lookahead_indices(24, 21) == [22, 23]
    assert lookahead_indices(24, 0) == [1, 2, 3, 4]


def test_current_hour_is_excluded() -> None:
    forecast = make_forecast(now_hour=10)
    hourly = forecast.hourly
    hourly.weather_code[10] = 63
    hourly.temperature[10] = 25.0
    assert evaluate(hourly, 10, city="Paris") == []


def test_rain_two_hours_ahead() -> None:
    forecast = make_forecast(now_hour=10, codes=[0, 61, 0, 0])
    alerts = evaluate(forecast.hourly, 10, city="Paris")
    assert len(alerts) == 1
    assert alerts[0].kind is AlertKind.RAIN
    assert alerts[0].value == 2
    assert alerts[0].city == "Paris"
    assert alerts[0].message == "🌧️ Rain expected in 2 hours!"


def test_rain_first_match_wins() -> None:
    forecast = make_forecast(now_hour=5, codes=[95, 61, 63, 65])
    alerts = evaluate(forecast.hourly, 5, city="Paris")
    assert [(a.kind, a.value) for a in alerts] == [(AlertKind.RAIN, 1)]
    assert alerts[0].message == "🌧️ Rain expected in 1 hour!"


def test_heat_reports_first_qualifying_hour_not_maximum() -> None:
    forecast = make_forecast(now_hour=12, temperatures=[5, 8, 12, 15])
    alerts = evaluate(forecast.hourly, 12, city="Paris")
    assert len(alerts) == 1
    assert alerts[0].kind is AlertKind.HEAT
    assert alerts[0].value == 12
    assert alerts[0].message == "🌡️ High temperature expected: 12°C"


def test_threshold_is_strict() -> None:
    forecast = make_forecast(now_hour=12, temperatures=[10.0, 10.0, 10.0, 10.0])
    assert evaluate(forecast.hourly, 12, city="Paris") == []


def test_heat_temperature_rounds_half_up() -> None:
    forecast = make_forecast(now_hour=12, temperatures=[12.5, 30.0])
    alerts = evaluate(forecast.hourly, 12, city="Paris")
    assert alerts[0].value == 13


def test_at_most_one_alert_per_kind() -> None:
    forecast = make_forecast(
        now_hour=8, temperatures=[14.0, 16.0, 18.0, 20.0], codes=[80, 81, 82, 61]
    )
    alerts = evaluate(forecast.hourly, 8, city="Oslo")
    assert [a.kind for a in alerts] == [AlertKind.RAIN, AlertKind.HEAT]
    assert [a.value for a in alerts] == [1, 14]


def test_rain_code_set() -> None:
    assert 61 in RAIN_CODES
    assert {0, 1, 2, 3, 45, 48}.isdisjoint(RAIN_CODES)


def test_messages_and_rounding() -> None:
    assert rain_message(3) == "🌧️ Rain expected in 3 hours!"
    assert heat_message(21) == "🌡️ High temperature expected: 21°C"
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(11.49) == 11
