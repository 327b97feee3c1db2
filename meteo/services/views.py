"""Pure mappings from application state to the view-models the UI binds."""

from __future__ import annotations

from meteo.models.weather import (
    AlertEvent,
    CityLocation,
    Forecast,
    HourlyForecastSeries,
    Notification,
    Theme,
)
from meteo.schemas.weather import (
    AlertRead,
    FavoriteButton,
    HourCard,
    HourStyle,
    NotificationPayload,
    NotifyButton,
    PageView,
    ThemeView,
    WeatherPanel,
)
from meteo.services.alerts import is_rain_code, is_warm, lookahead_indices, round_half_up
from meteo.services.notifications import PermissionState
from meteo.services.state import ClientState

DEFAULT_GLYPH = "🌤️"

WEATHER_GLYPHS: dict[int, str] = {
    0: "☀️", 1: "🌤️", 2: "⛅", 3: "☁️",
    45: "🌫️", 48: "🌫️",
    51: "🌦️", 53: "🌦️", 55: "🌧️",
    56: "🌨️", 57: "🌨️",
    61: "🌧️", 63: "🌧️", 65: "🌧️",
    66: "🌨️", 67: "🌨️",
    71: "🌨️", 73: "🌨️", 75: "❄️", 77: "🌨️",
    80: "🌦️", 81: "🌧️", 82: "⛈️",
    85: "🌨️", 86: "❄️",
    95: "⛈️", 96: "⛈️", 99: "⛈️",
}

NOTIFY_BUTTONS: dict[PermissionState, NotifyButton] = {
    PermissionState.DEFAULT: NotifyButton(
        state=PermissionState.DEFAULT, label="🔔 Enable notifications"
    ),
    PermissionState.GRANTED: NotifyButton(
        state=PermissionState.GRANTED, label="✅ Notifications enabled", css_class="granted"
    ),
    PermissionState.DENIED: NotifyButton(
        state=PermissionState.DENIED, label="❌ Notifications blocked", css_class="denied"
    ),
    PermissionState.UNSUPPORTED: NotifyButton(
        state=PermissionState.UNSUPPORTED,
        label="🔔 Notifications not supported",
        disabled=True,
    ),
}


def weather_glyph(code: int) -> str:
    return WEATHER_GLYPHS.get(code, DEFAULT_GLYPH)


def hour_style(code: int, temperature: float) -> HourStyle:
    if is_rain_code(code):
        return "rain"
    if is_warm(temperature):
        return "warm"
    return "neutral"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def hour_cards(series: HourlyForecastSeries, origin_index: int) -> list[HourCard]:
    cards: list[HourCard] = []
    for idx in lookahead_indices(len(series), origin_index):
        entry = series.entry(idx)
        cards.append(
            HourCard(
                hour_label=f"{entry.time.hour}h",
                glyph=weather_glyph(entry.weather_code),
                temperature=round_half_up(entry.temperature),
                style=hour_style(entry.weather_code, entry.temperature),
            )
        )
    return cards


def weather_panel(city: CityLocation, forecast: Forecast) -> WeatherPanel:
    current = forecast.current
    return WeatherPanel(
        city=city.name,
        temperature=round_half_up(current.temperature),
        glyph=weather_glyph(current.weather_code),
        wind=f"{round_half_up(current.wind_speed)} km/h",
        humidity=f"{_format_number(current.humidity)} %",
        feels_like=f"{round_half_up(current.apparent_temperature)}°C",
        hours=hour_cards(forecast.hourly, forecast.origin_index),
    )


def favorites_panel(favorites: list[CityLocation]) -> list[FavoriteButton]:
    return [FavoriteButton(name=f.name, lat=f.lat, lon=f.lon) for f in favorites]


def theme_view(theme: Theme) -> ThemeView:
    dark = theme is Theme.DARK
    return ThemeView(
        theme=theme,
        body_class="dark" if dark else "",
        toggle_glyph="☀️" if dark else "🌙",
    )


def notify_button(permission: PermissionState) -> NotifyButton:
    return NOTIFY_BUTTONS[permission]


def notification_payloads(notifications: list[Notification]) -> list[NotificationPayload]:
    return [NotificationPayload(title=n.title, body=n.body, tag=n.tag) for n in notifications]


def alert_reads(alerts: list[AlertEvent]) -> list[AlertRead]:
    return [
        AlertRead(kind=a.kind, city=a.city, value=a.value, message=a.message) for a in alerts
    ]


def page_view(
    *,
    state: ClientState,
    favorites: list[CityLocation],
    theme: Theme,
    notifications: list[Notification] | None = None,
) -> PageView:
    weather = None
    if state.weather_visible and state.city is not None and state.forecast is not None:
        weather = weather_panel(state.city, state.forecast)
    return PageView(
        weather=weather,
        favorites=favorites_panel(favorites),
        theme=theme_view(theme),
        notify_button=notify_button(state.notifications.permission),
        loading=state.loading,
        error=state.error,
        notifications=notification_payloads(notifications or []),
    )
