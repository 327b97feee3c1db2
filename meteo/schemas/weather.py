from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from meteo.models.weather import AlertKind, Theme
from meteo.services.notifications import PermissionState

HourStyle = Literal["rain", "warm", "neutral"]


class CityRead(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class HourCard(BaseModel):
    hour_label: str
    glyph: str
    temperature: int
    style: HourStyle


class WeatherPanel(BaseModel):
    city: str
    temperature: int
    glyph: str
    wind: str
    humidity: str
    feels_like: str
    hours: list[HourCard] = Field(default_factory=list, max_length=4)


class FavoriteButton(BaseModel):
    name: str
    lat: float
    lon: float


class ThemeView(BaseModel):
    theme: Theme
    body_class: str
    toggle_glyph: str


class NotifyButton(BaseModel):
    state: PermissionState
    label: str
    disabled: bool = False
    css_class: str | None = None


class NotificationPayload(BaseModel):
    title: str
    body: str
    tag: str


class AlertRead(BaseModel):
    kind: AlertKind
    city: str
    value: int
    message: str


class PageView(BaseModel):
    weather: WeatherPanel | None = None
    favorites: list[FavoriteButton] = Field(default_factory=list)
    theme: ThemeView
    notify_button: NotifyButton
    loading: bool = False
    error: str | None = None
    notifications: list[NotificationPayload] = Field(default_factory=list)


class CitySearchResponse(BaseModel):
    city: CityRead
    weather: WeatherPanel
    alerts: list[AlertRead] = Field(default_factory=list)


class ThemeUpdate(BaseModel):
    theme: Theme


class PermissionResponse(BaseModel):
    notify_button: NotifyButton
    notifications: list[NotificationPayload] = Field(default_factory=list)
