from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class AlertKind(str, Enum):
    RAIN = "rain"
    HEAT = "heat"


@dataclass(frozen=True)
class CityLocation:
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class CurrentConditions:
    time: datetime | None
    temperature: float
    apparent_temperature: float
    humidity: float
    wind_speed: float
    weather_code: int


@dataclass(frozen=True)
class HourlyEntry:
    time: datetime
    temperature: float
    weather_code: int
    precipitation_probability: float | None


@dataclass(frozen=True)
class HourlyForecastSeries:
    time: list[datetime] = field(default_factory=list)
    temperature: list[float] = field(default_factory=list)
    weather_code: list[int] = field(default_factory=list)
    precipitation_probability: list[float | None] = field(default_factory=list)

    def __post_init__(self) -> None:
        lengths = {
            len(self.time),
            len(self.temperature),
            len(self.weather_code),
            len(self.precipitation_probability),
        }
        if len(lengths) > 1:
            raise ValueError("Hourly arrays must share the same length")

    def __len__(self) -> int:
        return len(self.time)

    def entry(self, index: int) -> HourlyEntry:
        return HourlyEntry(
            time=self.time[index],
            temperature=self.temperature[index],
            weather_code=self.weather_code[index],
            precipitation_probability=self.precipitation_probability[index],
        )

    def origin_index(self, now: datetime | None) -> int:
        """Index of the hourly slot containing ``now`` (local time of the city)."""
        if now is None:
            return 0
        slot = now.replace(minute=0, second=0, microsecond=0)
        for idx, ts in enumerate(self.time):
            if ts == slot:
                return idx
        return now.hour


@dataclass(frozen=True)
class Forecast:
    current: CurrentConditions
    hourly: HourlyForecastSeries

    @property
    def origin_index(self) -> int:
        return self.hourly.origin_index(self.current.time)


@dataclass(frozen=True)
class AlertEvent:
    kind: AlertKind
    city: str
    value: int
    message: str


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    tag: str
