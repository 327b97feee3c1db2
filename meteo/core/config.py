from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="METEO_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    secret_key: str = Field(min_length=32)

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    session_cookie: str = Field(default="meteo_session", min_length=1, max_length=64)
    # Favorites and theme live in the session, keep it for a year.
    session_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 365, ge=60, le=60 * 60 * 24 * 365 * 2
    )

    geocoding_url: AnyHttpUrl = Field(default=OPEN_METEO_GEOCODING_URL)
    forecast_url: AnyHttpUrl = Field(default=OPEN_METEO_FORECAST_URL)
    geocoding_language: str = Field(default="fr", min_length=2, max_length=8)
    weather_user_agent: str = Field(
        default="meteo-pwa/0.1 (contact: you@example.com)",
        min_length=3,
        max_length=256,
    )
    weather_timeout_seconds: float = Field(default=5.0, ge=1.0, le=30.0)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    settings = Settings()
    if not settings.cors_origins:
        settings.cors_origins = ["http://localhost:3000", "http://localhost:8000"]
    return settings
