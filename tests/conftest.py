from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from meteo.api import deps
from meteo.core.config import Settings
from meteo.factory import create_app
from tests.fakes import FakeOpenMeteoClient, extract_csrf_token


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        secret_key="test_secret_key_must_be_32_chars_minimum",
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        geocoding_url="https://geocoding.test/v1/search",
        forecast_url="https://forecast.test/v1/forecast",
        weather_user_agent="test-agent",
        weather_timeout_seconds=1.0,
    )


@pytest.fixture()
def fake_weather() -> FakeOpenMeteoClient:
    return FakeOpenMeteoClient()


@pytest.fixture()
def client(settings: Settings, fake_weather: FakeOpenMeteoClient) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_weather_client] = lambda: fake_weather
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def csrf(client: TestClient) -> str:
    page = client.get("/ui/")
    assert page.status_code == 200, page.text
    return extract_csrf_token(page.text)
