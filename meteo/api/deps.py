from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from meteo.clients.openmeteo import OpenMeteoClient
from meteo.core.config import Settings
from meteo.repositories.preferences import PreferencesRepository
from meteo.repositories.session import SessionKeyValueStore
from meteo.services.notifications import NotificationDispatcher, OutboxChannel
from meteo.services.state import ClientState, ClientStateRegistry
from meteo.services.weather import WeatherLookupService
from meteo.web.deps import ensure_client_id


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_weather_client(request: Request) -> OpenMeteoClient:
    return request.app.state.weather_client


def get_state_registry(request: Request) -> ClientStateRegistry:
    return request.app.state.client_states


def get_preferences(request: Request) -> PreferencesRepository:
    return PreferencesRepository(SessionKeyValueStore(request.session))


def get_client_state(
    request: Request,
    registry: Annotated[ClientStateRegistry, Depends(get_state_registry)],
) -> ClientState:
    return registry.get(ensure_client_id(request))


def build_dispatcher(state: ClientState) -> NotificationDispatcher:
    channel = OutboxChannel(
        state.outbox, ready=state.notifications.channel_ready, lock=state.lock
    )
    return NotificationDispatcher(state=state.notifications, channel=channel)


def get_notification_dispatcher(
    state: Annotated[ClientState, Depends(get_client_state)],
) -> NotificationDispatcher:
    return build_dispatcher(state)


def get_lookup_service(
    client: Annotated[OpenMeteoClient, Depends(get_weather_client)],
    state: Annotated[ClientState, Depends(get_client_state)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> WeatherLookupService:
    return WeatherLookupService(client=client, state=state, dispatcher=dispatcher)


WeatherClient = Annotated[OpenMeteoClient, Depends(get_weather_client)]
Preferences = Annotated[PreferencesRepository, Depends(get_preferences)]
CurrentClientState = Annotated[ClientState, Depends(get_client_state)]
LookupService = Annotated[WeatherLookupService, Depends(get_lookup_service)]
