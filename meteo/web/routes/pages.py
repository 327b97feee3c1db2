from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from meteo.api.deps import (
    CurrentClientState,
    LookupService,
    Preferences,
    build_dispatcher,
)
from meteo.core.errors import StorageFullError
from meteo.models.weather import CityLocation
from meteo.schemas.weather import PermissionResponse
from meteo.services.notifications import PermissionState
from meteo.services.views import notification_payloads, notify_button, page_view
from meteo.web.deps import csrf_protect, ensure_csrf_token
from meteo.web.templates import templates

router = APIRouter()


def _back_to_index() -> RedirectResponse:
    return RedirectResponse("/ui/", status_code=303)


@router.get("/", include_in_schema=False)
def index(request: Request, state: CurrentClientState, preferences: Preferences):
    csrf_token = ensure_csrf_token(request)
    view = page_view(
        state=state,
        favorites=preferences.load_favorites(),
        theme=preferences.load_theme(),
        notifications=state.take_outbox(),
    )
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "request": request,
            "title": view.weather.city if view.weather else "Météo",
            "csrf_token": csrf_token,
            "view": view,
            "notifications_json": [n.model_dump() for n in view.notifications],
        },
    )


@router.post("/search", include_in_schema=False, dependencies=[Depends(csrf_protect)])
def search(
    service: LookupService,
    query: Annotated[str, Form(max_length=200)] = "",
):
    service.search(query)
    return _back_to_index()


@router.post(
    "/favorites/show", include_in_schema=False, dependencies=[Depends(csrf_protect)]
)
def show_favorite(
    name: Annotated[str, Form(min_length=1, max_length=200)],
    lat: Annotated[float, Form(ge=-90, le=90)],
    lon: Annotated[float, Form(ge=-180, le=180)],
    service: LookupService,
):
    service.show_city(CityLocation(name=name, lat=lat, lon=lon))
    return _back_to_index()


@router.post("/favorites", include_in_schema=False, dependencies=[Depends(csrf_protect)])
def add_current_city(state: CurrentClientState, preferences: Preferences):
    if state.city is not None:
        try:
            preferences.add_favorite(state.city)
        except StorageFullError as e:
            state.show_error(str(e))
    return _back_to_index()


@router.post("/theme/toggle", include_in_schema=False, dependencies=[Depends(csrf_protect)])
def toggle_theme(preferences: Preferences):
    preferences.toggle_theme()
    return _back_to_index()


@router.post("/error/dismiss", include_in_schema=False, dependencies=[Depends(csrf_protect)])
def dismiss_error(state: CurrentClientState):
    state.dismiss_error()
    return _back_to_index()


@router.post(
    "/notifications/permission",
    include_in_schema=False,
    response_model=PermissionResponse,
    dependencies=[Depends(csrf_protect)],
)
def report_permission(
    state: CurrentClientState,
    permission: Annotated[PermissionState, Form()],
    channel_ready: Annotated[bool, Form()] = False,
    requested: Annotated[bool, Form()] = False,
) -> PermissionResponse:
    with state.lock:
        state.notifications.channel_ready = channel_ready
        dispatcher = build_dispatcher(state)
        if requested:
            dispatcher.request_permission(permission)
        else:
            dispatcher.report(permission)
    return PermissionResponse(
        notify_button=notify_button(dispatcher.permission),
        notifications=notification_payloads(state.take_outbox()),
    )
