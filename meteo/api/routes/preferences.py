from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from meteo.api.deps import Preferences
from meteo.core.errors import StorageFullError
from meteo.models.weather import CityLocation
from meteo.schemas.weather import CityRead, ThemeUpdate

router = APIRouter()


def _favorites(preferences: Preferences) -> list[CityRead]:
    return [
        CityRead(name=f.name, lat=f.lat, lon=f.lon) for f in preferences.load_favorites()
    ]


@router.get("/favorites", response_model=list[CityRead])
def list_favorites(preferences: Preferences) -> list[CityRead]:
    return _favorites(preferences)


@router.post("/favorites", response_model=list[CityRead])
def add_favorite(
    payload: CityRead, preferences: Preferences, response: Response
) -> list[CityRead]:
    try:
        added = preferences.add_favorite(
            CityLocation(name=payload.name, lat=payload.lat, lon=payload.lon)
        )
    except StorageFullError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    response.status_code = status.HTTP_201_CREATED if added else status.HTTP_200_OK
    return _favorites(preferences)


@router.get("/theme", response_model=ThemeUpdate)
def get_theme(preferences: Preferences) -> ThemeUpdate:
    return ThemeUpdate(theme=preferences.load_theme())


@router.put("/theme", response_model=ThemeUpdate)
def set_theme(payload: ThemeUpdate, preferences: Preferences) -> ThemeUpdate:
    preferences.save_theme(payload.theme)
    return ThemeUpdate(theme=preferences.load_theme())
