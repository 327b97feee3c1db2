from __future__ import annotations

import json
import logging

from pydantic import BaseModel, TypeAdapter, ValidationError

from meteo.core.errors import StorageFullError
from meteo.models.weather import CityLocation, Theme
from meteo.repositories.base import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "meteo-pwa-favorites"
THEME_KEY = "meteo-pwa-theme"

# Size of the favorites value once re-escaped inside the session JSON. The cookie
# base64-encodes that JSON (x4/3) and must stay under the 4096-byte browser limit.
MAX_FAVORITES_BYTES = 2400


class StoredFavorite(BaseModel):
    name: str
    lat: float
    lon: float


_favorites_adapter = TypeAdapter(list[StoredFavorite])


class PreferencesRepository:
    def __init__(
        self, store: KeyValueStore, *, max_favorites_bytes: int = MAX_FAVORITES_BYTES
    ) -> None:
        self._store = store
        self._max_favorites_bytes = max_favorites_bytes

    def load_favorites(self) -> list[CityLocation]:
        raw = self._store.get(FAVORITES_KEY)
        if not raw:
            return []
        try:
            rows = _favorites_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable favorites stored under %s", FAVORITES_KEY)
            return []
        return [CityLocation(name=r.name, lat=r.lat, lon=r.lon) for r in rows]

    def save_favorites(self, favorites: list[CityLocation]) -> None:
        payload = [{"name": f.name, "lat": f.lat, "lon": f.lon} for f in favorites]
        encoded = json.dumps(payload, ensure_ascii=False)
        if len(json.dumps(encoded)) > self._max_favorites_bytes:
            raise StorageFullError()
        self._store.set(FAVORITES_KEY, encoded)

    def add_favorite(self, city: CityLocation) -> bool:
        favorites = self.load_favorites()
        if any(f.name == city.name for f in favorites):
            return False
        favorites.append(city)
        self.save_favorites(favorites)
        return True

    def load_theme(self) -> Theme:
        raw = self._store.get(THEME_KEY)
        if raw == Theme.DARK.value:
            return Theme.DARK
        return Theme.LIGHT

    def save_theme(self, theme: Theme) -> None:
        self._store.set(THEME_KEY, Theme(theme).value)

    def toggle_theme(self) -> Theme:
        theme = Theme.LIGHT if self.load_theme() is Theme.DARK else Theme.DARK
        self.save_theme(theme)
        return theme
