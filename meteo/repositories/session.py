from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any


class SessionKeyValueStore:
    """String store over a session mapping (``request.session`` in the web app).

    The signed session cookie plays the part of the browser's local storage:
    one store per browser, kept across visits.
    """

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def get(self, key: str) -> str | None:
        value = self._session.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        self._session[key] = value
