from __future__ import annotations


class WeatherError(Exception):
    """Base class for failures of the search/fetch flow.

    ``str(error)`` is the message shown to the user.
    """


class QueryError(WeatherError):
    def __init__(self, message: str = "Please enter a city name.") -> None:
        super().__init__(message)


class NotFoundError(WeatherError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchError(WeatherError):
    pass


class HttpError(FetchError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(FetchError):
    pass


class StorageFullError(Exception):
    def __init__(self, message: str = "Favorites are full.") -> None:
        super().__init__(message)
