from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from meteo.api.deps import WeatherClient
from meteo.core.errors import FetchError, NotFoundError, QueryError, WeatherError
from meteo.models.weather import CityLocation
from meteo.schemas.weather import CityRead, CitySearchResponse
from meteo.services.alerts import evaluate
from meteo.services.views import alert_reads, weather_panel

router = APIRouter(prefix="/weather")


def _http_error(e: WeatherError) -> HTTPException:
    if isinstance(e, QueryError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, FetchError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather provider unavailable",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


def _forecast_response(client: WeatherClient, city: CityLocation) -> CitySearchResponse:
    forecast = client.fetch_forecast(city.lat, city.lon)
    alerts = evaluate(forecast.hourly, forecast.origin_index, city=city.name)
    return CitySearchResponse(
        city=CityRead(name=city.name, lat=city.lat, lon=city.lon),
        weather=weather_panel(city, forecast),
        alerts=alert_reads(alerts),
    )


@router.get("/search", response_model=CitySearchResponse)
def search_city(
    client: WeatherClient,
    q: Annotated[str, Query(max_length=200)] = "",
) -> CitySearchResponse:
    try:
        city = client.resolve_city(q)
        return _forecast_response(client, city)
    except WeatherError as e:
        raise _http_error(e) from e


@router.get("/forecast", response_model=CitySearchResponse)
def forecast_for_city(
    client: WeatherClient,
    lat: Annotated[float, Query(ge=-90, le=90)],
    lon: Annotated[float, Query(ge=-180, le=180)],
    name: Annotated[str, Query(min_length=1, max_length=200)],
) -> CitySearchResponse:
    try:
        return _forecast_response(client, CityLocation(name=name, lat=lat, lon=lon))
    except WeatherError as e:
        raise _http_error(e) from e
