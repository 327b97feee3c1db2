from fastapi import APIRouter

from meteo.api.routes import preferences, weather

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(weather.router, tags=["weather"])
api_router.include_router(preferences.router, tags=["preferences"])
