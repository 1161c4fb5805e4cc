# app/api/v1/endpoints/weather.py
from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.deps.http import get_http_client
from app.schemas.weather import WeatherOut, WeatherSyncOut
from app.services.weather_service import get_weather, sync_weather

router = APIRouter(prefix="/weather", tags=["weather"], dependencies=[Depends(require_editor)])


@router.get("", response_model=WeatherOut)
def current_weather(db: Session = Depends(get_db)):
    return get_weather(db)


@router.post("/sync", response_model=WeatherSyncOut)
def trigger_sync(db: Session = Depends(get_db), client: httpx.Client = Depends(get_http_client)):
    """Pull current conditions + 5-day forecast from OpenWeatherMap now."""
    out = sync_weather(db, client=client)
    db.commit()
    return out
