# app/services/weather_service.py
# OpenWeatherMap -> weather_data (one current row per location) + weather_forecast (daily rows)
from __future__ import annotations
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import httpx
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import RemoteUnavailableError
from app.core.settings import settings
from app.models.weather import WeatherData, WeatherForecast
from app.schemas.weather import WeatherCurrentOut, WeatherForecastOut, WeatherOut, WeatherSyncOut

log = logging.getLogger(__name__)

HEAT_WARNING_C = 35
HIGH_WIND_KMH = 50
OVERCAST_CLOUD_PCT = 75
FORECAST_DEFAULT_CLOUDS = 50


def _round(x: float) -> int:
    # half-up: 22.5 -> 23
    return int(math.floor(x + 0.5))


def map_condition(main: str, clouds: float) -> str:
    main = (main or "clear").lower()
    if main == "clear":
        return "sunny"
    if main == "clouds":
        return "cloudy" if clouds > OVERCAST_CLOUD_PCT else "partly-cloudy"
    if main in ("rain", "drizzle"):
        return "rainy"
    if main == "thunderstorm":
        return "stormy"
    return "partly-cloudy"


def derive_alerts(temp_c: float, wind_ms: float, main: str) -> List[str]:
    alerts: List[str] = []
    if temp_c >= HEAT_WARNING_C:
        alerts.append("Heat Warning: Extreme temperatures")
    if wind_ms * 3.6 >= HIGH_WIND_KMH:
        alerts.append("High Wind Warning")
    if (main or "").lower() == "thunderstorm":
        alerts.append("Thunderstorm Warning")
    return alerts


def _first_weather(item: Dict[str, Any]) -> Dict[str, Any]:
    w = item.get("weather") or []
    return w[0] if w else {}


def current_from_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    w = _first_weather(payload)
    main = (w.get("main") or "clear").lower()
    temp = float(payload["main"]["temp"])
    wind_ms = float((payload.get("wind") or {}).get("speed") or 0)
    clouds = float((payload.get("clouds") or {}).get("all") or 0)
    return {
        "temperature": _round(temp),
        "humidity": int(payload["main"].get("humidity") or 0),
        "wind_speed": _round(wind_ms * 3.6),
        "visibility": _round((payload.get("visibility") or 10000) / 1000),
        "condition": map_condition(main, clouds),
        "description": w.get("description") or "Clear",
        "alerts": derive_alerts(temp, wind_ms, main),
    }


def forecast_from_payload(payload: Dict[str, Any], days: int = 5) -> List[Dict[str, Any]]:
    """
    Group 3-hourly entries by calendar day (from dt_txt). High/low come from all
    temps of the day; humidity, wind, pop and weather from the day's first entry.
    """
    grouped: Dict[str, Dict[str, Any]] = {}
    for item in payload.get("list") or []:
        day = str(item.get("dt_txt", "")).split(" ")[0]
        if not day:
            continue
        temp = float(item["main"]["temp"])
        if day not in grouped:
            grouped[day] = {
                "temps": [temp],
                "humidity": int(item["main"].get("humidity") or 0),
                "wind_speed": float((item.get("wind") or {}).get("speed") or 0) * 3.6,
                "precipitation": float(item.get("pop") or 0) * 100,
                "weather": _first_weather(item),
            }
        else:
            grouped[day]["temps"].append(temp)

    out: List[Dict[str, Any]] = []
    for day, d in grouped.items():
        if len(out) >= days:
            break
        icon = map_condition(d["weather"].get("main") or "clear", FORECAST_DEFAULT_CLOUDS)
        out.append({
            "date": date.fromisoformat(day),
            "temperature_high": _round(max(d["temps"])),
            "temperature_low": _round(min(d["temps"])),
            "condition": d["weather"].get("description") or "",
            "icon": icon,
            "humidity": d["humidity"],
            "wind_speed": _round(d["wind_speed"]),
            "precipitation": _round(d["precipitation"]),
        })
    return out


def _get_json(client: httpx.Client, path: str, label: str) -> Dict[str, Any]:
    params = {
        "lat": settings.WEATHER_LAT,
        "lon": settings.WEATHER_LON,
        "appid": settings.OPENWEATHER_API_KEY,
        "units": "metric",
    }
    url = f"{settings.OPENWEATHER_BASE_URL.rstrip('/')}/{path}"
    try:
        resp = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise RemoteUnavailableError(f"OpenWeatherMap {label} request failed: {e}", status_code=500)
    if not resp.is_success:
        raise RemoteUnavailableError(f"OpenWeatherMap {label} API error: {resp.status_code}", status_code=500)
    return resp.json()


def _fetch(client: httpx.Client) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    current = _get_json(client, "weather", "current weather")
    forecast = _get_json(client, "forecast", "forecast")
    return current, forecast


def sync_weather(db: Session, *, client: Optional[httpx.Client] = None) -> WeatherSyncOut:
    if not settings.OPENWEATHER_API_KEY:
        raise RemoteUnavailableError("OPENWEATHER_API_KEY is not configured", status_code=500)

    if client is None:
        with httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS) as c:
            current_payload, forecast_payload = _fetch(c)
    else:
        current_payload, forecast_payload = _fetch(client)

    now = datetime.now(timezone.utc)
    values = current_from_payload(current_payload)
    location = settings.WEATHER_LOCATION_LABEL

    row = db.scalar(select(WeatherData).where(WeatherData.location == location))
    if row is None:
        row = WeatherData(location=location)
        db.add(row)
    for k, v in values.items():
        setattr(row, k, v)
    row.is_active = True
    row.last_updated = now

    db.execute(
        update(WeatherForecast)
        .where(WeatherForecast.is_active == True)  # noqa: E712
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    )
    days = forecast_from_payload(forecast_payload, settings.WEATHER_FORECAST_DAYS)
    for d in days:
        db.add(WeatherForecast(**d, is_active=True))
    db.flush()

    log.info("weather synced for %s: %s, %d forecast days", location, values["condition"], len(days))
    return WeatherSyncOut(
        success=True,
        current=WeatherCurrentOut.model_validate(row),
        forecast=[WeatherForecastOut(**d) for d in days],
        last_updated=now,
    )


def get_weather(db: Session) -> WeatherOut:
    current = db.scalar(
        select(WeatherData)
        .where(WeatherData.is_active == True)  # noqa: E712
        .order_by(WeatherData.last_updated.desc())
        .limit(1)
    )
    forecast = db.scalars(
        select(WeatherForecast)
        .where(WeatherForecast.is_active == True)  # noqa: E712
        .order_by(WeatherForecast.date)
    ).all()
    return WeatherOut(
        current=WeatherCurrentOut.model_validate(current) if current else None,
        forecast=[WeatherForecastOut.model_validate(f) for f in forecast],
    )
