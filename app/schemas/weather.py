# app/schemas/weather.py
from __future__ import annotations
from datetime import date as date_type, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class WeatherCurrentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    location: str
    temperature: int
    humidity: int
    wind_speed: int
    visibility: int
    condition: str
    description: str
    alerts: List[str]
    last_updated: datetime

class WeatherForecastOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    date: date_type
    temperature_high: int
    temperature_low: int
    condition: str
    icon: str
    humidity: int
    wind_speed: int
    precipitation: int

class WeatherOut(BaseModel):
    current: Optional[WeatherCurrentOut] = None
    forecast: List[WeatherForecastOut]

class WeatherSyncOut(BaseModel):
    success: bool
    current: WeatherCurrentOut
    forecast: List[WeatherForecastOut]
    last_updated: datetime
