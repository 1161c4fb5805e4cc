# app/models/weather.py
from __future__ import annotations

from datetime import date as date_type, datetime
from typing import Optional

from sqlalchemy import Integer, String, Boolean, Date, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType

WEATHER_CONDITIONS = ("sunny", "partly-cloudy", "cloudy", "rainy", "stormy")

WeatherCondition = Enum(
    *WEATHER_CONDITIONS, name="weather_condition", native_enum=False, validate_strings=True
)


class WeatherData(Base):
    __tablename__ = "weather_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    location: Mapped[str] = mapped_column(String(160), unique=True)
    temperature: Mapped[int] = mapped_column(Integer)
    humidity: Mapped[int] = mapped_column(Integer)
    wind_speed: Mapped[int] = mapped_column(Integer)      # km/h
    visibility: Mapped[int] = mapped_column(Integer)      # km
    condition: Mapped[str] = mapped_column(WeatherCondition, default="sunny")
    description: Mapped[str] = mapped_column(String(200), default="")
    alerts: Mapped[list] = mapped_column(JSONType, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class WeatherForecast(Base):
    __tablename__ = "weather_forecast"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[date_type] = mapped_column(Date)
    temperature_high: Mapped[int] = mapped_column(Integer)
    temperature_low: Mapped[int] = mapped_column(Integer)
    condition: Mapped[str] = mapped_column(String(200))  # vendor description text
    icon: Mapped[str] = mapped_column(WeatherCondition, default="sunny")
    humidity: Mapped[int] = mapped_column(Integer)
    wind_speed: Mapped[int] = mapped_column(Integer)
    precipitation: Mapped[int] = mapped_column(Integer)  # probability, percent
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=func.now())
