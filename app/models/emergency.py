# app/models/emergency.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Text, Boolean, DateTime, Enum, Float, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType

ALERT_TYPES = ("typhoon", "earthquake", "flood", "fire", "landslide", "tsunami", "general")
SEVERITY_LEVELS = ("low", "medium", "high", "critical")


class EmergencyAlert(Base):
    __tablename__ = "emergency_alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(
        Enum(*ALERT_TYPES, name="alert_type", native_enum=False, validate_strings=True), default="general"
    )
    severity: Mapped[str] = mapped_column(
        Enum(*SEVERITY_LEVELS, name="alert_severity", native_enum=False, validate_strings=True), default="low"
    )
    title: Mapped[str] = mapped_column(String(200))
    message: Mapped[str] = mapped_column(Text)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    show_on_homepage: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_emergency_alerts_active_issued", "is_active", "issued_at"),
    )


class EmergencyHotline(Base):
    __tablename__ = "emergency_hotlines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contact_name: Mapped[str] = mapped_column(String(160))
    phone_number: Mapped[str] = mapped_column(String(64))
    secondary_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    category: Mapped[str] = mapped_column(String(64), default="general")
    department: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    is_emergency: Mapped[bool] = mapped_column(Boolean, default=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class EvacuationCenter(Base):
    __tablename__ = "evacuation_centers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    barangay: Mapped[str] = mapped_column(String(64))
    capacity: Mapped[int] = mapped_column(Integer, default=0)  # persons
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    facilities: Mapped[list] = mapped_column(JSONType, default=list)
    contact: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_evacuation_centers_barangay", "barangay"),
    )
