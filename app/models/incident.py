# app/models/incident.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

INCIDENT_URGENCIES = ("low", "medium", "high")
INCIDENT_STATUSES = ("pending", "in-progress", "resolved")


class IncidentReport(Base):
    __tablename__ = "incident_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reference_number: Mapped[str] = mapped_column(String(32), unique=True)  # RD-2026-0042
    reporter_name: Mapped[str] = mapped_column(String(160))
    contact_number: Mapped[str] = mapped_column(String(32))
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    incident_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    urgency: Mapped[str] = mapped_column(
        Enum(*INCIDENT_URGENCIES, name="incident_urgency", native_enum=False, validate_strings=True), default="medium"
    )
    status: Mapped[str] = mapped_column(
        Enum(*INCIDENT_STATUSES, name="incident_status", native_enum=False, validate_strings=True), default="pending"
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    date_reported: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_incident_reports_status_reported", "status", "date_reported"),
    )
