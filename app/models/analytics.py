# app/models/analytics.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from sqlalchemy import Integer, String, DateTime, Enum as SAEnum, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType


class AnalyticsEventType(str, Enum):
    PAGE_VIEW = "page_view"
    RESOURCE_DOWNLOAD = "resource_download"
    DOWNLOAD_FAILED = "download_failed"
    VOLUNTEER_SIGNUP = "volunteer_signup"
    INCIDENT_REPORTED = "incident_reported"


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    event_type: Mapped[AnalyticsEventType] = mapped_column(
        SAEnum(
            AnalyticsEventType,
            name="analytics_event_type",
            values_callable=lambda enum_cls: [e.value for e in enum_cls],  # store "page_view", not "PAGE_VIEW"
            native_enum=False,
            validate_strings=True,
        ),
        nullable=False,
    )
    entity_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)  # "page" | "resource" | ...
    entity_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    details: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    ip: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_analytics_events_type_created", "event_type", "created_at"),
        Index("ix_analytics_events_entity", "entity_type", "entity_id"),
    )
