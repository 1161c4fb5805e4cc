from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType

APPLICATION_STATUSES = ("pending", "approved", "rejected")


class VolunteerApplication(Base):
    __tablename__ = "volunteer_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(160), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    barangay: Mapped[str] = mapped_column(String(64), nullable=False)
    skills: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    availability: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        Enum(*APPLICATION_STATUSES, name="volunteer_status", native_enum=False, validate_strings=True),
        default="pending",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_volunteer_applications_status_created", "status", "created_at"),
        Index("ix_volunteer_applications_barangay", "barangay"),
    )
