# app/models/resource.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, BigInteger, Text, Boolean, DateTime, Enum, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONType

FILE_TYPES = ("pdf", "doc", "docx", "image", "video", "zip")
RESOURCE_CATEGORIES = ("guide", "form", "map", "report", "plan", "manual")
RESOURCE_STATUSES = ("draft", "published")


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    file_url: Mapped[str] = mapped_column(String(1024))
    file_type: Mapped[str] = mapped_column(
        Enum(*FILE_TYPES, name="resource_file_type", native_enum=False, validate_strings=True),
        default="pdf",
    )
    file_size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    category: Mapped[str] = mapped_column(
        Enum(*RESOURCE_CATEGORIES, name="resource_category", native_enum=False, validate_strings=True),
        default="guide",
    )
    subcategory: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tags: Mapped[list] = mapped_column(JSONType, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[str] = mapped_column(
        Enum(*RESOURCE_STATUSES, name="resource_status", native_enum=False, validate_strings=True),
        default="draft",
    )
    download_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_resources_status_category", "status", "category"),
    )
