# app/models/content.py
# Content models: Page and its ordered, typed PageSection blocks
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String, Integer, Text, Boolean, ForeignKey, DateTime, Enum, UniqueConstraint, Index, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType

PAGE_STATUSES = ("draft", "published")
PAGE_TEMPLATES = ("default", "about", "services", "news", "resources", "disaster-plan")

PageStatus = Enum(
    *PAGE_STATUSES,
    name="page_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)

PageTemplate = Enum(
    *PAGE_TEMPLATES,
    name="page_template",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(200))     # public routing key, stable once published
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, default="")  # legacy HTML blob

    meta_description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    meta_keywords: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    hero_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    hero_subtitle: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    hero_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    status: Mapped[str] = mapped_column(PageStatus, default="draft")
    template: Mapped[str] = mapped_column(PageTemplate, default="default")
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0)

    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    sections: Mapped[list["PageSection"]] = relationship(
        "PageSection",
        back_populates="page",
        order_by=lambda: [PageSection.order_index, PageSection.id],
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("slug", name="uq_pages_slug"),
        Index("ix_pages_status", "status"),
    )


class PageSection(Base):
    __tablename__ = "page_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    page_id: Mapped[int] = mapped_column(ForeignKey("pages.id", ondelete="CASCADE"), index=True)

    type: Mapped[str] = mapped_column(String(32))    # registered section type (hero, cards, stats...)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data: Mapped[dict] = mapped_column(JSONType, default=dict)  # validated against the type schema

    order_index: Mapped[int] = mapped_column(Integer, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    page: Mapped["Page"] = relationship("Page", back_populates="sections")

    __table_args__ = (
        Index("ix_page_sections_page_order", "page_id", "order_index"),
    )
