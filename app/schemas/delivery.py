# app/schemas/delivery.py
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

class RenderedSectionOut(BaseModel):
    id: int
    type: str
    title: str | None = None
    order_index: int
    data: Dict[str, Any]
    html: str

class RenderedPageOut(BaseModel):
    id: int
    slug: str
    title: str
    status: str = Field(description="Always 'published' on the public surface")
    template: str
    meta_description: str | None = None
    meta_keywords: str | None = None
    hero: Dict[str, Optional[str]] | None = None
    content: str = ""
    sections: List[RenderedSectionOut]
    html: str
    view_count: int
    updated_at: datetime | None = None
    published_at: datetime | None = None

class DeliveryPageSummaryOut(BaseModel):
    id: int
    slug: str
    title: str
    template: str
    featured: bool
    meta_description: str | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

class DeliveryPageListOut(BaseModel):
    total: int
    limit: int
    offset: int
    items: list[DeliveryPageSummaryOut]
