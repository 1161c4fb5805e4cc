# app/schemas/news.py
from __future__ import annotations
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NewsStatus = Literal["draft", "published"]


class NewsCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    excerpt: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    image: Optional[str] = Field(None, max_length=1024)
    author: Optional[str] = Field(None, max_length=160)
    status: NewsStatus = "draft"
    published_on: Optional[date] = None

class NewsUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    excerpt: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    image: Optional[str] = Field(None, max_length=1024)
    author: Optional[str] = Field(None, max_length=160)
    status: Optional[NewsStatus] = None
    published_on: Optional[date] = None

class NewsOut(NewsCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime
    updated_at: datetime

class NewsListOut(BaseModel):
    total: int
    limit: int
    offset: int
    items: List[NewsOut]
