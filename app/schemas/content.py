# app/schemas/content.py
# Pydantic: requests/responses for Pages, Sections and the block composer
from __future__ import annotations
from datetime import datetime
from typing import Optional, Literal, Dict, Any, List, Union

from pydantic import BaseModel, Field, ConfigDict

PageStatus = Literal["draft", "published"]
PageTemplate = Literal["default", "about", "services", "news", "resources", "disaster-plan"]
SectionType = str  # open set, checked against the section registry in the service layer
BlockKind = Literal["heading", "text", "image", "list", "quote", "code", "html", "css", "javascript"]


# ---------- Page ----------
class PageBase(BaseModel):
    title: str = Field("", max_length=200)
    slug: Optional[str] = Field(None, max_length=200)   # blank -> derived from title
    content: str = ""
    meta_description: Optional[str] = Field(None, max_length=500)
    meta_keywords: Optional[str] = Field(None, max_length=500)
    hero_title: Optional[str] = Field(None, max_length=200)
    hero_subtitle: Optional[str] = Field(None, max_length=500)
    hero_image: Optional[str] = Field(None, max_length=1024)
    template: PageTemplate = "default"
    featured: bool = False

class PageCreate(PageBase):
    status: PageStatus = "draft"

class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    slug: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    meta_description: Optional[str] = Field(None, max_length=500)
    meta_keywords: Optional[str] = Field(None, max_length=500)
    hero_title: Optional[str] = Field(None, max_length=200)
    hero_subtitle: Optional[str] = Field(None, max_length=500)
    hero_image: Optional[str] = Field(None, max_length=1024)
    template: Optional[PageTemplate] = None
    featured: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")

class PageStatusIn(BaseModel):
    status: PageStatus

class PageOut(PageBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    slug: str
    status: PageStatus
    view_count: int
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ---------- Section ----------
class SectionCreate(BaseModel):
    type: SectionType = Field(..., max_length=32)
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    # dict from API clients, or the raw text of the admin JSON editor
    data: Union[Dict[str, Any], str, None] = None
    order_index: Optional[int] = Field(None, ge=0)   # omitted -> appended at the end
    is_active: bool = True

class SectionUpdate(BaseModel):
    type: Optional[SectionType] = Field(None, max_length=32)
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    data: Union[Dict[str, Any], str, None] = None
    order_index: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")

class SectionMoveIn(BaseModel):
    direction: Literal["up", "down"]

class SectionDataCheckIn(BaseModel):
    type: SectionType
    text: str

class SectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    page_id: int
    type: str
    title: Optional[str] = None
    content: Optional[str] = None
    data: Dict[str, Any]
    order_index: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

class SectionTypeOut(BaseModel):
    key: str
    label: str
    description: str
    json_schema: Dict[str, Any] = Field(..., alias="schema")

    model_config = ConfigDict(populate_by_name=True)


# ---------- Block composer ----------
class ComposeBlock(BaseModel):
    type: BlockKind
    content: str = ""

class ComposeIn(BaseModel):
    blocks: List[ComposeBlock]

class ComposeOut(BaseModel):
    html: str
