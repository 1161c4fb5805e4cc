# app/schemas/site.py
from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ===== Navigation =====
class NavigationCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=120)
    path: str = Field(..., min_length=1, max_length=255)
    icon: Optional[str] = Field(None, max_length=64)
    parent_id: Optional[int] = None
    order_index: int = 0
    is_active: bool = True
    is_featured: bool = False

class NavigationUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=120)
    path: Optional[str] = Field(None, min_length=1, max_length=255)
    icon: Optional[str] = Field(None, max_length=64)
    parent_id: Optional[int] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

class NavigationOut(NavigationCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int

class NavigationNode(BaseModel):
    id: int
    label: str
    path: str
    icon: Optional[str] = None
    is_featured: bool = False
    children: List["NavigationNode"] = Field(default_factory=list)


# ===== Settings =====
class SettingIn(BaseModel):
    value: Any = None
    description: Optional[str] = Field(None, max_length=255)
    is_public: bool = False

class SettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    key: str
    value: Any = None
    description: Optional[str] = None
    is_public: bool
