# app/schemas/organization.py
from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PersonnelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    position: str = Field(..., min_length=1, max_length=160)
    department: Optional[str] = Field(None, max_length=160)
    email: Optional[str] = Field(None, max_length=160)
    phone: Optional[str] = Field(None, max_length=64)
    photo_url: Optional[str] = Field(None, max_length=1024)
    bio: Optional[str] = None
    order_index: int = 0
    is_active: bool = True

class PersonnelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=160)
    position: Optional[str] = Field(None, min_length=1, max_length=160)
    department: Optional[str] = Field(None, max_length=160)
    email: Optional[str] = Field(None, max_length=160)
    phone: Optional[str] = Field(None, max_length=64)
    photo_url: Optional[str] = Field(None, max_length=1024)
    bio: Optional[str] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None

class PersonnelOut(PersonnelCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int


class OrgUnitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    position: Optional[str] = Field(None, max_length=160)
    parent_id: Optional[int] = None
    order_index: int = 0
    is_active: bool = True

class OrgUnitUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=160)
    position: Optional[str] = Field(None, max_length=160)
    parent_id: Optional[int] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None

class OrgUnitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    position: Optional[str] = None
    parent_id: Optional[int] = None
    level: int
    order_index: int
    is_active: bool

class OrgTreeNode(BaseModel):
    id: int
    name: str
    position: Optional[str] = None
    level: int
    children: List["OrgTreeNode"] = Field(default_factory=list)
