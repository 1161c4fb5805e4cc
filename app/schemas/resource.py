# app/schemas/resource.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ResourceStatus = Literal["draft", "published"]


class ResourceBase(BaseModel):
    title: str = ""
    description: str = ""
    file_url: str = ""
    file_type: str = "pdf"       # enum checked by validate_resource_form for per-field messages
    file_size: Optional[int] = Field(None, ge=0)
    category: str = "guide"
    subcategory: Optional[str] = Field(None, max_length=100)
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    status: ResourceStatus = "draft"

class ResourceCreate(ResourceBase):
    pass

class ResourceUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    subcategory: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    status: Optional[ResourceStatus] = None

    model_config = ConfigDict(extra="ignore")

class ResourceOut(ResourceBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    download_count: int
    created_at: datetime
    updated_at: datetime

class ResourceSavedOut(BaseModel):
    resource: ResourceOut
    warnings: List[str] = Field(default_factory=list)

class ResourceBulkIn(BaseModel):
    ids: List[int] = Field(..., min_length=1)
    action: Literal["publish", "unpublish", "feature", "unfeature", "delete"]

class ResourceBulkOut(BaseModel):
    action: str
    count: int

class DownloadOut(BaseModel):
    resource_id: int
    url: str
    filename: str
    size: int
    content_type: str
    download_count: int
