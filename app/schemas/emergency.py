# app/schemas/emergency.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

AlertType = Literal["typhoon", "earthquake", "flood", "fire", "landslide", "tsunami", "general"]
Severity = Literal["low", "medium", "high", "critical"]


# ===== Alerts =====
class AlertCreate(BaseModel):
    type: AlertType = "general"
    severity: Severity = "low"
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True
    show_on_homepage: bool = True

class AlertUpdate(BaseModel):
    type: Optional[AlertType] = None
    severity: Optional[Severity] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    message: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None
    show_on_homepage: Optional[bool] = None

class AlertOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    type: AlertType
    severity: Severity
    title: str
    message: str
    location: Optional[str] = None
    issued_at: datetime
    expires_at: Optional[datetime] = None
    is_active: bool
    show_on_homepage: bool


# ===== Hotlines =====
class HotlineCreate(BaseModel):
    contact_name: str = Field(..., min_length=1, max_length=160)
    phone_number: str = Field(..., min_length=1, max_length=64)
    secondary_number: Optional[str] = Field(None, max_length=64)
    category: str = Field("general", max_length=64)
    department: Optional[str] = Field(None, max_length=160)
    is_emergency: bool = True
    display_order: int = 0
    is_active: bool = True

class HotlineUpdate(BaseModel):
    contact_name: Optional[str] = Field(None, min_length=1, max_length=160)
    phone_number: Optional[str] = Field(None, min_length=1, max_length=64)
    secondary_number: Optional[str] = Field(None, max_length=64)
    category: Optional[str] = Field(None, max_length=64)
    department: Optional[str] = Field(None, max_length=160)
    is_emergency: Optional[bool] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None

class HotlineOut(HotlineCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int


# ===== Evacuation centers =====
def _clean_facilities(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    return [f.strip() for f in value if f and f.strip()]

class EvacuationCenterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    barangay: str = Field(..., min_length=1, max_length=64)
    capacity: int = Field(..., ge=0)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    facilities: List[str] = Field(default_factory=list)
    contact: Optional[str] = Field(None, max_length=64)
    is_active: bool = True

    @field_validator("facilities")
    @classmethod
    def _strip_facilities(cls, value):
        return _clean_facilities(value)

class EvacuationCenterUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    barangay: Optional[str] = Field(None, min_length=1, max_length=64)
    capacity: Optional[int] = Field(None, ge=0)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    facilities: Optional[List[str]] = None
    contact: Optional[str] = Field(None, max_length=64)
    is_active: Optional[bool] = None

    @field_validator("facilities")
    @classmethod
    def _strip_facilities(cls, value):
        return _clean_facilities(value)

class EvacuationCenterOut(EvacuationCenterCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int

    @computed_field  # type: ignore[misc]
    @property
    def map_url(self) -> Optional[str]:
        if self.latitude is None or self.longitude is None:
            return None
        return f"https://www.google.com/maps?q={self.latitude},{self.longitude}"

class EvacuationDirectoryOut(BaseModel):
    total_centers: int
    total_capacity: int
    barangays: List[str]
    items: List[EvacuationCenterOut]
