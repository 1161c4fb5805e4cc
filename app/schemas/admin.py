# app/schemas/admin.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

Role = Literal["admin", "editor"]
Status = Literal["active", "inactive"]

# ===== Users =====
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None
    role: Role = "editor"
    status: Status = "active"

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None
    status: Optional[Status] = None

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    role: str
    status: str
    last_login: Optional[datetime] = None

# ===== Volunteer applications =====
class VolunteerApplicationIn(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=160)
    email: EmailStr = Field(..., max_length=320)
    phone: str = Field(..., min_length=1, max_length=32)
    barangay: str = Field(..., min_length=1, max_length=64)
    skills: List[str] = Field(default_factory=list)
    availability: Optional[str] = Field(None, max_length=64)
    message: Optional[str] = Field(None, max_length=2000)

    @field_validator("full_name", "barangay")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("field is required")
        return cleaned

    @field_validator("skills")
    @classmethod
    def _clean_skills(cls, value: List[str]) -> List[str]:
        return [s.strip() for s in value or [] if s and s.strip()]

class VolunteerApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    full_name: str
    email: str
    phone: str
    barangay: str
    skills: List[str]
    availability: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime

class VolunteerStatusIn(BaseModel):
    status: Literal["pending", "approved", "rejected"]
