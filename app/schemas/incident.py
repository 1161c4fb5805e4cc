# app/schemas/incident.py
from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Urgency = Literal["low", "medium", "high"]
IncidentStatus = Literal["pending", "in-progress", "resolved"]


class IncidentReportIn(BaseModel):
    reporter_name: str = Field(..., min_length=1, max_length=160)
    contact_number: str = Field(..., min_length=1, max_length=32)
    location: Optional[str] = Field(None, max_length=200)
    incident_type: Optional[str] = Field(None, max_length=64)
    description: Optional[str] = Field(None, max_length=5000)
    urgency: Urgency = "medium"
    image_url: Optional[str] = Field(None, max_length=1024)

    @field_validator("reporter_name", "contact_number")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("field is required")
        return cleaned

    @field_validator("urgency", mode="before")
    @classmethod
    def _lower_urgency(cls, value):
        # the public form posts LOW / MEDIUM / HIGH
        return value.lower() if isinstance(value, str) else value

class IncidentReceiptOut(BaseModel):
    reference_number: str
    status: IncidentStatus

class IncidentUpdate(BaseModel):
    status: Optional[IncidentStatus] = None
    urgency: Optional[Urgency] = None
    incident_type: Optional[str] = Field(None, max_length=64)
    location: Optional[str] = Field(None, max_length=200)

class IncidentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    reference_number: str
    reporter_name: str
    contact_number: str
    location: Optional[str] = None
    incident_type: Optional[str] = None
    description: Optional[str] = None
    urgency: Urgency
    status: IncidentStatus
    image_url: Optional[str] = None
    date_reported: datetime
    updated_at: datetime
