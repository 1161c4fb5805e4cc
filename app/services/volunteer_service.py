# app/services/volunteer_service.py
from __future__ import annotations
import logging
from typing import Optional, Sequence

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.analytics import AnalyticsEventType
from app.models.volunteer import VolunteerApplication
from app.schemas.admin import VolunteerApplicationIn
from app.services.analytics_service import track_event

log = logging.getLogger(__name__)


def submit_application(db: Session, payload: VolunteerApplicationIn, *, request: Optional[Request] = None) -> VolunteerApplication:
    app_row = VolunteerApplication(
        full_name=payload.full_name,
        email=str(payload.email).lower(),
        phone=payload.phone.strip(),
        barangay=payload.barangay,
        skills=payload.skills,
        availability=payload.availability,
        message=payload.message,
        status="pending",
    )
    db.add(app_row)
    db.flush()
    track_event(
        db,
        AnalyticsEventType.VOLUNTEER_SIGNUP,
        entity_type="volunteer_application",
        entity_id=app_row.id,
        details={"barangay": app_row.barangay},
        request=request,
    )
    log.info("volunteer application %s from barangay %s", app_row.id, app_row.barangay)
    return app_row


def list_applications(
    db: Session,
    *,
    status: Optional[str] = None,
    barangay: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[VolunteerApplication]:
    stmt = select(VolunteerApplication)
    if status:
        stmt = stmt.where(VolunteerApplication.status == status)
    if barangay:
        stmt = stmt.where(VolunteerApplication.barangay == barangay)
    stmt = stmt.order_by(VolunteerApplication.created_at.desc(), VolunteerApplication.id.desc())
    return db.scalars(stmt.limit(limit).offset(offset)).all()


def get_application(db: Session, application_id: int) -> VolunteerApplication:
    row = db.get(VolunteerApplication, application_id)
    if not row:
        raise NotFoundError(f"Volunteer application {application_id} not found")
    return row


def set_status(db: Session, application_id: int, status: str) -> VolunteerApplication:
    row = get_application(db, application_id)
    row.status = status
    db.flush()
    return row
