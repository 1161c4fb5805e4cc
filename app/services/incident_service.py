# app/services/incident_service.py
# Public incident reports: submission with a reference number, staff triage
from __future__ import annotations
import logging
import secrets
from datetime import datetime, timezone
from typing import Optional, Sequence

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.analytics import AnalyticsEventType
from app.models.incident import IncidentReport
from app.schemas.incident import IncidentReportIn, IncidentUpdate
from app.services.analytics_service import track_event

log = logging.getLogger(__name__)

REFERENCE_ATTEMPTS = 20


def new_reference_number(db: Session, *, year: Optional[int] = None) -> str:
    """RD-<year>-<4 digits>, unique among stored reports."""
    year = year or datetime.now(timezone.utc).year
    for _ in range(REFERENCE_ATTEMPTS):
        ref = f"RD-{year}-{secrets.randbelow(9999) + 1:04d}"
        if db.scalar(select(IncidentReport.id).where(IncidentReport.reference_number == ref)) is None:
            return ref
    raise ConflictError("Could not allocate an incident reference number; try again")


def submit_report(db: Session, payload: IncidentReportIn, *, request: Optional[Request] = None) -> IncidentReport:
    row = IncidentReport(
        reference_number=new_reference_number(db),
        status="pending",
        **payload.model_dump(),
    )
    db.add(row)
    db.flush()
    track_event(
        db,
        AnalyticsEventType.INCIDENT_REPORTED,
        entity_type="incident_report",
        entity_id=row.id,
        details={"urgency": row.urgency, "incident_type": row.incident_type},
        request=request,
    )
    log.info("incident %s reported (urgency=%s)", row.reference_number, row.urgency)
    return row


def list_reports(
    db: Session,
    *,
    status: Optional[str] = None,
    urgency: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[IncidentReport]:
    stmt = select(IncidentReport)
    if status:
        stmt = stmt.where(IncidentReport.status == status)
    if urgency:
        stmt = stmt.where(IncidentReport.urgency == urgency)
    stmt = stmt.order_by(IncidentReport.date_reported.desc(), IncidentReport.id.desc())
    return db.scalars(stmt.limit(limit).offset(offset)).all()


def get_report(db: Session, report_id: int) -> IncidentReport:
    row = db.get(IncidentReport, report_id)
    if not row:
        raise NotFoundError(f"Incident report {report_id} not found")
    return row


def get_by_reference(db: Session, reference_number: str) -> IncidentReport:
    ref = (reference_number or "").strip().upper()
    row = db.scalar(select(IncidentReport).where(IncidentReport.reference_number == ref))
    if not row:
        raise NotFoundError(f"Incident report {ref} not found")
    return row


def update_report(db: Session, report_id: int, patch: IncidentUpdate) -> IncidentReport:
    row = get_report(db, report_id)
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is not None or k in ("incident_type", "location"):
            setattr(row, k, v)
    db.flush()
    return row


def delete_report(db: Session, report_id: int) -> None:
    db.delete(get_report(db, report_id))
    db.flush()
