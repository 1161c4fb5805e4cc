# app/services/alert_service.py
# Emergency alerts + hotline directory
from __future__ import annotations
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.emergency import EmergencyAlert, EmergencyHotline
from app.schemas.emergency import AlertCreate, AlertUpdate, HotlineCreate, HotlineUpdate

SEVERITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}


# -------- Alerts --------
def list_alerts(db: Session, *, limit: int = 100, offset: int = 0) -> Sequence[EmergencyAlert]:
    stmt = select(EmergencyAlert).order_by(EmergencyAlert.issued_at.desc(), EmergencyAlert.id.desc())
    return db.scalars(stmt.limit(limit).offset(offset)).all()


def list_active_alerts(db: Session, *, homepage_only: bool = False) -> list[EmergencyAlert]:
    """
    Active alerts that have not expired, most severe first, then newest.
    Expiry only hides an alert; it never flips is_active.
    """
    now = datetime.now(timezone.utc)
    stmt = select(EmergencyAlert).where(
        EmergencyAlert.is_active == True,  # noqa: E712
        or_(EmergencyAlert.expires_at.is_(None), EmergencyAlert.expires_at > now),
    )
    if homepage_only:
        stmt = stmt.where(EmergencyAlert.show_on_homepage == True)  # noqa: E712
    rows = db.scalars(stmt.order_by(EmergencyAlert.issued_at.desc(), EmergencyAlert.id.desc())).all()
    return sorted(rows, key=lambda a: SEVERITY_RANK.get(a.severity, 9))


def get_alert(db: Session, alert_id: int) -> EmergencyAlert:
    alert = db.get(EmergencyAlert, alert_id)
    if not alert:
        raise NotFoundError(f"Alert {alert_id} not found")
    return alert


def create_alert(db: Session, payload: AlertCreate) -> EmergencyAlert:
    data = payload.model_dump(exclude_none=True)
    alert = EmergencyAlert(**data)
    db.add(alert)
    db.flush()
    return alert


def update_alert(db: Session, alert_id: int, patch: AlertUpdate) -> EmergencyAlert:
    alert = get_alert(db, alert_id)
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is not None or k in ("location", "expires_at"):
            setattr(alert, k, v)
    db.flush()
    return alert


def delete_alert(db: Session, alert_id: int) -> None:
    db.delete(get_alert(db, alert_id))
    db.flush()


# -------- Hotlines --------
def list_hotlines(db: Session, *, active_only: bool = True, category: str | None = None) -> Sequence[EmergencyHotline]:
    stmt = select(EmergencyHotline)
    if active_only:
        stmt = stmt.where(EmergencyHotline.is_active == True)  # noqa: E712
    if category:
        stmt = stmt.where(EmergencyHotline.category == category)
    stmt = stmt.order_by(EmergencyHotline.display_order, EmergencyHotline.id)
    return db.scalars(stmt).all()


def get_hotline(db: Session, hotline_id: int) -> EmergencyHotline:
    row = db.get(EmergencyHotline, hotline_id)
    if not row:
        raise NotFoundError(f"Hotline {hotline_id} not found")
    return row


def create_hotline(db: Session, payload: HotlineCreate) -> EmergencyHotline:
    row = EmergencyHotline(**payload.model_dump())
    db.add(row)
    db.flush()
    return row


def update_hotline(db: Session, hotline_id: int, patch: HotlineUpdate) -> EmergencyHotline:
    row = get_hotline(db, hotline_id)
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is not None or k in ("secondary_number", "department"):
            setattr(row, k, v)
    db.flush()
    return row


def delete_hotline(db: Session, hotline_id: int) -> None:
    db.delete(get_hotline(db, hotline_id))
    db.flush()
