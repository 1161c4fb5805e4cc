# app/services/evacuation_service.py
# Evacuation center directory: CRUD + the public listing with capacity totals
from __future__ import annotations
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.emergency import EvacuationCenter
from app.schemas.emergency import (
    EvacuationCenterCreate, EvacuationCenterOut, EvacuationCenterUpdate, EvacuationDirectoryOut,
)

SORT_ORDERS = {
    "name": (EvacuationCenter.name, EvacuationCenter.id),
    "capacity": (EvacuationCenter.capacity.desc(), EvacuationCenter.name),
    "barangay": (EvacuationCenter.barangay, EvacuationCenter.name),
}


def list_centers(
    db: Session,
    *,
    active_only: bool = True,
    barangay: Optional[str] = None,
    q: Optional[str] = None,
    sort: str = "name",
) -> Sequence[EvacuationCenter]:
    if sort not in SORT_ORDERS:
        raise ValidationError(f"Unknown sort '{sort}'", errors={"sort": "must be one of: name, capacity, barangay"})
    stmt = select(EvacuationCenter)
    if active_only:
        stmt = stmt.where(EvacuationCenter.is_active == True)  # noqa: E712
    if barangay:
        stmt = stmt.where(EvacuationCenter.barangay == barangay)
    if q:
        stmt = stmt.where(EvacuationCenter.name.ilike(f"%{q.strip()}%"))
    return db.scalars(stmt.order_by(*SORT_ORDERS[sort])).all()


def barangays(db: Session) -> List[str]:
    rows = db.scalars(
        select(EvacuationCenter.barangay)
        .where(EvacuationCenter.is_active == True)  # noqa: E712
        .distinct()
        .order_by(EvacuationCenter.barangay)
    ).all()
    return list(rows)


def directory(
    db: Session, *, barangay: Optional[str] = None, q: Optional[str] = None, sort: str = "name"
) -> EvacuationDirectoryOut:
    """Totals cover the filtered list; `barangays` always lists every active one."""
    rows = list_centers(db, active_only=True, barangay=barangay, q=q, sort=sort)
    return EvacuationDirectoryOut(
        total_centers=len(rows),
        total_capacity=sum(r.capacity for r in rows),
        barangays=barangays(db),
        items=[EvacuationCenterOut.model_validate(r) for r in rows],
    )


def get_center(db: Session, center_id: int) -> EvacuationCenter:
    row = db.get(EvacuationCenter, center_id)
    if not row:
        raise NotFoundError(f"Evacuation center {center_id} not found")
    return row


def create_center(db: Session, payload: EvacuationCenterCreate) -> EvacuationCenter:
    data = payload.model_dump()
    data["name"] = data["name"].strip()
    data["barangay"] = data["barangay"].strip()
    row = EvacuationCenter(**data)
    db.add(row)
    db.flush()
    return row


def update_center(db: Session, center_id: int, patch: EvacuationCenterUpdate) -> EvacuationCenter:
    row = get_center(db, center_id)
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is None and k not in ("latitude", "longitude", "contact"):
            continue
        setattr(row, k, v.strip() if k in ("name", "barangay") else v)
    db.flush()
    return row


def delete_center(db: Session, center_id: int) -> None:
    db.delete(get_center(db, center_id))
    db.flush()
