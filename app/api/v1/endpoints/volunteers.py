# app/api/v1/endpoints/volunteers.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.admin import VolunteerApplicationOut, VolunteerStatusIn
from app.services import volunteer_service as svc

router = APIRouter(prefix="/volunteers", tags=["volunteers"], dependencies=[Depends(require_editor)])


@router.get("", response_model=List[VolunteerApplicationOut])
def list_applications(
    db: Session = Depends(get_db),
    status_: Optional[str] = Query(None, alias="status", pattern="^(pending|approved|rejected)$"),
    barangay: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return svc.list_applications(db, status=status_, barangay=barangay, limit=limit, offset=offset)


@router.get("/{application_id}", response_model=VolunteerApplicationOut)
def get_application(application_id: int, db: Session = Depends(get_db)):
    return svc.get_application(db, application_id)


@router.post("/{application_id}/status", response_model=VolunteerApplicationOut)
def set_status(application_id: int, body: VolunteerStatusIn, db: Session = Depends(get_db)):
    row = svc.set_status(db, application_id, body.status)
    db.commit()
    db.refresh(row)
    return row
