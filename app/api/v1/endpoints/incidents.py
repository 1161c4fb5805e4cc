# app/api/v1/endpoints/incidents.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_admin, require_editor
from app.schemas.incident import IncidentOut, IncidentUpdate
from app.services import incident_service as svc

router = APIRouter(prefix="/incidents", tags=["incidents"], dependencies=[Depends(require_editor)])


@router.get("", response_model=List[IncidentOut])
def list_reports(
    db: Session = Depends(get_db),
    status_: Optional[str] = Query(None, alias="status", pattern="^(pending|in-progress|resolved)$"),
    urgency: Optional[str] = Query(None, pattern="^(low|medium|high)$"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return svc.list_reports(db, status=status_, urgency=urgency, limit=limit, offset=offset)


@router.get("/{report_id}", response_model=IncidentOut)
def get_report(report_id: int, db: Session = Depends(get_db)):
    return svc.get_report(db, report_id)


@router.patch("/{report_id}", response_model=IncidentOut)
def update_report(report_id: int, patch: IncidentUpdate, db: Session = Depends(get_db)):
    row = svc.update_report(db, report_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{report_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_report(report_id: int, db: Session = Depends(get_db)):
    svc.delete_report(db, report_id)
    db.commit()
    return Response(status_code=204)
