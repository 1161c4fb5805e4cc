# app/api/v1/endpoints/emergency.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.emergency import (
    AlertCreate, AlertOut, AlertUpdate, EvacuationCenterCreate, EvacuationCenterOut, EvacuationCenterUpdate,
    HotlineCreate, HotlineOut, HotlineUpdate,
)
from app.services import alert_service as svc
from app.services import evacuation_service

router = APIRouter(tags=["emergency"], dependencies=[Depends(require_editor)])


# ===== Alerts =====
@router.get("/alerts", response_model=List[AlertOut])
def list_alerts(
    db: Session = Depends(get_db),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    return svc.list_alerts(db, limit=limit, offset=offset)


@router.post("/alerts", response_model=AlertOut, status_code=status.HTTP_201_CREATED)
def create_alert(payload: AlertCreate, db: Session = Depends(get_db)):
    alert = svc.create_alert(db, payload)
    db.commit()
    db.refresh(alert)
    return alert


@router.patch("/alerts/{alert_id}", response_model=AlertOut)
def update_alert(alert_id: int, patch: AlertUpdate, db: Session = Depends(get_db)):
    alert = svc.update_alert(db, alert_id, patch)
    db.commit()
    db.refresh(alert)
    return alert


@router.delete("/alerts/{alert_id}", status_code=204)
def delete_alert(alert_id: int, db: Session = Depends(get_db)):
    svc.delete_alert(db, alert_id)
    db.commit()
    return Response(status_code=204)


# ===== Hotlines =====
@router.get("/hotlines", response_model=List[HotlineOut])
def list_hotlines(db: Session = Depends(get_db)):
    return svc.list_hotlines(db, active_only=False)


@router.post("/hotlines", response_model=HotlineOut, status_code=status.HTTP_201_CREATED)
def create_hotline(payload: HotlineCreate, db: Session = Depends(get_db)):
    row = svc.create_hotline(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.patch("/hotlines/{hotline_id}", response_model=HotlineOut)
def update_hotline(hotline_id: int, patch: HotlineUpdate, db: Session = Depends(get_db)):
    row = svc.update_hotline(db, hotline_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/hotlines/{hotline_id}", status_code=204)
def delete_hotline(hotline_id: int, db: Session = Depends(get_db)):
    svc.delete_hotline(db, hotline_id)
    db.commit()
    return Response(status_code=204)


# ===== Evacuation centers =====
@router.get("/evacuation-centers", response_model=List[EvacuationCenterOut])
def list_evacuation_centers(
    db: Session = Depends(get_db),
    barangay: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Search in center name"),
    sort: str = Query("name", pattern="^(name|capacity|barangay)$"),
):
    return evacuation_service.list_centers(db, active_only=False, barangay=barangay, q=q, sort=sort)


@router.post("/evacuation-centers", response_model=EvacuationCenterOut, status_code=status.HTTP_201_CREATED)
def create_evacuation_center(payload: EvacuationCenterCreate, db: Session = Depends(get_db)):
    row = evacuation_service.create_center(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.get("/evacuation-centers/{center_id}", response_model=EvacuationCenterOut)
def get_evacuation_center(center_id: int, db: Session = Depends(get_db)):
    return evacuation_service.get_center(db, center_id)


@router.patch("/evacuation-centers/{center_id}", response_model=EvacuationCenterOut)
def update_evacuation_center(center_id: int, patch: EvacuationCenterUpdate, db: Session = Depends(get_db)):
    row = evacuation_service.update_center(db, center_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/evacuation-centers/{center_id}", status_code=204)
def delete_evacuation_center(center_id: int, db: Session = Depends(get_db)):
    evacuation_service.delete_center(db, center_id)
    db.commit()
    return Response(status_code=204)
