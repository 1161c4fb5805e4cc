# app/api/v1/endpoints/analytics.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.analytics import DashboardOut
from app.services.analytics_service import dashboard

router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(require_editor)])


@router.get("/dashboard", response_model=DashboardOut)
def get_dashboard(
    db: Session = Depends(get_db),
    days: int = Query(30, ge=1, le=365),
    top: int = Query(5, ge=1, le=50),
):
    return dashboard(db, days=days, top=top)
