# app/api/v1/endpoints/site.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_admin, require_editor
from app.schemas.site import (
    NavigationCreate, NavigationNode, NavigationOut, NavigationUpdate, SettingIn, SettingOut,
)
from app.services import site_service as svc

router = APIRouter(tags=["site"])


# ===== Navigation (editors) =====
@router.get("/navigation", response_model=List[NavigationOut], dependencies=[Depends(require_editor)])
def list_navigation(db: Session = Depends(get_db)):
    return svc.list_navigation(db)


@router.get("/navigation/tree", response_model=List[NavigationNode], dependencies=[Depends(require_editor)])
def navigation_tree(db: Session = Depends(get_db)):
    return svc.navigation_tree(db)


@router.post(
    "/navigation", response_model=NavigationOut, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_editor)],
)
def create_navigation_item(payload: NavigationCreate, db: Session = Depends(get_db)):
    row = svc.create_navigation_item(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.patch("/navigation/{item_id}", response_model=NavigationOut, dependencies=[Depends(require_editor)])
def update_navigation_item(item_id: int, patch: NavigationUpdate, db: Session = Depends(get_db)):
    row = svc.update_navigation_item(db, item_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/navigation/{item_id}", status_code=204, dependencies=[Depends(require_editor)])
def delete_navigation_item(item_id: int, db: Session = Depends(get_db)):
    svc.delete_navigation_item(db, item_id)
    db.commit()
    return Response(status_code=204)


# ===== Site settings (admins) =====
@router.get("/settings", response_model=List[SettingOut], dependencies=[Depends(require_admin)])
def list_settings(db: Session = Depends(get_db)):
    return svc.list_settings(db)


@router.get("/settings/{key}", response_model=SettingOut, dependencies=[Depends(require_admin)])
def get_setting(key: str, db: Session = Depends(get_db)):
    return svc.get_setting(db, key)


@router.put("/settings/{key}", response_model=SettingOut, dependencies=[Depends(require_admin)])
def put_setting(key: str, payload: SettingIn, db: Session = Depends(get_db)):
    row = svc.upsert_setting(db, key, payload)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/settings/{key}", status_code=204, dependencies=[Depends(require_admin)])
def delete_setting(key: str, db: Session = Depends(get_db)):
    svc.delete_setting(db, key)
    db.commit()
    return Response(status_code=204)
