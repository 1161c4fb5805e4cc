# app/api/v1/endpoints/organization.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.organization import (
    OrgTreeNode, OrgUnitCreate, OrgUnitOut, OrgUnitUpdate,
    PersonnelCreate, PersonnelOut, PersonnelUpdate,
)
from app.services import organization_service as svc

router = APIRouter(tags=["organization"], dependencies=[Depends(require_editor)])


# ===== Key personnel =====
@router.get("/personnel", response_model=List[PersonnelOut])
def list_personnel(db: Session = Depends(get_db)):
    return svc.list_personnel(db, active_only=False)


@router.post("/personnel", response_model=PersonnelOut, status_code=status.HTTP_201_CREATED)
def create_personnel(payload: PersonnelCreate, db: Session = Depends(get_db)):
    row = svc.create_personnel(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.patch("/personnel/{person_id}", response_model=PersonnelOut)
def update_personnel(person_id: int, patch: PersonnelUpdate, db: Session = Depends(get_db)):
    row = svc.update_personnel(db, person_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/personnel/{person_id}", status_code=204)
def delete_personnel(person_id: int, db: Session = Depends(get_db)):
    svc.delete_personnel(db, person_id)
    db.commit()
    return Response(status_code=204)


# ===== Organizational hierarchy =====
@router.get("/organization/units", response_model=List[OrgUnitOut])
def list_units(db: Session = Depends(get_db)):
    return svc.list_units(db)


@router.get("/organization/tree", response_model=List[OrgTreeNode])
def tree(db: Session = Depends(get_db)):
    return svc.organization_tree(db, active_only=False)


@router.post("/organization/units", response_model=OrgUnitOut, status_code=status.HTTP_201_CREATED)
def create_unit(payload: OrgUnitCreate, db: Session = Depends(get_db)):
    row = svc.create_unit(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.patch("/organization/units/{unit_id}", response_model=OrgUnitOut)
def update_unit(unit_id: int, patch: OrgUnitUpdate, db: Session = Depends(get_db)):
    row = svc.update_unit(db, unit_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/organization/units/{unit_id}", status_code=204)
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    svc.delete_unit(db, unit_id)
    db.commit()
    return Response(status_code=204)
