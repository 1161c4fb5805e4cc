# app/api/v1/endpoints/resources.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.resource import (
    ResourceBulkIn, ResourceBulkOut, ResourceCreate, ResourceOut, ResourceSavedOut, ResourceUpdate,
)
from app.services import resource_service as svc

router = APIRouter(prefix="/resources", tags=["resources"], dependencies=[Depends(require_editor)])


@router.get("", response_model=List[ResourceOut])
def list_resources(
    db: Session = Depends(get_db),
    status_: Optional[str] = Query(None, alias="status", pattern="^(draft|published)$"),
    category: Optional[str] = Query(None),
    file_type: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    q: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return svc.list_resources(
        db, status=status_, category=category, file_type=file_type,
        featured=featured, q=q, limit=limit, offset=offset,
    )


@router.post("", response_model=ResourceSavedOut, status_code=status.HTTP_201_CREATED)
def create_resource(payload: ResourceCreate, db: Session = Depends(get_db)):
    res, warnings = svc.create_resource(db, payload)
    db.commit()
    db.refresh(res)
    return ResourceSavedOut(resource=ResourceOut.model_validate(res), warnings=warnings)


@router.post("/bulk", response_model=ResourceBulkOut)
def bulk(payload: ResourceBulkIn, db: Session = Depends(get_db)):
    count = svc.bulk_action(db, payload.ids, payload.action)
    db.commit()
    return ResourceBulkOut(action=payload.action, count=count)


@router.get("/{resource_id}", response_model=ResourceOut)
def get_resource(resource_id: int, db: Session = Depends(get_db)):
    return svc.get_resource(db, resource_id)


@router.patch("/{resource_id}", response_model=ResourceSavedOut)
def update_resource(resource_id: int, patch: ResourceUpdate, db: Session = Depends(get_db)):
    res, warnings = svc.update_resource(db, resource_id, patch)
    db.commit()
    db.refresh(res)
    return ResourceSavedOut(resource=ResourceOut.model_validate(res), warnings=warnings)


@router.delete("/{resource_id}", status_code=204)
def delete_resource(resource_id: int, db: Session = Depends(get_db)):
    svc.delete_resource(db, resource_id)
    db.commit()
    return Response(status_code=204)
