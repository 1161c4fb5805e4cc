# app/api/v1/endpoints/pages.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_admin, require_editor
from app.models.content import Page
from app.schemas.content import (
    ComposeIn, ComposeOut, PageCreate, PageOut, PageStatusIn, PageUpdate,
    SectionCreate, SectionDataCheckIn, SectionMoveIn, SectionOut, SectionTypeOut, SectionUpdate,
)
from app.schemas.delivery import RenderedPageOut
from app.services import content_service as svc
from app.services.composer import compose
from app.services.delivery_service import render_page
from app.services.publish_service import apply_no_store, transition_page_status
from app.services.registry_service import list_section_types, validate_section_data
from app.utils.payload_guard import enforce_section_data_size

router = APIRouter(prefix="/pages", tags=["pages"], dependencies=[Depends(require_editor)])


# ---------- Pages ----------
@router.get("", response_model=List[PageOut])
def list_pages(
    db: Session = Depends(get_db),
    status_: Optional[str] = Query(None, alias="status", pattern="^(draft|published)$"),
    q: Optional[str] = Query(None, description="Search in title or slug"),
    featured: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return svc.list_pages(db, status=status_, q=q, featured=featured, limit=limit, offset=offset)


@router.post("", response_model=PageOut, status_code=status.HTTP_201_CREATED)
def create_page(payload: PageCreate, db: Session = Depends(get_db)):
    page = svc.create_page(db, payload)
    db.commit()
    db.refresh(page)
    return page


# ---------- Static routes (before /{page_id}) ----------
@router.get("/section-types", response_model=List[SectionTypeOut])
def section_types():
    return [SectionTypeOut(**m.to_dict()) for m in list_section_types()]


@router.post("/sections/check-data")
def check_section_data(payload: SectionDataCheckIn):
    """
    Parse-before-save for the admin JSON editor. 200 with the parsed object,
    or a SchemaError (422) pointing at the offending line/path.
    """
    enforce_section_data_size(payload.text)
    data = validate_section_data(payload.type, payload.text)
    return {"valid": True, "data": data}


@router.post("/compose", response_model=ComposeOut)
def compose_blocks(payload: ComposeIn):
    return ComposeOut(html=compose(payload.blocks))


# ---------- Single page ----------
@router.get("/{page_id}", response_model=PageOut)
def get_page(page_id: int, db: Session = Depends(get_db)):
    return svc.get_page(db, page_id)


@router.patch("/{page_id}", response_model=PageOut)
def update_page(page_id: int, patch: PageUpdate, db: Session = Depends(get_db)):
    page = svc.update_page(db, page_id, patch)
    db.commit()
    db.refresh(page)
    return page


@router.delete("/{page_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_page(page_id: int, db: Session = Depends(get_db)):
    svc.delete_page(db, page_id)
    db.commit()
    return Response(status_code=204)


@router.post("/{page_id}/status", response_model=PageOut)
def set_page_status(page_id: int, body: PageStatusIn, db: Session = Depends(get_db)):
    page = svc.get_page(db, page_id)
    transition_page_status(db, page, body.status)
    db.commit()
    db.refresh(page)
    return page


@router.post("/{page_id}/compose", response_model=PageOut)
def compose_into_page(page_id: int, payload: ComposeIn, db: Session = Depends(get_db)):
    page: Page = svc.update_page(db, page_id, PageUpdate(content=compose(payload.blocks)))
    db.commit()
    db.refresh(page)
    return page


@router.get("/{page_id}/preview", response_model=RenderedPageOut)
def preview_page(page_id: int, request: Request, response: Response, db: Session = Depends(get_db)):
    """Renders drafts too; never counted as a view."""
    page = svc.get_page(db, page_id)
    out = render_page(db, page.slug, include_drafts=True, request=request)
    apply_no_store(response)
    return out


# ---------- Sections ----------
@router.get("/{page_id}/sections", response_model=List[SectionOut])
def list_sections(page_id: int, db: Session = Depends(get_db)):
    return svc.list_sections(db, page_id)


@router.post("/{page_id}/sections", response_model=SectionOut, status_code=status.HTTP_201_CREATED)
def add_section(page_id: int, payload: SectionCreate, db: Session = Depends(get_db)):
    enforce_section_data_size(payload.data)
    section = svc.add_section(db, page_id, payload)
    db.commit()
    db.refresh(section)
    return section


@router.patch("/{page_id}/sections/{section_id}", response_model=SectionOut)
def update_section(page_id: int, section_id: int, patch: SectionUpdate, db: Session = Depends(get_db)):
    enforce_section_data_size(patch.data)
    section = svc.update_section(db, page_id, section_id, patch)
    db.commit()
    db.refresh(section)
    return section


@router.delete("/{page_id}/sections/{section_id}", status_code=204)
def delete_section(page_id: int, section_id: int, db: Session = Depends(get_db)):
    svc.delete_section(db, page_id, section_id)
    db.commit()
    return Response(status_code=204)


@router.post("/{page_id}/sections/{section_id}/toggle", response_model=SectionOut)
def toggle_section(page_id: int, section_id: int, db: Session = Depends(get_db)):
    section = svc.toggle_section(db, page_id, section_id)
    db.commit()
    db.refresh(section)
    return section


@router.post("/{page_id}/sections/{section_id}/duplicate", response_model=SectionOut, status_code=status.HTTP_201_CREATED)
def duplicate_section(page_id: int, section_id: int, db: Session = Depends(get_db)):
    section = svc.duplicate_section(db, page_id, section_id)
    db.commit()
    db.refresh(section)
    return section


@router.post("/{page_id}/sections/{section_id}/move", response_model=List[SectionOut])
def move_section(page_id: int, section_id: int, body: SectionMoveIn, db: Session = Depends(get_db)):
    sections = svc.reorder_section(db, page_id, section_id, body.direction)
    db.commit()
    for s in sections:
        db.refresh(s)
    return sections
