# app/services/content_service.py
# Business rules for Pages and their ordered PageSections
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.content import Page, PageSection
from app.schemas.content import PageCreate, PageUpdate, SectionCreate, SectionUpdate
from app.services.publish_service import transition_page_status
from app.services.registry_service import require_section_type, validate_section_data
from app.utils.slugs import derive_slug

log = logging.getLogger(__name__)

PAGE_PATCH_FIELDS = (
    "title", "content", "meta_description", "meta_keywords",
    "hero_title", "hero_subtitle", "hero_image", "template", "featured",
)


# -------- Pages --------
def get_page(db: Session, page_id: int) -> Page:
    page = db.get(Page, page_id)
    if not page:
        raise NotFoundError(f"Page {page_id} not found")
    return page


def get_page_by_slug(db: Session, slug: str) -> Optional[Page]:
    return db.scalar(select(Page).where(Page.slug == slug))


def _normalise_slug(raw: Optional[str], title: str) -> str:
    slug = derive_slug(raw) if raw and raw.strip() else derive_slug(title)
    if not slug:
        raise ValidationError("Slug cannot be empty", errors={"slug": "could not derive a slug from the title"})
    return slug


def _ensure_slug_free(db: Session, slug: str, *, exclude_id: Optional[int] = None) -> None:
    stmt = select(Page.id).where(Page.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Page.id != exclude_id)
    if db.scalar(stmt.limit(1)) is not None:
        raise ConflictError(f"Slug '{slug}' is already in use")


def _flush_page(db: Session, slug: str) -> None:
    # the unique constraint catches the race the lookup above cannot
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Slug '{slug}' is already in use")


def create_page(db: Session, payload: PageCreate) -> Page:
    errors: Dict[str, str] = {}
    if not (payload.title or "").strip():
        errors["title"] = "Title is required"
    if not (payload.content or "").strip():
        errors["content"] = "Content is required"
    if errors:
        raise ValidationError("Page is incomplete", errors=errors)

    slug = _normalise_slug(payload.slug, payload.title)
    _ensure_slug_free(db, slug)

    page = Page(
        slug=slug,
        title=payload.title.strip(),
        content=payload.content,
        meta_description=payload.meta_description,
        meta_keywords=payload.meta_keywords,
        hero_title=payload.hero_title,
        hero_subtitle=payload.hero_subtitle,
        hero_image=payload.hero_image,
        template=payload.template,
        featured=payload.featured,
        status="draft",
        view_count=0,
    )
    db.add(page)
    _flush_page(db, slug)

    if payload.status == "published":
        transition_page_status(db, page, "published")

    log.info("page created id=%s slug=%s", page.id, page.slug)
    return page


def update_page(db: Session, page_id: int, patch: PageUpdate) -> Page:
    page = get_page(db, page_id)
    data = patch.model_dump(exclude_unset=True)

    if data.get("title") is not None and not data["title"].strip():
        raise ValidationError("Page is incomplete", errors={"title": "Title is required"})
    if data.get("content") is not None and not data["content"].strip():
        raise ValidationError("Page is incomplete", errors={"content": "Content is required"})

    if data.get("slug") is not None:
        slug = _normalise_slug(data["slug"], data.get("title") or page.title)
        if slug != page.slug:
            if page.status == "published":
                raise ConflictError("Slug of a published page cannot change; unpublish it first")
            _ensure_slug_free(db, slug, exclude_id=page.id)
            page.slug = slug

    for field in PAGE_PATCH_FIELDS:
        if field in data and data[field] is not None:
            value = data[field]
            setattr(page, field, value.strip() if field == "title" else value)

    _flush_page(db, page.slug)
    return page


def delete_page(db: Session, page_id: int) -> None:
    page = get_page(db, page_id)
    db.delete(page)
    db.flush()
    log.info("page deleted id=%s", page_id)


def list_pages(
    db: Session,
    *,
    status: Optional[str] = None,
    q: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Page]:
    stmt = select(Page)
    if status:
        stmt = stmt.where(Page.status == status)
    if featured is not None:
        stmt = stmt.where(Page.featured == featured)
    if q:
        like = f"%{q}%"
        stmt = stmt.where(or_(Page.title.ilike(like), Page.slug.ilike(like)))
    stmt = stmt.order_by(Page.updated_at.desc(), Page.id.desc()).limit(limit).offset(offset)
    return db.scalars(stmt).all()


# -------- Sections --------
def list_sections(db: Session, page_id: int, *, active_only: bool = False) -> List[PageSection]:
    get_page(db, page_id)
    stmt = select(PageSection).where(PageSection.page_id == page_id)
    if active_only:
        stmt = stmt.where(PageSection.is_active == True)  # noqa: E712
    stmt = stmt.order_by(PageSection.order_index, PageSection.id)
    return list(db.scalars(stmt).all())


def get_section(db: Session, page_id: int, section_id: int) -> PageSection:
    section = db.get(PageSection, section_id)
    if not section or section.page_id != page_id:
        raise NotFoundError(f"Section {section_id} not found on page {page_id}")
    return section


def _next_order_index(db: Session, page_id: int) -> int:
    current = db.scalar(select(func.max(PageSection.order_index)).where(PageSection.page_id == page_id))
    return (current or 0) + 1


def add_section(db: Session, page_id: int, payload: SectionCreate) -> PageSection:
    get_page(db, page_id)
    require_section_type(payload.type)
    data = validate_section_data(payload.type, payload.data)

    order_index = payload.order_index
    if order_index is None:
        order_index = _next_order_index(db, page_id)

    section = PageSection(
        page_id=page_id,
        type=payload.type,
        title=payload.title,
        content=payload.content,
        data=data,
        order_index=order_index,
        is_active=payload.is_active,
    )
    db.add(section)
    db.flush()
    return section


def update_section(db: Session, page_id: int, section_id: int, patch: SectionUpdate) -> PageSection:
    section = get_section(db, page_id, section_id)
    data = patch.model_dump(exclude_unset=True)

    new_type = data.get("type") or section.type
    if "type" in data or "data" in data:
        # a type change re-validates the stored data against the new schema
        raw = data["data"] if "data" in data else section.data
        section.data = validate_section_data(new_type, raw)
        section.type = new_type

    for field in ("title", "content"):
        if field in data:
            setattr(section, field, data[field])
    if data.get("order_index") is not None:
        section.order_index = data["order_index"]
    if data.get("is_active") is not None:
        section.is_active = data["is_active"]

    db.flush()
    return section


def delete_section(db: Session, page_id: int, section_id: int) -> None:
    section = get_section(db, page_id, section_id)
    db.delete(section)
    db.flush()


def toggle_section(db: Session, page_id: int, section_id: int) -> PageSection:
    section = get_section(db, page_id, section_id)
    section.is_active = not section.is_active
    db.flush()
    return section


def duplicate_section(db: Session, page_id: int, section_id: int) -> PageSection:
    src = get_section(db, page_id, section_id)
    copy = PageSection(
        page_id=page_id,
        type=src.type,
        title=f"{src.title} (Copy)" if src.title else "(Copy)",
        content=src.content,
        data=dict(src.data or {}),
        order_index=_next_order_index(db, page_id),
        is_active=src.is_active,
    )
    db.add(copy)
    db.flush()
    return copy


def reorder_section(db: Session, page_id: int, section_id: int, direction: str) -> List[PageSection]:
    """
    Swap a section with its neighbour in (order_index, id) order.
    No-op at either end. Returns the page's sections in their new order.
    """
    if direction not in ("up", "down"):
        raise ValidationError("Invalid direction", errors={"direction": "must be 'up' or 'down'"})

    siblings = list_sections(db, page_id)
    pos = next((i for i, s in enumerate(siblings) if s.id == section_id), None)
    if pos is None:
        raise NotFoundError(f"Section {section_id} not found on page {page_id}")

    other = pos - 1 if direction == "up" else pos + 1
    if other < 0 or other >= len(siblings):
        return siblings

    a, b = siblings[pos], siblings[other]
    if a.order_index == b.order_index:
        # equal indexes would make the swap invisible; renumber 1..n first
        for i, s in enumerate(siblings, start=1):
            s.order_index = i

    a.order_index, b.order_index = b.order_index, a.order_index
    db.flush()

    siblings[pos], siblings[other] = siblings[other], siblings[pos]
    return siblings

