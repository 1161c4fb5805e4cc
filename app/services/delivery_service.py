# app/services/delivery_service.py
# Public read side: rendered pages by slug + published listings
from __future__ import annotations
from typing import List, Optional, Tuple

from fastapi import Request
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.content_registry import section_registry
from app.core.errors import NotFoundError
from app.models.analytics import AnalyticsEventType
from app.models.content import Page, PageSection
from app.schemas.delivery import DeliveryPageSummaryOut, RenderedPageOut, RenderedSectionOut
from app.services.analytics_service import increment_counter, track_event
from app.web.ui.section_renderer import SectionView, render_unknown


def _active_sections(db: Session, page_id: int) -> List[PageSection]:
    stmt = (
        select(PageSection)
        .where(PageSection.page_id == page_id, PageSection.is_active == True)  # noqa: E712
        .order_by(PageSection.order_index, PageSection.id)
    )
    return list(db.scalars(stmt).all())


def render_section(section: PageSection) -> RenderedSectionOut:
    view = SectionView(
        id=section.id,
        type=section.type,
        title=section.title,
        content=section.content,
        data=dict(section.data or {}),
    )
    meta = section_registry.get(section.type)
    renderer = meta.renderer if meta else render_unknown
    return RenderedSectionOut(
        id=section.id,
        type=section.type,
        title=section.title,
        order_index=section.order_index,
        data=view.data,
        html=renderer(view),
    )


def render_page(
    db: Session,
    slug: str,
    *,
    include_drafts: bool = False,
    request: Optional[Request] = None,
) -> RenderedPageOut:
    """
    Resolve a page by slug and render its active sections in (order_index, id) order.

    Drafts only resolve with include_drafts=True (authenticated admin/editor preview).
    Public renders bump view_count and log a page_view event; previews do not.
    """
    page = db.scalar(select(Page).where(Page.slug == slug))
    if not page or (page.status != "published" and not include_drafts):
        raise NotFoundError(f"Page '{slug}' not found")

    rendered = [render_section(s) for s in _active_sections(db, page.id)]

    view_count = page.view_count or 0
    if not include_drafts:
        view_count = increment_counter(db, Page, page.id, "view_count")
        track_event(
            db,
            AnalyticsEventType.PAGE_VIEW,
            entity_type="page",
            entity_id=page.id,
            details={"slug": page.slug},
            request=request,
        )

    hero = None
    if page.hero_title or page.hero_subtitle or page.hero_image:
        hero = {"title": page.hero_title, "subtitle": page.hero_subtitle, "image": page.hero_image}

    return RenderedPageOut(
        id=page.id,
        slug=page.slug,
        title=page.title,
        status=page.status,
        template=page.template,
        meta_description=page.meta_description,
        meta_keywords=page.meta_keywords,
        hero=hero,
        content=page.content or "",
        sections=rendered,
        html="".join(s.html for s in rendered),
        view_count=view_count,
        updated_at=page.updated_at,
        published_at=page.published_at,
    )


def list_published_pages(
    db: Session,
    *,
    template: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: int = 20,
    offset: int = 0,
) -> Tuple[List[DeliveryPageSummaryOut], int]:
    base = select(Page).where(Page.status == "published")
    if template:
        base = base.where(Page.template == template)
    if featured is not None:
        base = base.where(Page.featured == featured)

    total = db.scalar(select(func.count()).select_from(base.subquery())) or 0
    rows = db.scalars(
        base.order_by(Page.published_at.desc(), Page.id.desc()).limit(limit).offset(offset)
    ).all()
    items = [
        DeliveryPageSummaryOut(
            id=p.id,
            slug=p.slug,
            title=p.title,
            template=p.template,
            featured=p.featured,
            meta_description=p.meta_description,
            updated_at=p.updated_at,
            published_at=p.published_at,
        )
        for p in rows
    ]
    return items, int(total)
