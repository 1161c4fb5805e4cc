# app/services/analytics_service.py
# Event log + atomic counters + admin dashboard aggregates
from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from app.models.analytics import AnalyticsEvent, AnalyticsEventType
from app.models.content import Page
from app.models.emergency import EvacuationCenter
from app.models.incident import IncidentReport
from app.models.resource import Resource
from app.models.volunteer import VolunteerApplication
from app.schemas.analytics import DashboardOut, DailyCountOut, TopItemOut

log = logging.getLogger(__name__)


def _client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else None


def track_event(
    db: Session,
    event_type: AnalyticsEventType,
    *,
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> AnalyticsEvent:
    ev = AnalyticsEvent(
        event_type=event_type,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details or {},
        ip=_client_ip(request),
        user_agent=(request.headers.get("user-agent") or "")[:512] if request is not None else None,
    )
    db.add(ev)
    db.flush()
    log.debug("event %s %s:%s", event_type, entity_type, entity_id)
    return ev


def increment_counter(db: Session, model, pk: int, column: str) -> int:
    """
    UPDATE ... SET col = col + 1 in SQL so concurrent increments never lose a count.
    Returns the value now stored.
    """
    col = getattr(model, column)
    values = {column: col + 1}
    if hasattr(model, "updated_at"):
        # counter bumps leave updated_at untouched
        values["updated_at"] = model.updated_at
    db.execute(
        update(model)
        .where(model.id == pk)
        .values(values)
        .execution_options(synchronize_session=False)
    )
    value = db.scalar(select(col).where(model.id == pk)) or 0
    obj = db.identity_map.get(db.identity_key(model, pk))
    if obj is not None:
        # keep the loaded instance in step without marking it dirty
        db.expire(obj, [column])
    return int(value)


def dashboard(db: Session, *, days: int = 30, top: int = 5) -> DashboardOut:
    since = datetime.now(timezone.utc) - timedelta(days=days)

    totals = {
        "pages": db.scalar(select(func.count()).select_from(Page)) or 0,
        "published_pages": db.scalar(select(func.count()).select_from(Page).where(Page.status == "published")) or 0,
        "resources": db.scalar(select(func.count()).select_from(Resource)) or 0,
        "page_views": db.scalar(select(func.coalesce(func.sum(Page.view_count), 0))) or 0,
        "downloads": db.scalar(select(func.coalesce(func.sum(Resource.download_count), 0))) or 0,
        "pending_volunteers": db.scalar(
            select(func.count()).select_from(VolunteerApplication).where(VolunteerApplication.status == "pending")
        ) or 0,
        "pending_incidents": db.scalar(
            select(func.count()).select_from(IncidentReport).where(IncidentReport.status == "pending")
        ) or 0,
        "evacuation_capacity": db.scalar(
            select(func.coalesce(func.sum(EvacuationCenter.capacity), 0)).where(EvacuationCenter.is_active == True)  # noqa: E712
        ) or 0,
    }

    rows = db.execute(
        select(AnalyticsEvent.event_type, func.count())
        .where(AnalyticsEvent.created_at >= since)
        .group_by(AnalyticsEvent.event_type)
    ).all()
    events_by_type = {(t.value if hasattr(t, "value") else str(t)): int(c) for t, c in rows}

    top_pages = [
        TopItemOut(id=p.id, title=p.title, slug=p.slug, count=p.view_count)
        for p in db.scalars(
            select(Page).where(Page.view_count > 0).order_by(Page.view_count.desc(), Page.id).limit(top)
        )
    ]
    top_resources = [
        TopItemOut(id=r.id, title=r.title, count=r.download_count)
        for r in db.scalars(
            select(Resource).where(Resource.download_count > 0).order_by(Resource.download_count.desc(), Resource.id).limit(top)
        )
    ]

    per_day: Dict[str, int] = {}
    for (created_at,) in db.execute(
        select(AnalyticsEvent.created_at).where(
            AnalyticsEvent.event_type == AnalyticsEventType.PAGE_VIEW,
            AnalyticsEvent.created_at >= since,
        )
    ):
        key = created_at.date().isoformat()
        per_day[key] = per_day.get(key, 0) + 1
    daily = [DailyCountOut(day=d, count=c) for d, c in sorted(per_day.items())]

    return DashboardOut(
        days=days,
        totals={k: int(v) for k, v in totals.items()},
        events_by_type=events_by_type,
        top_pages=top_pages,
        top_resources=top_resources,
        daily_page_views=daily,
    )
