#  app/api/delivery/router.py
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import RemoteUnavailableError
from app.db.session import get_db
from app.deps.auth import get_current_user_optional
from app.deps.http import get_http_client
from app.models.auth import User
from app.schemas.admin import VolunteerApplicationIn, VolunteerApplicationOut
from app.schemas.delivery import DeliveryPageListOut, RenderedPageOut
from app.schemas.emergency import AlertOut, EvacuationDirectoryOut, HotlineOut
from app.schemas.incident import IncidentReceiptOut, IncidentReportIn
from app.schemas.news import NewsListOut, NewsOut
from app.schemas.organization import OrgTreeNode, PersonnelOut
from app.schemas.resource import DownloadOut, ResourceOut
from app.schemas.site import NavigationNode
from app.schemas.weather import WeatherOut
from app.services import (
    alert_service, evacuation_service, incident_service, news_service, organization_service,
    resource_service, site_service, volunteer_service,
)
from app.services.authz import CONTENT_ROLES, user_has_role
from app.services.delivery_service import list_published_pages, render_page
from app.services.publish_service import (
    apply_delivery_cache_headers,
    apply_no_store,
    compute_etag_from_bytes,
    etag_matches,
)
from app.services.weather_service import get_weather

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])


# --- Helpers ---
def _to_utc_seconds(dt: datetime | None) -> datetime | None:
    """UTC, second precision; naive values are taken as UTC."""
    if not dt:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=0)


def _max_last_modified(items: Iterable[Any]) -> Optional[datetime]:
    last: Optional[datetime] = None
    for it in items:
        for cand in (getattr(it, "published_at", None), getattr(it, "updated_at", None)):
            cand_utc = _to_utc_seconds(cand)
            if cand_utc and (last is None or cand_utc > last):
                last = cand_utc
    return last


def _cached_json(
    request: Request,
    model: BaseModel,
    *,
    is_detail: bool,
    last_modified: Optional[datetime],
    etag_exclude: Optional[set] = None,
) -> Response:
    """
    Serialize once, derive a stable ETag from the body (minus volatile fields),
    and answer 304 when If-None-Match already has it.
    """
    body_bytes = json.dumps(model.model_dump(mode="json"), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    if etag_exclude:
        etag_src = json.dumps(
            model.model_dump(mode="json", exclude=etag_exclude), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
    else:
        etag_src = body_bytes
    etag = compute_etag_from_bytes(etag_src)

    if etag_matches(request, etag):
        resp = Response(status_code=304)
    else:
        resp = Response(content=body_bytes, media_type="application/json")
    apply_delivery_cache_headers(resp, etag=etag, last_modified=last_modified, is_detail=is_detail)
    return resp


def _is_staff(user: Optional[User]) -> bool:
    return user is not None and user_has_role(user, CONTENT_ROLES)


# =====================================================================
# Pages
# =====================================================================
@router.get("/pages", response_model=DeliveryPageListOut, summary="List published pages")
def list_pages(
    request: Request,
    template: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    items, total = list_published_pages(db, template=template, featured=featured, limit=limit, offset=offset)
    out = DeliveryPageListOut(total=total, limit=limit, offset=offset, items=items)
    return _cached_json(request, out, is_detail=False, last_modified=_max_last_modified(items))


@router.get("/pages/{slug}", response_model=RenderedPageOut, summary="Rendered page by slug")
def get_page(
    slug: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user_optional),
):
    """
    Published pages for everyone. Authenticated admins/editors also resolve drafts;
    their requests are previews (not counted, not cached).
    """
    staff = _is_staff(user)
    out = render_page(db, slug, include_drafts=staff, request=request)
    db.commit()

    if staff:
        resp = Response(content=out.model_dump_json(), media_type="application/json")
        apply_no_store(resp)
        return resp
    return _cached_json(
        request,
        out,
        is_detail=True,
        last_modified=_to_utc_seconds(out.updated_at or out.published_at),
        etag_exclude={"view_count"},
    )


@router.get("/pages/{slug}/html", response_class=HTMLResponse, summary="Rendered page body as HTML")
def get_page_html(
    slug: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_current_user_optional),
):
    staff = _is_staff(user)
    out = render_page(db, slug, include_drafts=staff, request=request)
    db.commit()

    # pages built with the block composer keep their markup in `content`
    html = out.html or out.content
    resp = HTMLResponse(content=html)
    if staff:
        apply_no_store(resp)
    else:
        apply_delivery_cache_headers(
            resp,
            etag=compute_etag_from_bytes(html.encode("utf-8")),
            last_modified=_to_utc_seconds(out.updated_at or out.published_at),
            is_detail=True,
        )
    return resp


# =====================================================================
# News
# =====================================================================
@router.get("/news", response_model=NewsListOut, summary="Published news")
def list_news(
    request: Request,
    q: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    items, total = news_service.list_news(db, status="published", q=q, limit=limit, offset=offset)
    out = NewsListOut(total=total, limit=limit, offset=offset, items=items)
    return _cached_json(request, out, is_detail=False, last_modified=_max_last_modified(items))


@router.get("/news/{news_id}", response_model=NewsOut, summary="Published news article")
def get_news(news_id: int, request: Request, db: Session = Depends(get_db)):
    row = news_service.get_news(db, news_id, published_only=True)
    out = NewsOut.model_validate(row)
    return _cached_json(request, out, is_detail=True, last_modified=_to_utc_seconds(row.updated_at))


# =====================================================================
# Resources
# =====================================================================
@router.get("/resources", response_model=List[ResourceOut], summary="Published resources")
def list_resources(
    category: Optional[str] = Query(None),
    file_type: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    q: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return resource_service.list_resources(
        db, status="published", category=category, file_type=file_type,
        featured=featured, q=q, limit=limit, offset=offset,
    )


@router.post("/resources/{resource_id}/download", response_model=DownloadOut, summary="Check and count a download")
def download_resource(
    resource_id: int,
    request: Request,
    db: Session = Depends(get_db),
    client: httpx.Client = Depends(get_http_client),
):
    """
    200: the file is reachable; the browser downloads `url` natively.
    502: the file is not reachable; `fallback.url` can be opened in a new tab.
    """
    try:
        out = resource_service.download(db, resource_id, client=client, request=request)
    except RemoteUnavailableError as e:
        resource_service.record_download_failure(db, resource_id, e, request=request)
        db.commit()
        raise
    db.commit()
    return out


# =====================================================================
# Emergency information
# =====================================================================
@router.get("/alerts", response_model=List[AlertOut], summary="Active, unexpired alerts")
def list_alerts(homepage: bool = Query(False), db: Session = Depends(get_db)):
    return alert_service.list_active_alerts(db, homepage_only=homepage)


@router.get("/hotlines", response_model=List[HotlineOut], summary="Emergency hotline directory")
def list_hotlines(category: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return alert_service.list_hotlines(db, active_only=True, category=category)


@router.get("/evacuation-centers", response_model=EvacuationDirectoryOut, summary="Evacuation center directory")
def evacuation_centers(
    barangay: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Search in center name"),
    sort: str = Query("name", pattern="^(name|capacity|barangay)$"),
    db: Session = Depends(get_db),
):
    return evacuation_service.directory(db, barangay=barangay, q=q, sort=sort)


@router.post(
    "/incidents",
    response_model=IncidentReceiptOut,
    status_code=status.HTTP_201_CREATED,
    summary="Report an incident",
)
def report_incident(payload: IncidentReportIn, request: Request, db: Session = Depends(get_db)):
    row = incident_service.submit_report(db, payload, request=request)
    db.commit()
    return IncidentReceiptOut(reference_number=row.reference_number, status=row.status)


@router.get("/incidents/{reference_number}", response_model=IncidentReceiptOut, summary="Incident report status")
def incident_status(reference_number: str, db: Session = Depends(get_db)):
    row = incident_service.get_by_reference(db, reference_number)
    return IncidentReceiptOut(reference_number=row.reference_number, status=row.status)


@router.get("/personnel", response_model=List[PersonnelOut], summary="Key personnel")
def list_personnel(department: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return organization_service.list_personnel(db, active_only=True, department=department)


@router.get("/organization", response_model=List[OrgTreeNode], summary="Organizational hierarchy")
def organization(db: Session = Depends(get_db)):
    return organization_service.organization_tree(db, active_only=True)


@router.get("/weather", response_model=WeatherOut, summary="Latest synced weather")
def weather(db: Session = Depends(get_db)):
    return get_weather(db)


# =====================================================================
# Site
# =====================================================================
@router.get("/navigation", response_model=List[NavigationNode], summary="Active navigation menu")
def navigation(db: Session = Depends(get_db)):
    return site_service.navigation_tree(db)


@router.get("/settings", response_model=Dict[str, Any], summary="Public site settings")
def public_settings(db: Session = Depends(get_db)):
    return site_service.public_settings(db)


@router.post(
    "/volunteers",
    response_model=VolunteerApplicationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a volunteer application",
)
def submit_volunteer(payload: VolunteerApplicationIn, request: Request, db: Session = Depends(get_db)):
    row = volunteer_service.submit_application(db, payload, request=request)
    db.commit()
    db.refresh(row)
    return row
