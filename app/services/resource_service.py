# app/services/resource_service.py
# Resource library: validation (errors + warnings), CRUD, bulk actions, download
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import unquote, urlparse

import httpx
from fastapi import Request
from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, RemoteUnavailableError, ValidationError
from app.core.settings import settings
from app.models.analytics import AnalyticsEventType
from app.models.resource import FILE_TYPES, RESOURCE_CATEGORIES, Resource
from app.schemas.resource import DownloadOut, ResourceCreate, ResourceUpdate
from app.services.analytics_service import increment_counter, track_event
from app.utils.slugs import derive_slug

log = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title", "description", "file_url", "file_type", "file_size",
    "category", "subcategory", "tags", "featured", "status",
)


# -------- Validation --------
def sanitize_resource_form(data: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(data)
    for key in ("title", "description", "file_url", "subcategory"):
        if isinstance(out.get(key), str):
            out[key] = out[key].strip()
    if out.get("subcategory") == "":
        out["subcategory"] = None
    out["tags"] = [t.strip() for t in out.get("tags") or [] if isinstance(t, str) and t.strip()]
    return out


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_resource_form(data: Dict[str, Any]) -> Tuple[Dict[str, str], List[str]]:
    """
    Returns (errors, warnings). Errors block the save; warnings are advisory.
    Expects sanitized input.
    """
    errors: Dict[str, str] = {}
    warnings: List[str] = []

    title = data.get("title") or ""
    if not title:
        errors["title"] = "Title is required"
    elif len(title) < 3:
        errors["title"] = "Title must be at least 3 characters long"
    elif len(title) > 200:
        errors["title"] = "Title must be less than 200 characters"

    description = data.get("description") or ""
    if not description:
        errors["description"] = "Description is required"
    elif len(description) < 10:
        errors["description"] = "Description must be at least 10 characters long"
    elif len(description) > 1000:
        errors["description"] = "Description must be less than 1000 characters"

    file_url = data.get("file_url") or ""
    if not file_url:
        errors["file_url"] = "File URL is required"
    elif not _is_http_url(file_url):
        errors["file_url"] = "Please enter a valid URL"

    if data.get("category") not in RESOURCE_CATEGORIES:
        errors["category"] = f"Category must be one of: {', '.join(RESOURCE_CATEGORIES)}"
    if data.get("file_type") not in FILE_TYPES:
        errors["file_type"] = f"File type must be one of: {', '.join(FILE_TYPES)}"

    tags = data.get("tags") or []
    if not tags:
        warnings.append("Consider adding tags to improve discoverability")
    elif len(tags) > settings.RESOURCE_MAX_TAGS:
        warnings.append(f"Too many tags may reduce effectiveness (max {settings.RESOURCE_MAX_TAGS} recommended)")

    size = data.get("file_size") or 0
    if size > settings.RESOURCE_LARGE_FILE_MB * 1024 * 1024:
        warnings.append(f"Large file size (over {settings.RESOURCE_LARGE_FILE_MB}MB) may affect download experience")

    if file_url and _is_http_url(file_url) and not file_url.lower().startswith("https://"):
        warnings.append("Consider using HTTPS URLs for better security")

    if description and len(description) < 50:
        warnings.append("Consider adding a more detailed description")

    if data.get("category") == "guide" and not data.get("subcategory"):
        warnings.append("Consider adding a subcategory for better organization")

    return errors, warnings


def _check(data: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    clean = sanitize_resource_form(data)
    errors, warnings = validate_resource_form(clean)
    if errors:
        raise ValidationError("Resource is invalid", errors=errors)
    return clean, warnings


# -------- CRUD --------
def get_resource(db: Session, resource_id: int) -> Resource:
    res = db.get(Resource, resource_id)
    if not res:
        raise NotFoundError(f"Resource {resource_id} not found")
    return res


def list_resources(
    db: Session,
    *,
    status: Optional[str] = None,
    category: Optional[str] = None,
    file_type: Optional[str] = None,
    featured: Optional[bool] = None,
    q: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Resource]:
    stmt = select(Resource)
    if status:
        stmt = stmt.where(Resource.status == status)
    if category:
        stmt = stmt.where(Resource.category == category)
    if file_type:
        stmt = stmt.where(Resource.file_type == file_type)
    if featured is not None:
        stmt = stmt.where(Resource.featured == featured)
    if q:
        like = f"%{q}%"
        stmt = stmt.where(or_(Resource.title.ilike(like), Resource.description.ilike(like)))
    stmt = stmt.order_by(Resource.featured.desc(), Resource.created_at.desc(), Resource.id.desc())
    return db.scalars(stmt.limit(limit).offset(offset)).all()


def create_resource(db: Session, payload: ResourceCreate) -> Tuple[Resource, List[str]]:
    clean, warnings = _check(payload.model_dump())
    res = Resource(**{k: clean[k] for k in EDITABLE_FIELDS}, download_count=0)
    db.add(res)
    db.flush()
    log.info("resource created id=%s warnings=%d", res.id, len(warnings))
    return res, warnings


def update_resource(db: Session, resource_id: int, patch: ResourceUpdate) -> Tuple[Resource, List[str]]:
    res = get_resource(db, resource_id)
    merged = {k: getattr(res, k) for k in EDITABLE_FIELDS}
    merged.update({k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None or k == "subcategory"})
    clean, warnings = _check(merged)
    for k in EDITABLE_FIELDS:
        setattr(res, k, clean[k])
    db.flush()
    return res, warnings


def delete_resource(db: Session, resource_id: int) -> None:
    res = get_resource(db, resource_id)
    db.delete(res)
    db.flush()


_BULK_VALUES = {
    "publish": {"status": "published"},
    "unpublish": {"status": "draft"},
    "feature": {"featured": True},
    "unfeature": {"featured": False},
}


def bulk_action(db: Session, ids: List[int], action: str) -> int:
    ids = sorted(set(ids))
    if action == "delete":
        result = db.execute(delete(Resource).where(Resource.id.in_(ids)).execution_options(synchronize_session="fetch"))
    elif action in _BULK_VALUES:
        result = db.execute(
            update(Resource)
            .where(Resource.id.in_(ids))
            .values(**_BULK_VALUES[action])
            .execution_options(synchronize_session="fetch")
        )
    else:
        raise ValidationError(f"Unknown bulk action '{action}'", errors={"action": "unsupported"})
    db.flush()
    log.info("resource bulk %s on %d ids -> %d rows", action, len(ids), result.rowcount)
    return int(result.rowcount or 0)


# -------- Download --------
def _filename_for(res: Resource) -> str:
    name = unquote(urlparse(res.file_url).path.rsplit("/", 1)[-1])
    if name and "." in name:
        return name
    return derive_slug(res.title) or "download"


def _head(client: httpx.Client, url: str) -> httpx.Response:
    return client.head(url, follow_redirects=True)


def download(
    db: Session,
    resource_id: int,
    *,
    client: Optional[httpx.Client] = None,
    request: Optional[Request] = None,
    published_only: bool = True,
) -> DownloadOut:
    """
    Confirm the remote file answers a HEAD, then count the download.
    The counter only moves on success; failures raise RemoteUnavailableError
    carrying the URL so the caller can open it in a new tab instead.
    """
    res = get_resource(db, resource_id)
    if published_only and res.status != "published":
        raise NotFoundError(f"Resource {resource_id} not found")

    try:
        if client is None:
            with httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS) as c:
                resp = _head(c, res.file_url)
        else:
            resp = _head(client, res.file_url)
    except httpx.HTTPError as e:
        log.warning("download check failed for resource %s: %s", res.id, e)
        raise RemoteUnavailableError(
            f"File is not reachable: {e.__class__.__name__}", fallback_url=res.file_url
        )

    if not resp.is_success:
        log.warning("download check for resource %s returned HTTP %s", res.id, resp.status_code)
        raise RemoteUnavailableError(
            f"HTTP {resp.status_code}: {resp.reason_phrase}", fallback_url=res.file_url
        )

    length = resp.headers.get("content-length")
    size = int(length) if length and length.isdigit() else (res.file_size or 0)
    content_type = resp.headers.get("content-type", "application/octet-stream")
    filename = _filename_for(res)

    count = increment_counter(db, Resource, res.id, "download_count")
    track_event(
        db,
        AnalyticsEventType.RESOURCE_DOWNLOAD,
        entity_type="resource",
        entity_id=res.id,
        details={"filename": filename, "size": size},
        request=request,
    )
    return DownloadOut(
        resource_id=res.id,
        url=res.file_url,
        filename=filename,
        size=size,
        content_type=content_type,
        download_count=count,
    )


def record_download_failure(db: Session, resource_id: int, error: RemoteUnavailableError, request: Optional[Request] = None) -> None:
    track_event(
        db,
        AnalyticsEventType.DOWNLOAD_FAILED,
        entity_type="resource",
        entity_id=resource_id,
        details={"error": error.message},
        request=request,
    )
