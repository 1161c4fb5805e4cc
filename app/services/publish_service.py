# app/services/publish_service.py
# Page status transitions + ETag / Cache-Control helpers for Delivery
from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Literal, Optional

from email.utils import format_datetime
from fastapi import Request, Response
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.content import Page

Status = Literal["draft", "published"]


# -----------------------------
# Page status transitions
# -----------------------------
def can_transition(src: str, dst: str) -> bool:
    if src == dst:
        return True
    return (src, dst) in {("draft", "published"), ("published", "draft")}


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def transition_page_status(db: Session, page: Page, dst: Status) -> Page:
    src = page.status
    if not can_transition(src, dst):
        raise ValidationError(f"Invalid transition {src} -> {dst}", errors={"status": f"cannot move from {src} to {dst}"})
    if src == dst:
        return page

    page.status = dst
    if dst == "published":
        page.published_at = _now_utc()
    else:
        # unpublish keeps the slug; published_at is cleared
        page.published_at = None

    db.flush()
    return page


# -----------------------------
# ETags and Cache-Control
# -----------------------------
def compute_etag_from_bytes(body: bytes) -> str:
    """ETag as the quoted sha256 hex of the response body."""
    return '"' + hashlib.sha256(body).hexdigest() + '"'


def etag_matches(request: Optional[Request], etag: str) -> bool:
    if request is None:
        return False
    inm = request.headers.get("if-none-match")
    if not inm:
        return False
    candidates = [c.strip() for c in inm.split(",")]
    return "*" in candidates or etag in candidates or etag.strip('"') in candidates


def _to_utc(dt: datetime) -> datetime:
    # naive datetimes (SQLite) are taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def httpdate(dt: datetime) -> str:
    return format_datetime(_to_utc(dt), usegmt=True)


def cache_policy_for_list() -> dict[str, str]:
    return {"Cache-Control": "public, max-age=60, stale-while-revalidate=120"}


def cache_policy_for_detail() -> dict[str, str]:
    return {"Cache-Control": "public, max-age=300, stale-while-revalidate=600"}


def apply_delivery_cache_headers(
    resp: Response,
    *,
    etag: str | None,
    last_modified: datetime | None,
    is_detail: bool,
) -> None:
    """
    Sets ETag, Last-Modified and Cache-Control (list vs detail).
    """
    if etag:
        resp.headers["ETag"] = etag
    if last_modified:
        resp.headers["Last-Modified"] = httpdate(last_modified)

    policy = cache_policy_for_detail() if is_detail else cache_policy_for_list()
    for k, v in policy.items():
        resp.headers[k] = v


def apply_no_store(resp: Response) -> None:
    # admin previews of drafts must never be cached by intermediaries
    resp.headers["Cache-Control"] = "no-store"
