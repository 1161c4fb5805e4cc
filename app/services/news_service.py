# app/services/news_service.py
# News articles: admin CRUD + published listing for the public site
from __future__ import annotations
import logging
from datetime import date
from typing import Optional, Sequence, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.news import NewsArticle
from app.schemas.news import NewsCreate, NewsUpdate

log = logging.getLogger(__name__)


def _stamp_publish_day(article: NewsArticle) -> None:
    if article.status == "published" and article.published_on is None:
        article.published_on = date.today()


def list_news(
    db: Session,
    *,
    status: Optional[str] = None,
    q: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
) -> Tuple[Sequence[NewsArticle], int]:
    stmt = select(NewsArticle)
    if status:
        stmt = stmt.where(NewsArticle.status == status)
    if q:
        like = f"%{q.strip()}%"
        stmt = stmt.where(or_(NewsArticle.title.ilike(like), NewsArticle.excerpt.ilike(like)))
    total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
    # undated drafts sort last
    stmt = stmt.order_by(NewsArticle.published_on.desc().nulls_last(), NewsArticle.id.desc())
    return db.scalars(stmt.limit(limit).offset(offset)).all(), total


def get_news(db: Session, news_id: int, *, published_only: bool = False) -> NewsArticle:
    row = db.get(NewsArticle, news_id)
    if not row or (published_only and row.status != "published"):
        raise NotFoundError(f"News article {news_id} not found")
    return row


def create_news(db: Session, payload: NewsCreate) -> NewsArticle:
    data = payload.model_dump()
    data["title"] = data["title"].strip()
    row = NewsArticle(**data)
    _stamp_publish_day(row)
    db.add(row)
    db.flush()
    log.info("news created id=%s status=%s", row.id, row.status)
    return row


def update_news(db: Session, news_id: int, patch: NewsUpdate) -> NewsArticle:
    row = get_news(db, news_id)
    nullable = ("excerpt", "content", "image", "author", "published_on")
    for k, v in patch.model_dump(exclude_unset=True).items():
        if v is not None or k in nullable:
            setattr(row, k, v.strip() if k == "title" else v)
    _stamp_publish_day(row)
    db.flush()
    return row


def delete_news(db: Session, news_id: int) -> None:
    db.delete(get_news(db, news_id))
    db.flush()
    log.info("news deleted id=%s", news_id)
