# app/api/v1/endpoints/news.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps.auth import require_editor
from app.schemas.news import NewsCreate, NewsListOut, NewsOut, NewsUpdate
from app.services import news_service as svc

router = APIRouter(prefix="/news", tags=["news"], dependencies=[Depends(require_editor)])


@router.get("", response_model=NewsListOut)
def list_news(
    db: Session = Depends(get_db),
    status_: Optional[str] = Query(None, alias="status", pattern="^(draft|published)$"),
    q: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    items, total = svc.list_news(db, status=status_, q=q, limit=limit, offset=offset)
    return NewsListOut(total=total, limit=limit, offset=offset, items=items)


@router.post("", response_model=NewsOut, status_code=status.HTTP_201_CREATED)
def create_news(payload: NewsCreate, db: Session = Depends(get_db)):
    row = svc.create_news(db, payload)
    db.commit()
    db.refresh(row)
    return row


@router.get("/{news_id}", response_model=NewsOut)
def get_news(news_id: int, db: Session = Depends(get_db)):
    return svc.get_news(db, news_id)


@router.patch("/{news_id}", response_model=NewsOut)
def update_news(news_id: int, patch: NewsUpdate, db: Session = Depends(get_db)):
    row = svc.update_news(db, news_id, patch)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{news_id}", status_code=204)
def delete_news(news_id: int, db: Session = Depends(get_db)):
    svc.delete_news(db, news_id)
    db.commit()
    return Response(status_code=204)
