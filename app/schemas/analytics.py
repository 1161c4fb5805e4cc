# app/schemas/analytics.py
from __future__ import annotations
from typing import Dict, List

from pydantic import BaseModel


class TopItemOut(BaseModel):
    id: int
    title: str
    slug: str | None = None
    count: int

class DailyCountOut(BaseModel):
    day: str
    count: int

class DashboardOut(BaseModel):
    days: int
    totals: Dict[str, int]
    events_by_type: Dict[str, int]
    top_pages: List[TopItemOut]
    top_resources: List[TopItemOut]
    daily_page_views: List[DailyCountOut]
