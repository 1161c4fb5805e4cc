# app/deps/http.py
from __future__ import annotations
from typing import Iterator

import httpx

from app.core.settings import settings


def get_http_client() -> Iterator[httpx.Client]:
    """One outbound client per request; tests override this with a MockTransport client."""
    with httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        yield client
