# app/middleware/ratelimit.py
from __future__ import annotations
import hashlib
import re
import threading
import time
from typing import Dict, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import settings

WindowState = Tuple[int, int]  # (window_epoch_sec, count)

_DOWNLOAD_PATH = re.compile(r"^/delivery/v1/resources/\d+/download/?$")
_WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")
_PUBLIC_FORMS = ("/delivery/v1/volunteers", "/delivery/v1/incidents")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-minute fixed windows, in process memory.
    - Public downloads  POST /delivery/v1/resources/{id}/download : key by IP.
    - Public forms      POST /delivery/v1/volunteers, /incidents   : key by IP.
    - Admin writes      POST/PUT/PATCH/DELETE under /api/v1/       : key by bearer token (IP fallback).
    """

    def __init__(self, app):
        super().__init__(app)
        self._store: Dict[str, WindowState] = {}
        self._window = 0
        self._lock = threading.Lock()

    def _hit(self, key: str, limit: int) -> bool:
        now = int(time.time())
        window = now - (now % 60)
        with self._lock:
            if window != self._window:
                # drop counters from finished windows
                self._store = {k: v for k, v in self._store.items() if v[0] == window}
                self._window = window
            w, c = self._store.get(key, (window, 0))
            if w != window:
                w, c = window, 0
            c += 1
            self._store[key] = (w, c)
            return c <= limit

    @staticmethod
    def _token_fingerprint(request: Request) -> Optional[str]:
        auth = request.headers.get("authorization") or ""
        parts = auth.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return hashlib.sha256(parts[1].encode("utf-8")).hexdigest()[:16]
        return None

    def _classify(self, request: Request) -> Tuple[Optional[str], Optional[int]]:
        path = request.url.path or ""
        method = request.method.upper()
        client_ip = request.client.host if request.client else "unknown"

        if method == "POST" and _DOWNLOAD_PATH.match(path):
            return f"dl:{client_ip}", settings.RATELIMIT_DOWNLOAD_PER_MIN
        if method == "POST" and path.rstrip("/") in _PUBLIC_FORMS:
            return f"form:{client_ip}", settings.RATELIMIT_PUBLIC_FORM_PER_MIN
        if path.startswith(settings.API_V1_STR + "/") and method in _WRITE_METHODS and not path.startswith(settings.API_V1_STR + "/auth/"):
            who = self._token_fingerprint(request) or client_ip
            return f"write:{who}", settings.RATELIMIT_WRITE_PER_MIN
        return None, None

    async def dispatch(self, request: Request, call_next):
        if not settings.RATELIMIT_ENABLED:
            return await call_next(request)

        key, limit = self._classify(request)
        if key is not None and limit is not None and not self._hit(key, limit):
            return JSONResponse(
                {"detail": "Rate limit exceeded", "limit_per_min": limit},
                status_code=429,
                headers={"Retry-After": "60"},
            )
        return await call_next(request)
