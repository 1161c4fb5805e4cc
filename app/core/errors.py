# app/core/errors.py
# Closed error taxonomy raised by the service layer and translated to HTTP here.
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class AppError(Exception):
    kind = "AppError"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "detail": self.message}


class ValidationError(AppError):
    kind = "ValidationError"
    status_code = 422

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        if self.errors:
            out["errors"] = self.errors
        return out


class SchemaError(ValidationError):
    """Section `data` does not parse or does not match its type's schema."""
    kind = "SchemaError"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message, errors={path or "data": message})
        self.path = path


class NotFoundError(AppError):
    kind = "NotFoundError"
    status_code = 404


class ConflictError(AppError):
    kind = "ConflictError"
    status_code = 409


class RemoteUnavailableError(AppError):
    kind = "RemoteUnavailableError"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        fallback_url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.fallback_url = fallback_url
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        if self.fallback_url:
            # the client offers "retry" or "open in new tab"
            out["fallback"] = {"action": "open_in_new_tab", "url": self.fallback_url}
        return out


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
        else:
            log.info("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)
