from __future__ import annotations

from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute

from app.api.delivery.router import router as delivery_router
from app.api.v1.router import api_router
from app.core.config import create_app
from app.core.logging import configure_logging
from app.core.settings import settings
from app.middleware.ratelimit import RateLimitMiddleware

from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware


app = create_app()
configure_logging()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

# checks settings.RATELIMIT_ENABLED on every request
app.add_middleware(RateLimitMiddleware)


def _inject_bearer_security(app):
    """
    Adds bearerAuth globally to OpenAPI; /delivery/* is then marked public
    (docs only, the real checks live in the endpoint dependencies).
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version=settings.APP_VERSION,
            description="MDRRMO public site content and back office API",
            routes=app.routes,
        )

        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_public_routes(app):
    for route in app.routes:
        if isinstance(route, APIRoute):
            path = route.path or ""
            if path.startswith("/delivery/") or path.startswith(f"{settings.API_V1_STR}/health"):
                extra = dict(route.openapi_extra or {})
                extra["security"] = []
                route.openapi_extra = extra


_inject_bearer_security(app)

# Back office API (JWT)
app.include_router(api_router, prefix=settings.API_V1_STR)

# Public delivery
app.include_router(delivery_router)

_mark_public_routes(app)
