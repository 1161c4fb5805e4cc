# app/api/v1/router.py
from fastapi import APIRouter

from .endpoints import health, pages, resources
from app.api.v1 import auth as auth_endpoints
from app.api.v1.endpoints import analytics as analytics_endpoints
from app.api.v1.endpoints import emergency as emergency_endpoints
from app.api.v1.endpoints import incidents as incidents_endpoints
from app.api.v1.endpoints import news as news_endpoints
from app.api.v1.endpoints import organization as organization_endpoints
from app.api.v1.endpoints import site as site_endpoints
from app.api.v1.endpoints import users as users_endpoints
from app.api.v1.endpoints import volunteers as volunteers_endpoints
from app.api.v1.endpoints import weather as weather_endpoints

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth_endpoints.router, prefix="/auth")

# Content
api_router.include_router(pages.router)                    # /pages
api_router.include_router(resources.router)                # /resources
api_router.include_router(news_endpoints.router)           # /news

# Public-safety directory
api_router.include_router(emergency_endpoints.router)      # /alerts, /hotlines, /evacuation-centers
api_router.include_router(incidents_endpoints.router)      # /incidents
api_router.include_router(organization_endpoints.router)   # /personnel, /organization
api_router.include_router(weather_endpoints.router)        # /weather

# Site + back office
api_router.include_router(site_endpoints.router)           # /navigation, /settings
api_router.include_router(users_endpoints.router)          # /users
api_router.include_router(volunteers_endpoints.router)     # /volunteers
api_router.include_router(analytics_endpoints.router)      # /analytics
