# app/models/__init__.py
# Import every model so Base.metadata is complete (Alembic, tests).
from app.models.auth import User, UserRole, UserStatus  # noqa: F401
from app.models.content import Page, PageSection  # noqa: F401
from app.models.resource import Resource  # noqa: F401
from app.models.emergency import EmergencyAlert, EmergencyHotline, EvacuationCenter  # noqa: F401
from app.models.organization import OrganizationalUnit, KeyPersonnel  # noqa: F401
from app.models.weather import WeatherData, WeatherForecast  # noqa: F401
from app.models.analytics import AnalyticsEvent, AnalyticsEventType  # noqa: F401
from app.models.site import NavigationItem, SiteSetting  # noqa: F401
from app.models.volunteer import VolunteerApplication  # noqa: F401
from app.models.news import NewsArticle  # noqa: F401
from app.models.incident import IncidentReport  # noqa: F401
