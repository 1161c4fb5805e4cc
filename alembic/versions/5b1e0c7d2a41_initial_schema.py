"""initial schema

Revision ID: 5b1e0c7d2a41
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5b1e0c7d2a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=nullable)


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=160), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=160), nullable=True),
        sa.Column("role", sa.Enum("admin", "editor", name="userrole", native_enum=False), nullable=False),
        sa.Column("status", sa.Enum("active", "inactive", name="userstatus", native_enum=False), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("meta_description", sa.String(length=500), nullable=True),
        sa.Column("meta_keywords", sa.String(length=500), nullable=True),
        sa.Column("hero_title", sa.String(length=200), nullable=True),
        sa.Column("hero_subtitle", sa.String(length=500), nullable=True),
        sa.Column("hero_image", sa.String(length=1024), nullable=True),
        sa.Column(
            "status",
            sa.Enum("draft", "published", name="page_status", native_enum=False, create_constraint=True),
            nullable=False,
            server_default="draft",
        ),
        sa.Column(
            "template",
            sa.Enum(
                "default", "about", "services", "news", "resources", "disaster-plan",
                name="page_template", native_enum=False, create_constraint=True,
            ),
            nullable=False,
            server_default="default",
        ),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.UniqueConstraint("slug", name="uq_pages_slug"),
    )
    op.create_index("ix_pages_status", "pages", ["status"])

    op.create_table(
        "page_sections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("data", JSONType, nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_page_sections_page_id", "page_sections", ["page_id"])
    op.create_index("ix_page_sections_page_order", "page_sections", ["page_id", "order_index"])

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("file_url", sa.String(length=1024), nullable=False),
        sa.Column(
            "file_type",
            sa.Enum("pdf", "doc", "docx", "image", "video", "zip", name="resource_file_type", native_enum=False),
            nullable=False,
        ),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column(
            "category",
            sa.Enum("guide", "form", "map", "report", "plan", "manual", name="resource_category", native_enum=False),
            nullable=False,
        ),
        sa.Column("subcategory", sa.String(length=100), nullable=True),
        sa.Column("tags", JSONType, nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum("draft", "published", name="resource_status", native_enum=False),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_resources_status_category", "resources", ["status", "category"])

    op.create_table(
        "emergency_alerts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "type",
            sa.Enum(
                "typhoon", "earthquake", "flood", "fire", "landslide", "tsunami", "general",
                name="alert_type", native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "severity",
            sa.Enum("low", "medium", "high", "critical", name="alert_severity", native_enum=False),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        _ts("issued_at"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_on_homepage", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )
    op.create_index("ix_emergency_alerts_active_issued", "emergency_alerts", ["is_active", "issued_at"])

    op.create_table(
        "emergency_hotlines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("contact_name", sa.String(length=160), nullable=False),
        sa.Column("phone_number", sa.String(length=64), nullable=False),
        sa.Column("secondary_number", sa.String(length=64), nullable=True),
        sa.Column("category", sa.String(length=64), nullable=False, server_default="general"),
        sa.Column("department", sa.String(length=160), nullable=True),
        sa.Column("is_emergency", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )

    op.create_table(
        "organizational_hierarchy",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("position", sa.String(length=160), nullable=True),
        sa.Column(
            "parent_id",
            sa.Integer(),
            sa.ForeignKey("organizational_hierarchy.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )
    op.create_index("ix_organizational_hierarchy_parent_id", "organizational_hierarchy", ["parent_id"])

    op.create_table(
        "key_personnel",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("position", sa.String(length=160), nullable=False),
        sa.Column("department", sa.String(length=160), nullable=True),
        sa.Column("email", sa.String(length=160), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("photo_url", sa.String(length=1024), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
    )

    conditions = ("sunny", "partly-cloudy", "cloudy", "rainy", "stormy")
    op.create_table(
        "weather_data",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("location", sa.String(length=160), nullable=False),
        sa.Column("temperature", sa.Integer(), nullable=False),
        sa.Column("humidity", sa.Integer(), nullable=False),
        sa.Column("wind_speed", sa.Integer(), nullable=False),
        sa.Column("visibility", sa.Integer(), nullable=False),
        sa.Column("condition", sa.Enum(*conditions, name="weather_condition", native_enum=False), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=False),
        sa.Column("alerts", JSONType, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("last_updated"),
        sa.UniqueConstraint("location", name="uq_weather_data_location"),
    )

    op.create_table(
        "weather_forecast",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("temperature_high", sa.Integer(), nullable=False),
        sa.Column("temperature_low", sa.Integer(), nullable=False),
        sa.Column("condition", sa.String(length=200), nullable=False),
        sa.Column("icon", sa.Enum(*conditions, name="weather_condition", native_enum=False), nullable=False),
        sa.Column("humidity", sa.Integer(), nullable=False),
        sa.Column("wind_speed", sa.Integer(), nullable=False),
        sa.Column("precipitation", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at", nullable=True),
    )
    op.create_index("ix_weather_forecast_is_active", "weather_forecast", ["is_active"])

    op.create_table(
        "analytics_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "event_type",
            sa.Enum(
                "page_view", "resource_download", "download_failed", "volunteer_signup",
                name="analytics_event_type", native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("entity_type", sa.String(length=32), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("details", JSONType, nullable=False),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        _ts("created_at"),
    )
    op.create_index("ix_analytics_events_type_created", "analytics_events", ["event_type", "created_at"])
    op.create_index("ix_analytics_events_entity", "analytics_events", ["entity_type", "entity_id"])

    op.create_table(
        "navigation_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("label", sa.String(length=120), nullable=False),
        sa.Column("path", sa.String(length=255), nullable=False),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("navigation_items.id", ondelete="CASCADE"), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("created_at"),
    )
    op.create_index("ix_navigation_items_parent_id", "navigation_items", ["parent_id"])

    op.create_table(
        "site_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=120), nullable=False),
        sa.Column("value", JSONType, nullable=True),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("updated_at"),
    )
    op.create_index("ix_site_settings_key", "site_settings", ["key"], unique=True)

    op.create_table(
        "volunteer_applications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(length=160), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("barangay", sa.String(length=64), nullable=False),
        sa.Column("skills", JSONType, nullable=False),
        sa.Column("availability", sa.String(length=64), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "approved", "rejected", name="volunteer_status", native_enum=False),
            nullable=False,
            server_default="pending",
        ),
        _ts("created_at"),
    )
    op.create_index(
        "ix_volunteer_applications_status_created", "volunteer_applications", ["status", "created_at"]
    )
    op.create_index("ix_volunteer_applications_barangay", "volunteer_applications", ["barangay"])


def downgrade():
    op.drop_table("volunteer_applications")
    op.drop_table("site_settings")
    op.drop_table("navigation_items")
    op.drop_table("analytics_events")
    op.drop_table("weather_forecast")
    op.drop_table("weather_data")
    op.drop_table("key_personnel")
    op.drop_table("organizational_hierarchy")
    op.drop_table("emergency_hotlines")
    op.drop_table("emergency_alerts")
    op.drop_table("resources")
    op.drop_table("page_sections")
    op.drop_table("pages")
    op.drop_table("users")
