"""evacuation centers, news, incident reports

Revision ID: 8c2f4e1a9d03
Revises: 5b1e0c7d2a41
Create Date: 2026-10-18 14:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '8c2f4e1a9d03'
down_revision: Union[str, Sequence[str], None] = '5b1e0c7d2a41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=nullable)


def upgrade():
    op.create_table(
        "evacuation_centers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("barangay", sa.String(length=64), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("facilities", JSONType, nullable=False),
        sa.Column("contact", sa.String(length=64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_evacuation_centers_barangay", "evacuation_centers", ["barangay"])

    op.create_table(
        "news",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("excerpt", sa.String(length=500), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("author", sa.String(length=160), nullable=True),
        sa.Column(
            "status",
            sa.Enum("draft", "published", name="news_status", native_enum=False),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("date", sa.Date(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_news_status_date", "news", ["status", "date"])

    op.create_table(
        "incident_reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("reference_number", sa.String(length=32), nullable=False),
        sa.Column("reporter_name", sa.String(length=160), nullable=False),
        sa.Column("contact_number", sa.String(length=32), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("incident_type", sa.String(length=64), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "urgency",
            sa.Enum("low", "medium", "high", name="incident_urgency", native_enum=False),
            nullable=False,
            server_default="medium",
        ),
        sa.Column(
            "status",
            sa.Enum("pending", "in-progress", "resolved", name="incident_status", native_enum=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        _ts("date_reported"),
        _ts("updated_at"),
        sa.UniqueConstraint("reference_number", name="uq_incident_reports_reference_number"),
    )
    op.create_index("ix_incident_reports_status_reported", "incident_reports", ["status", "date_reported"])

    with op.batch_alter_table("analytics_events") as batch:
        batch.alter_column(
            "event_type",
            existing_type=sa.Enum(
                "page_view", "resource_download", "download_failed", "volunteer_signup",
                name="analytics_event_type", native_enum=False,
            ),
            type_=sa.Enum(
                "page_view", "resource_download", "download_failed", "volunteer_signup", "incident_reported",
                name="analytics_event_type", native_enum=False,
            ),
            existing_nullable=False,
        )


def downgrade():
    op.drop_table("incident_reports")
    op.drop_table("news")
    op.drop_table("evacuation_centers")
