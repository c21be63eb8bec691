"""create campaigns

Revision ID: 3f2a9c7d1b4e
Revises:
Create Date: 2026-10-17 10:00:00.000000
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op
from app.models.base import StringUUID

# revision identifiers, used by Alembic.
revision: str = "3f2a9c7d1b4e"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "campaigns",
        sa.Column("user_id", StringUUID(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=True),
        sa.Column("prompt", sa.Text(), nullable=True),
        sa.Column("short_description", sa.Text(), nullable=True),
        sa.Column("long_description", sa.Text(), nullable=True),
        sa.Column("instagram", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("centerpiece_image", sa.Text(), nullable=True),
        sa.Column("accessories_images", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("model_image", sa.Text(), nullable=True),
        sa.Column("look_visual", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("locale", sa.String(length=10), nullable=True),
        sa.Column("input", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("product", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("look_items", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("palette_hex", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("seo_keywords", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("brand_tone", sa.Text(), nullable=True),
        sa.Column("governance", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("telemetry", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("brand_compliance_score", sa.Float(), nullable=True),
        sa.Column("brand_compliance_original_score", sa.Float(), nullable=True),
        sa.Column(
            "brand_compliance_adjustments",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column("image_analysis", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("lookpost_schema", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("id", StringUUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_campaigns_user_id"), "campaigns", ["user_id"], unique=False)
    op.create_index(
        "ix_campaigns_user_created",
        "campaigns",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_campaigns_user_created", table_name="campaigns")
    op.drop_index(op.f("ix_campaigns_user_id"), table_name="campaigns")
    op.drop_table("campaigns")
