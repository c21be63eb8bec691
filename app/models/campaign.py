"""Campaign model for generated look campaigns."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, StringUUID, TimestampMixin, UUIDMixin

CAMPAIGN_STATUSES = ("draft", "published", "scheduled")


class Campaign(Base, UUIDMixin, TimestampMixin):
    """A generated look campaign as stored; optional columns may hold malformed data."""

    __tablename__ = "campaigns"
    __table_args__ = (Index("ix_campaigns_user_created", "user_id", "created_at"),)

    user_id: Mapped[str] = mapped_column(StringUUID(), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Generated content
    prompt: Mapped[str | None] = mapped_column(Text, nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instagram: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    # Media references
    centerpiece_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    accessories_images: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    model_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    look_visual: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Lifecycle
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Extended LookPost fields
    locale: Mapped[str | None] = mapped_column(String(10), nullable=True)
    input: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    product: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    look_items: Mapped[list[dict] | None] = mapped_column(JSONB, nullable=True)
    palette_hex: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    seo_keywords: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    brand_tone: Mapped[str | None] = mapped_column(Text, nullable=True)
    governance: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    telemetry: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    # Brand compliance
    brand_compliance_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    brand_compliance_original_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    brand_compliance_adjustments: Mapped[list | None] = mapped_column(JSONB, nullable=True)

    # Legacy payloads from earlier app versions
    image_analysis: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    lookpost_schema: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    def to_record(self) -> dict[str, Any]:
        """Return the row as a plain campaign dict with ISO-8601 timestamps."""
        record: dict[str, Any] = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            record[column.key] = value.isoformat() if isinstance(value, datetime) else value
        return record

    def __repr__(self) -> str:
        return f"<Campaign {self.id} ({self.status})>"
