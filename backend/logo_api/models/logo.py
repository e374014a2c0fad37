"""
Logo Designer Backend — Logo and Category Models
==================================================

What:  ORM models for the `logos` and `categories` tables.
Why:   The mobile read path composes its joins with `select()` against these
       classes instead of hand-written SQL strings.
Who:   Queried by `logo_api.services.logo_repository`; written by the CRUD
       paths of the wider product (not part of this service).

A logo stores exactly one active background type
(`canvas_background_type` ∈ solid/gradient/image). Columns belonging to the
other types may still hold stale values and are ignored on read.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Uuid

from logo_api.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")
# TEXT[] on PostgreSQL; a JSON list elsewhere
TagList = JSON().with_variant(ARRAY(Text), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """A logo category with independently stored English and Arabic names."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(String(255))
    name_en: Mapped[str | None] = mapped_column(String(255))
    name_ar: Mapped[str | None] = mapped_column(String(255))


class Logo(Base):
    """
    A design document: canvas, bilingual texts, background, export preferences
    and legacy-compatibility flags.
    """

    __tablename__ = "logos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True))
    template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True))
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL")
    )

    # ── Bilingual texts ───────────────────────────────────────────────────
    title: Mapped[str | None] = mapped_column(String(255))
    title_en: Mapped[str | None] = mapped_column(String(255))
    title_ar: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    description_en: Mapped[str | None] = mapped_column(Text)
    description_ar: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list | None] = mapped_column(TagList)
    tags_en: Mapped[list | None] = mapped_column(TagList)
    tags_ar: Mapped[list | None] = mapped_column(TagList)

    # ── Canvas ────────────────────────────────────────────────────────────
    canvas_w: Mapped[float | None] = mapped_column(Float)
    canvas_h: Mapped[float | None] = mapped_column(Float)
    dpi: Mapped[int | None] = mapped_column(Integer)
    thumbnail_url: Mapped[str | None] = mapped_column(Text)
    is_template: Mapped[bool] = mapped_column(Boolean, default=False)
    colors_used: Mapped[list | None] = mapped_column(JSONType)
    vertical_align: Mapped[str | None] = mapped_column(String(20))
    horizontal_align: Mapped[str | None] = mapped_column(String(20))

    # ── Background (exactly one type active) ──────────────────────────────
    canvas_background_type: Mapped[str | None] = mapped_column(String(20))
    canvas_background_solid_color: Mapped[str | None] = mapped_column(String(20))
    canvas_background_gradient: Mapped[dict | None] = mapped_column(JSONType)
    canvas_background_image_type: Mapped[str | None] = mapped_column(String(20))
    canvas_background_image_path: Mapped[str | None] = mapped_column(Text)

    # ── Responsive metadata (informational only) ──────────────────────────
    responsive_version: Mapped[str | None] = mapped_column(String(20))
    responsive_description: Mapped[str | None] = mapped_column(Text)
    scaling_method: Mapped[str | None] = mapped_column(String(50))
    position_method: Mapped[str | None] = mapped_column(String(50))
    fully_responsive: Mapped[bool | None] = mapped_column(Boolean)
    version: Mapped[int | None] = mapped_column(Integer)
    responsive: Mapped[bool | None] = mapped_column(Boolean)

    # ── Export preferences ────────────────────────────────────────────────
    export_format: Mapped[str | None] = mapped_column(String(20))
    export_transparent_background: Mapped[bool | None] = mapped_column(Boolean)
    export_quality: Mapped[int | None] = mapped_column(Integer)
    export_scalable: Mapped[bool | None] = mapped_column(Boolean)
    export_maintain_aspect_ratio: Mapped[bool | None] = mapped_column(Boolean)

    # ── Legacy compatibility ──────────────────────────────────────────────
    legacy_format_supported: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true")
    )
    legacy_compatibility_version: Mapped[str | None] = mapped_column(String(20))
    mobile_optimized: Mapped[bool | None] = mapped_column(Boolean)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Logo(id={self.id}, title='{self.title}')>"
