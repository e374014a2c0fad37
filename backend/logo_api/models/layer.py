"""
Logo Designer Backend — Layer Models
======================================

What:  The `layers` table plus one detail table per layer type.
Why:   Shared geometry lives on `layers`; type-specific fields live in a 1:1
       detail row keyed by `layer_id` (created and deleted together).

    layers ──┬── layer_text        (type = TEXT)       ── fonts
             ├── layer_shape       (type = SHAPE)
             ├── layer_icon        (type = ICON)       ── assets
             ├── layer_image       (type = IMAGE)      ── assets
             └── layer_background  (type = BACKGROUND) ── assets

A layer is expected to have its detail row in exactly the table matching
`type`. Readers must still tolerate a missing row.

Rendering order is `z_index` ascending, ties broken by `created_at`.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Uuid

from logo_api.database import Base
from logo_api.models.logo import JSONType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _layer_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("layers.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Layer(Base):
    """Shared attributes of every layer; position is normalized to [0, 1]."""

    __tablename__ = "layers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    logo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("logos.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    z_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    x_norm: Mapped[float | None] = mapped_column(Float)
    y_norm: Mapped[float | None] = mapped_column(Float)
    scale: Mapped[float | None] = mapped_column(Float)
    rotation_deg: Mapped[float | None] = mapped_column(Float)
    anchor_x: Mapped[float | None] = mapped_column(Float)
    anchor_y: Mapped[float | None] = mapped_column(Float)
    opacity: Mapped[float | None] = mapped_column(Float)
    blend_mode: Mapped[str | None] = mapped_column(String(30))
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text("true"))
    is_locked: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))
    common_style: Mapped[dict | None] = mapped_column(JSONType)
    flip_horizontal: Mapped[bool] = mapped_column(Boolean, default=False)
    flip_vertical: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Serves the ordered per-logo scan used by the assembler
    __table_args__ = (
        Index("idx_layers_logo_order", "logo_id", "z_index", "created_at"),
    )


class LayerText(Base):
    __tablename__ = "layer_text"

    layer_id: Mapped[uuid.UUID] = _layer_fk()
    content: Mapped[str | None] = mapped_column(Text)
    font_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey("fonts.id"))
    font_size: Mapped[float | None] = mapped_column(Float)
    line_height: Mapped[float | None] = mapped_column(Float)
    letter_spacing: Mapped[float | None] = mapped_column(Float)
    align: Mapped[str | None] = mapped_column(String(20))
    baseline: Mapped[str | None] = mapped_column(String(20))
    fill_hex: Mapped[str | None] = mapped_column(String(20))
    fill_alpha: Mapped[float | None] = mapped_column(Float)
    stroke_hex: Mapped[str | None] = mapped_column(String(20))
    stroke_alpha: Mapped[float | None] = mapped_column(Float)
    stroke_width: Mapped[float | None] = mapped_column(Float)
    stroke_align: Mapped[str | None] = mapped_column(String(20))
    gradient: Mapped[dict | None] = mapped_column(JSONType)
    underline: Mapped[bool | None] = mapped_column(Boolean)
    underline_direction: Mapped[str | None] = mapped_column(String(20))
    text_case: Mapped[str | None] = mapped_column(String(20))
    font_style: Mapped[str | None] = mapped_column(String(20))
    font_weight: Mapped[str | None] = mapped_column(String(20))
    text_decoration: Mapped[str | None] = mapped_column(String(30))
    text_transform: Mapped[str | None] = mapped_column(String(30))
    font_variant: Mapped[str | None] = mapped_column(String(30))


class LayerShape(Base):
    __tablename__ = "layer_shape"

    layer_id: Mapped[uuid.UUID] = _layer_fk()
    shape_kind: Mapped[str | None] = mapped_column(String(30))
    svg_path: Mapped[str | None] = mapped_column(Text)
    points: Mapped[list | None] = mapped_column(JSONType)
    rx: Mapped[float | None] = mapped_column(Float)
    ry: Mapped[float | None] = mapped_column(Float)
    fill_hex: Mapped[str | None] = mapped_column(String(20))
    fill_alpha: Mapped[float | None] = mapped_column(Float)
    gradient: Mapped[dict | None] = mapped_column(JSONType)
    stroke_hex: Mapped[str | None] = mapped_column(String(20))
    stroke_alpha: Mapped[float | None] = mapped_column(Float)
    stroke_width: Mapped[float | None] = mapped_column(Float)
    stroke_dash: Mapped[list | None] = mapped_column(JSONType)
    line_cap: Mapped[str | None] = mapped_column(String(20))
    line_join: Mapped[str | None] = mapped_column(String(20))
    meta: Mapped[dict | None] = mapped_column(JSONType)


class LayerIcon(Base):
    __tablename__ = "layer_icon"

    layer_id: Mapped[uuid.UUID] = _layer_fk()
    asset_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey("assets.id"))
    tint_hex: Mapped[str | None] = mapped_column(String(20))
    tint_alpha: Mapped[float | None] = mapped_column(Float)
    allow_recolor: Mapped[bool | None] = mapped_column(Boolean)


class LayerImage(Base):
    __tablename__ = "layer_image"

    layer_id: Mapped[uuid.UUID] = _layer_fk()
    asset_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey("assets.id"))
    crop: Mapped[dict | None] = mapped_column(JSONType)
    fit: Mapped[str | None] = mapped_column(String(20))
    rounding: Mapped[float | None] = mapped_column(Float)
    blur: Mapped[float | None] = mapped_column(Float)
    brightness: Mapped[float | None] = mapped_column(Float)
    contrast: Mapped[float | None] = mapped_column(Float)


class LayerBackground(Base):
    __tablename__ = "layer_background"

    layer_id: Mapped[uuid.UUID] = _layer_fk()
    mode: Mapped[str | None] = mapped_column(String(20))
    fill_hex: Mapped[str | None] = mapped_column(String(20))
    fill_alpha: Mapped[float | None] = mapped_column(Float)
    gradient: Mapped[dict | None] = mapped_column(JSONType)
    asset_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey("assets.id"))
    repeat: Mapped[str | None] = mapped_column(String(20))
    position: Mapped[str | None] = mapped_column(String(30))
    size: Mapped[str | None] = mapped_column(String(30))
