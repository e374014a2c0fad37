"""
Logo Designer Backend — Logo Repository (Data-Access Boundary)
================================================================

What:  The read queries of the mobile path: one logo, the layers of one or
       more logos, and paginated logo listings.
Why:   Keeps every SQLAlchemy construct in one place. Callers get plain
       mappings keyed by stable column labels, and the assembler never sees
       a Result object or an ORM instance.
How:   `select()` over the ORM tables with LEFT OUTER JOINs and explicit
       labels. Each wide layer row carries every detail table's columns,
       prefixed where names would collide (`shape_fill_hex`, `bg_gradient`).
Who:   Called only by DocumentAssembler.

Layer query plan:
    layers
      ⟕ layer_text        ON layer_id        ⟕ fonts  ON font_id
      ⟕ layer_shape       ON layer_id
      ⟕ layer_icon        ON layer_id
      ⟕ layer_image       ON layer_id
      ⟕ layer_background  ON layer_id
      ⟕ assets            ON the asset id of the detail table matching `type`
    ORDER BY logo_id, z_index ASC, created_at ASC
    → served by idx_layers_logo_order

Joining the asset through a CASE on `type` keeps one row per layer even when
stale detail rows exist in other tables.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import case, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logo_api.models import (
    Asset,
    Category,
    Font,
    Layer,
    LayerBackground,
    LayerIcon,
    LayerImage,
    LayerShape,
    LayerText,
    Logo,
)

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _logo_columns() -> List[Any]:
    return [
        *Logo.__table__.columns,
        Category.name.label("category_name"),
        Category.name_en.label("category_name_en"),
        Category.name_ar.label("category_name_ar"),
    ]


def _layer_columns() -> List[Any]:
    return [
        # ── Shared ────────────────────────────────────────────────────────
        Layer.id, Layer.logo_id, Layer.type, Layer.name, Layer.z_index,
        Layer.x_norm, Layer.y_norm, Layer.scale, Layer.rotation_deg,
        Layer.anchor_x, Layer.anchor_y, Layer.opacity, Layer.blend_mode,
        Layer.is_visible, Layer.is_locked,
        Layer.flip_horizontal, Layer.flip_vertical,
        Layer.created_at, Layer.updated_at,

        # ── TEXT ──────────────────────────────────────────────────────────
        LayerText.layer_id.label("text_layer_id"),
        LayerText.content, LayerText.font_id, LayerText.font_size,
        LayerText.line_height, LayerText.letter_spacing,
        LayerText.align, LayerText.baseline,
        LayerText.fill_hex, LayerText.fill_alpha,
        LayerText.stroke_hex, LayerText.stroke_alpha,
        LayerText.stroke_width, LayerText.stroke_align,
        LayerText.gradient.label("text_gradient"),
        LayerText.underline, LayerText.underline_direction, LayerText.text_case,
        LayerText.font_style, LayerText.font_weight,
        LayerText.text_decoration, LayerText.text_transform, LayerText.font_variant,

        # ── SHAPE ─────────────────────────────────────────────────────────
        LayerShape.layer_id.label("shape_layer_id"),
        LayerShape.shape_kind, LayerShape.svg_path, LayerShape.points,
        LayerShape.rx, LayerShape.ry,
        LayerShape.fill_hex.label("shape_fill_hex"),
        LayerShape.fill_alpha.label("shape_fill_alpha"),
        LayerShape.gradient.label("shape_gradient"),
        LayerShape.stroke_hex.label("shape_stroke_hex"),
        LayerShape.stroke_alpha.label("shape_stroke_alpha"),
        LayerShape.stroke_width.label("shape_stroke_width"),
        LayerShape.stroke_dash, LayerShape.line_cap, LayerShape.line_join,
        LayerShape.meta.label("shape_meta"),

        # ── ICON ──────────────────────────────────────────────────────────
        LayerIcon.layer_id.label("icon_layer_id"),
        LayerIcon.asset_id.label("icon_asset_id"),
        LayerIcon.tint_hex, LayerIcon.tint_alpha, LayerIcon.allow_recolor,

        # ── IMAGE ─────────────────────────────────────────────────────────
        LayerImage.layer_id.label("image_layer_id"),
        LayerImage.asset_id.label("image_asset_id"),
        LayerImage.crop, LayerImage.fit, LayerImage.rounding,
        LayerImage.blur, LayerImage.brightness, LayerImage.contrast,

        # ── BACKGROUND ────────────────────────────────────────────────────
        LayerBackground.layer_id.label("bg_layer_id"),
        LayerBackground.mode,
        LayerBackground.fill_hex.label("bg_fill_hex"),
        LayerBackground.fill_alpha.label("bg_fill_alpha"),
        LayerBackground.gradient.label("bg_gradient"),
        LayerBackground.asset_id.label("bg_asset_id"),
        LayerBackground.repeat, LayerBackground.position, LayerBackground.size,

        # ── Asset / Font ──────────────────────────────────────────────────
        Asset.id.label("asset_id"),
        Asset.kind.label("asset_kind"),
        Asset.name.label("asset_name"),
        Asset.url.label("asset_url"),
        Asset.width.label("asset_width"),
        Asset.height.label("asset_height"),
        Asset.has_alpha.label("asset_has_alpha"),
        Asset.vector_svg,
        Asset.meta.label("asset_meta"),
        Font.family.label("font_family"),
        Font.style.label("default_font_style"),
        Font.weight.label("default_font_weight"),
        Font.url.label("font_url"),
        Font.fallbacks.label("font_fallbacks"),
    ]


def _as_uuid(value: Any) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


class LogoRepository:
    """
    Read-only queries over logos and their layers.

    Every method takes the session explicitly and returns plain dicts, so a
    test can replace the whole repository with an AsyncMock.
    """

    async def fetch_logo(self, db: AsyncSession, logo_id: str) -> Optional[Row]:
        """
        One logo left-joined with its category, or None.

        Query plan:
            SELECT logos.*, categories.name_* FROM logos
            LEFT JOIN categories ON categories.id = logos.category_id
            WHERE logos.id = :id   → PRIMARY KEY lookup
        """
        stmt = (
            select(*_logo_columns())
            .select_from(Logo)
            .outerjoin(Category, Category.id == Logo.category_id)
            .where(Logo.id == _as_uuid(logo_id))
        )
        result = await db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_layers(
        self, db: AsyncSession, logo_ids: Sequence[Any]
    ) -> List[Row]:
        """
        Wide layer rows for the given logos in rendering order.

        Rows are ordered by logo, then z_index, then created_at, so grouping
        by `logo_id` afterwards keeps each logo's stacking order intact.
        """
        if not logo_ids:
            return []

        asset_ref = case(
            (Layer.type == "ICON", LayerIcon.asset_id),
            (Layer.type == "IMAGE", LayerImage.asset_id),
            (Layer.type == "BACKGROUND", LayerBackground.asset_id),
        )
        stmt = (
            select(*_layer_columns())
            .select_from(Layer)
            .outerjoin(LayerText, LayerText.layer_id == Layer.id)
            .outerjoin(LayerShape, LayerShape.layer_id == Layer.id)
            .outerjoin(LayerIcon, LayerIcon.layer_id == Layer.id)
            .outerjoin(LayerImage, LayerImage.layer_id == Layer.id)
            .outerjoin(LayerBackground, LayerBackground.layer_id == Layer.id)
            .outerjoin(Asset, Asset.id == asset_ref)
            .outerjoin(Font, Font.id == LayerText.font_id)
            .where(Layer.logo_id.in_([_as_uuid(i) for i in logo_ids]))
            .order_by(Layer.logo_id, Layer.z_index.asc(), Layer.created_at.asc())
        )
        result = await db.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]
        logger.debug("Fetched %d layer rows for %d logo(s)", len(rows), len(logo_ids))
        return rows

    async def list_logos(
        self,
        db: AsyncSession,
        limit: int,
        offset: int,
        legacy_only: bool = False,
    ) -> List[Row]:
        """A page of logos, newest first; optionally only legacy-capable ones."""
        stmt = (
            select(*_logo_columns())
            .select_from(Logo)
            .outerjoin(Category, Category.id == Logo.category_id)
            .order_by(desc(Logo.created_at), Logo.id)
            .limit(limit)
            .offset(offset)
        )
        if legacy_only:
            stmt = stmt.where(Logo.legacy_format_supported.is_(True))
        result = await db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def count_logos(self, db: AsyncSession, legacy_only: bool = False) -> int:
        stmt = select(func.count()).select_from(Logo)
        if legacy_only:
            stmt = stmt.where(Logo.legacy_format_supported.is_(True))
        result = await db.execute(stmt)
        return int(result.scalar_one())


# Module-level singleton
logo_repository = LogoRepository()
