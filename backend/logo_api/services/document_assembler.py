"""
Logo Designer Backend — Document Assembler (Business Logic Orchestrator)
==========================================================================

What:  Builds the nested mobile document of a logo from its relational rows.
Why:   Mobile clients render a logo from one self-contained JSON tree: canvas,
       ordered layers, colors, export preferences. Old app versions need the
       same tree with legacy gradient/background field names.
How:   The repository returns wide rows; `project_layer_row()` turns each one
       into a typed variant; the pure builders below turn variants into dicts.
       Localization picks the display texts, and the legacy translator runs on
       a copy of the canvas when requested.
Who:   Called by the /api/logo/... mobile route handlers.

Assembly Flow (GET /api/logo/{id}/mobile):
    ┌──────────┐    ┌────────────┐    ┌────────────┐    ┌────────────┐
    │ Validate │───▶│ Fetch logo │───▶│   Fetch    │───▶│   Build    │
    │   UUID   │    │ + category │    │   layers   │    │  document  │
    └──────────┘    └────────────┘    └────────────┘    └────────────┘
         │                │                                    │
     400 invalid      404 missing                    legacy translation
                                                     + localization

Defaults:
    Numeric and boolean fields fall back to their default only when the
    stored value is null. A stored 0 or false is emitted as-is. Text fields
    also treat the empty string as missing.

Design Decision:
    DocumentAssembler is stateless; the session is passed into each call and
    nothing is cached between requests. `legacy_format_supported` is read from
    the row on every request.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from logo_api.exceptions import (
    DatabaseError,
    InvalidLogoIdError,
    LegacyFormatUnsupportedError,
    LogoAPIError,
    NotFoundError,
)
from logo_api.schemas.rows import (
    BackgroundLayer,
    IconLayer,
    ImageLayer,
    LayerRow,
    LogoRecord,
    ShapeLayer,
    TextLayer,
    project_layer_row,
    project_logo_row,
)
from logo_api.services.legacy_format import apply_legacy_if_requested, to_legacy_gradient
from logo_api.services.localizer import (
    format_localized_datetime,
    get_message,
    resolve_localized,
    text_direction,
    to_iso8601,
)
from logo_api.services.logo_repository import logo_repository

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)

DEFAULT_TAGS = ["logo", "design", "responsive"]
RESPONSIVE_DESCRIPTION = "Fully responsive logo data - no absolute sizes stored"


def _or_default(value: Any, default: Any) -> Any:
    """Null-only fallback: 0, 0.0 and False are real values."""
    return default if value is None else value


def is_valid_logo_id(logo_id: Any) -> bool:
    # fullmatch: a trailing newline is not part of a UUID
    return isinstance(logo_id, str) and UUID_PATTERN.fullmatch(logo_id) is not None


# ══════════════════════════════════════════════════════════════════════════
# Layer builders
# ══════════════════════════════════════════════════════════════════════════


def _shared_block(layer: LayerRow) -> Dict[str, Any]:
    return {
        "layerId": layer.layer_id,
        "type": layer.type.lower(),
        "visible": layer.visible,
        "order": layer.order,
        "position": {
            "x": _or_default(layer.x, 0.5),
            "y": _or_default(layer.y, 0.5),
        },
        "scaleFactor": _or_default(layer.scale, 1),
        "rotation": _or_default(layer.rotation, 0),
        "opacity": _or_default(layer.opacity, 1),
        "flip": {
            "horizontal": layer.flip_horizontal,
            "vertical": layer.flip_vertical,
        },
    }


def _text_block(layer: TextLayer, legacy: bool) -> Dict[str, Any]:
    font = layer.font
    font_weight = layer.font_weight or (font.weight if font else None) or "normal"
    font_style = layer.font_style or (font.style if font else None) or "normal"

    if legacy:
        gradient = to_legacy_gradient(layer.gradient) if layer.gradient else None
    else:
        gradient = layer.gradient or None

    return {
        "value": layer.content or "",
        "font": (font.family if font else None) or "Arial",
        "fontSize": _or_default(layer.font_size, 48),
        "fontColor": layer.fill_hex or "#000000",
        "fontWeight": font_weight,
        "fontStyle": font_style,
        "alignment": layer.align or "center",
        "baseline": layer.baseline or "alphabetic",
        "lineHeight": _or_default(layer.line_height, 1.0),
        "letterSpacing": _or_default(layer.letter_spacing, 0),
        "fillAlpha": _or_default(layer.fill_alpha, 1.0),
        "strokeHex": layer.stroke_hex or None,
        "strokeAlpha": layer.stroke_alpha,
        "strokeWidth": layer.stroke_width,
        "strokeAlign": layer.stroke_align or None,
        "gradient": gradient,
        "underline": _or_default(layer.underline, False),
        "underlineDirection": layer.underline_direction or "horizontal",
        "textCase": layer.text_case or "normal",
        "textDecoration": layer.text_decoration or "none",
        "textTransform": layer.text_transform or "none",
        "fontVariant": layer.font_variant or "normal",
    }


def _shape_block(layer: ShapeLayer, legacy: bool) -> Dict[str, Any]:
    return {
        "src": (layer.meta or {}).get("src"),
        "type": layer.shape_kind or "rect",
        "color": layer.fill_hex or "#000000",
        "strokeColor": layer.stroke_hex or None,
        "strokeWidth": _or_default(layer.stroke_width, 0),
    }


def _icon_block(layer: IconLayer, legacy: bool) -> Dict[str, Any]:
    asset = layer.asset
    src = (asset.url or asset.name) if asset else None
    if not src:
        src = f"icon_{layer.asset_id}" if layer.asset_id else ""
    return {"src": src, "color": layer.tint_hex or "#000000"}


def _image_block(layer: ImageLayer, legacy: bool) -> Optional[Dict[str, Any]]:
    if layer.asset is None or not layer.asset.url:
        return None
    return {"type": "imported", "path": layer.asset.url}


def _background_block(layer: BackgroundLayer, legacy: bool) -> Dict[str, Any]:
    url = layer.asset.url if layer.asset else None
    image = None
    if url:
        image = {"type": "imported", "path": url}
        if legacy:
            image["url"] = url
        image["src"] = layer.asset.name or url
    return {
        "type": layer.mode or "solid",
        "color": layer.fill_hex or "#ffffff",
        "image": image,
    }


_VARIANT_BLOCKS = {
    "text": _text_block,
    "shape": _shape_block,
    "icon": _icon_block,
    "image": _image_block,
    "background": _background_block,
}


def build_layer(layer: LayerRow, legacy: bool = False) -> Dict[str, Any]:
    """
    One output layer: the shared block plus exactly one variant block,
    keyed by the variant name (`text`, `shape`, ...). Unknown layers carry
    only the shared block.
    """
    block = _VARIANT_BLOCKS.get(layer.kind)
    if block is None:
        return _shared_block(layer)
    return {**_shared_block(layer), layer.kind: block(layer, legacy)}


def derive_colors_used(layers: Iterable[LayerRow]) -> List[Dict[str, str]]:
    """
    Colors referenced by the layers, first-seen order, unique per (role, color).

        text fill  → role "text"
        icon tint  → role "icon"
        shape fill → role "shape"
    """
    seen = set()
    colors: List[Dict[str, str]] = []
    for layer in layers:
        if isinstance(layer, TextLayer):
            role, color = "text", layer.fill_hex
        elif isinstance(layer, IconLayer):
            role, color = "icon", layer.tint_hex
        elif isinstance(layer, ShapeLayer):
            role, color = "shape", layer.fill_hex
        else:
            continue
        if not color or (role, color) in seen:
            continue
        seen.add((role, color))
        colors.append({"role": role, "color": color})
    return colors


def aspect_ratio(width: Optional[float], height: Optional[float]) -> float:
    if not height or width is None:
        return 1.0
    return width / height


# ══════════════════════════════════════════════════════════════════════════
# Document builder
# ══════════════════════════════════════════════════════════════════════════


def build_canvas_background(logo: LogoRecord) -> Dict[str, Any]:
    """
    Canonical canvas background. Only the active type's fields are read;
    color, gradient and image columns left over from an earlier type are
    ignored and come out as None.
    """
    background_type = logo.canvas_background_type or "solid"
    solid_color = None
    gradient = None
    image = None
    if background_type == "solid":
        solid_color = logo.canvas_background_solid_color or "#ffffff"
    elif background_type == "gradient":
        gradient = logo.canvas_background_gradient or None
    elif background_type == "image" and logo.canvas_background_image_path:
        image = {
            "type": logo.canvas_background_image_type or "imported",
            "path": logo.canvas_background_image_path,
        }
    return {
        "type": background_type,
        "solidColor": solid_color,
        "gradient": gradient,
        "image": image,
    }


def _description(logo: LogoRecord, lang: str) -> Optional[str]:
    text = resolve_localized(
        lang, en=logo.description_en, ar=logo.description_ar, generic=logo.description
    )
    if text is not None or logo.created_at is None:
        return text
    return get_message(lang, "logoCreatedOn", date=to_iso8601(logo.created_at))


def build_document(
    logo: LogoRecord,
    layers: List[LayerRow],
    lang: str,
    legacy_mode: bool = False,
    want_legacy_canvas: bool = False,
) -> Dict[str, Any]:
    """
    Assemble the full mobile document.

    Args:
        logo:               Projected logo row (with category names)
        layers:             Projected layer rows, already in rendering order
        lang:               Resolved response language
        legacy_mode:        Full legacy document (legacy endpoints)
        want_legacy_canvas: Translate only the canvas background
                            (`?format=legacy` on the canonical endpoint)
    """
    canvas = {
        "aspectRatio": aspect_ratio(logo.canvas_w, logo.canvas_h),
        "background": build_canvas_background(logo),
    }
    canvas = apply_legacy_if_requested(canvas, legacy_mode or want_legacy_canvas)

    metadata: Dict[str, Any] = {
        "createdAt": to_iso8601(logo.created_at),
        "updatedAt": to_iso8601(logo.updated_at),
        "tags": _or_default(logo.tags, list(DEFAULT_TAGS)),
        "version": _or_default(logo.version, 3),
        "responsive": _or_default(logo.responsive, True),
        "createdAtFormatted": format_localized_datetime(logo.created_at, lang),
        "updatedAtFormatted": format_localized_datetime(logo.updated_at, lang),
    }
    if legacy_mode:
        metadata["legacyFormat"] = True
        metadata["legacyVersion"] = logo.legacy_compatibility_version or "1.0"
        metadata["mobileOptimized"] = _or_default(logo.mobile_optimized, True)

    colors_used = logo.colors_used
    if colors_used is None:
        colors_used = derive_colors_used(layers)

    return {
        "logoId": logo.id,
        "templateId": logo.template_id,
        "userId": logo.owner_id or "current_user",
        "name": resolve_localized(
            lang, en=logo.title_en, ar=logo.title_ar, generic=logo.title
        ),
        "description": _description(logo, lang),
        "categoryId": logo.category_id,
        "categoryName": resolve_localized(
            lang,
            en=logo.category_name_en,
            ar=logo.category_name_ar,
            generic=logo.category_name,
        ),
        "canvas": canvas,
        "layers": [build_layer(layer, legacy=legacy_mode) for layer in layers],
        "colorsUsed": colors_used,
        "alignments": {
            "verticalAlign": logo.vertical_align or "center",
            "horizontalAlign": logo.horizontal_align or "center",
        },
        "responsive": {
            "version": logo.responsive_version or "3.0",
            "description": logo.responsive_description or RESPONSIVE_DESCRIPTION,
            "scalingMethod": logo.scaling_method or "scaleFactor",
            "positionMethod": logo.position_method or "relative",
            "fullyResponsive": _or_default(logo.fully_responsive, True),
        },
        "metadata": metadata,
        "export": {
            "format": logo.export_format or "png",
            "transparentBackground": _or_default(logo.export_transparent_background, True),
            "quality": _or_default(logo.export_quality, 100),
            "responsive": {
                "scalable": _or_default(logo.export_scalable, True),
                "maintainAspectRatio": _or_default(logo.export_maintain_aspect_ratio, True),
            },
        },
        "language": lang,
        "direction": text_direction(lang),
    }


# ══════════════════════════════════════════════════════════════════════════
# Orchestrator
# ══════════════════════════════════════════════════════════════════════════


class DocumentAssembler:
    """
    Business logic layer for the mobile read path.

    Responsibilities:
        - get_document(): one canonical document (optionally legacy canvas)
        - get_legacy_document(): one legacy document, gated by the logo flag
        - list_documents(): a page of documents, canonical or legacy

    Error Handling Strategy:
        Malformed ids and missing logos become InvalidLogoIdError /
        NotFoundError. Our own exceptions propagate as-is; anything else is
        logged with context and wrapped in DatabaseError (hides internals).
    """

    async def get_document(
        self,
        db: AsyncSession,
        logo_id: str,
        lang: str,
        want_legacy: bool = False,
    ) -> Dict[str, Any]:
        """
        Canonical document of one logo.

        Raises:
            InvalidLogoIdError: `logo_id` is not a canonical UUID (→ 400)
            NotFoundError: No logo with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        logo, layers = await self._load(db, logo_id)
        return build_document(logo, layers, lang, want_legacy_canvas=want_legacy)

    async def get_legacy_document(
        self, db: AsyncSession, logo_id: str, lang: str
    ) -> Dict[str, Any]:
        """
        Legacy document of one logo.

        Raises:
            LegacyFormatUnsupportedError: The logo opted out (→ 400)
            plus everything get_document() raises
        """
        logo, layers = await self._load(db, logo_id, require_legacy=True)
        return build_document(logo, layers, lang, legacy_mode=True)

    async def list_documents(
        self,
        db: AsyncSession,
        page: int,
        limit: int,
        lang: str,
        legacy: bool = False,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        One page of documents, newest logos first, and the total count.

        The legacy list only contains logos with `legacy_format_supported`.
        Layers of the whole page are fetched in a single query and grouped
        by logo, keeping each logo's rendering order.
        """
        try:
            offset = (page - 1) * limit
            logo_rows = await logo_repository.list_logos(
                db, limit=limit, offset=offset, legacy_only=legacy
            )
            total = await logo_repository.count_logos(db, legacy_only=legacy)
            if not logo_rows:
                return [], total

            logos = [project_logo_row(row) for row in logo_rows]
            layer_rows = await logo_repository.fetch_layers(db, [logo.id for logo in logos])

            by_logo: Dict[str, List[LayerRow]] = {}
            for row in layer_rows:
                layer = project_layer_row(row)
                by_logo.setdefault(layer.logo_id, []).append(layer)

            documents = [
                build_document(logo, by_logo.get(logo.id, []), lang, legacy_mode=legacy)
                for logo in logos
            ]
            logger.info(
                "Listed %d of %d logos (page=%d, limit=%d, legacy=%s)",
                len(documents), total, page, limit, legacy,
            )
            return documents, total

        except LogoAPIError:
            raise
        except Exception as e:
            logger.error("Error listing mobile logos: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not list logos. Please try again.",
                context={"page": page, "limit": limit, "legacy": legacy},
            )

    async def _load(
        self,
        db: AsyncSession,
        logo_id: str,
        require_legacy: bool = False,
    ) -> Tuple[LogoRecord, List[LayerRow]]:
        # Checked before any query: a malformed id never reaches the database
        if not is_valid_logo_id(logo_id):
            raise InvalidLogoIdError(logo_id)

        try:
            logo_row = await logo_repository.fetch_logo(db, logo_id)
            if logo_row is None:
                raise NotFoundError(resource="logo", resource_id=logo_id)

            logo = project_logo_row(logo_row)
            if require_legacy and not logo.legacy_format_supported:
                raise LegacyFormatUnsupportedError(logo_id)

            layer_rows = await logo_repository.fetch_layers(db, [logo.id])
            layers = [project_layer_row(row) for row in layer_rows]
            logger.info("Assembled logo %s with %d layers", logo_id, len(layers))
            return logo, layers

        except LogoAPIError:
            raise
        except Exception as e:
            logger.error("Database error fetching logo %s: %s", logo_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the logo. Please try again.",
                context={"logo_id": logo_id},
            )


# Module-level singleton
document_assembler = DocumentAssembler()
