"""
Logo Designer Backend — Typed Rows at the Data-Access Boundary
================================================================

What:  Immutable Pydantic values for the rows the mobile read path fetches,
       plus the coercion helpers that build them.
Why:   The layer query is one wide LEFT JOIN over all five detail tables, so
       every row carries columns of four tables that do not apply to it.
       Projecting the row once, here, into a closed set of variants means the
       assembler matches on `kind` and never re-checks string discriminants
       or reads a foreign table's column by accident.
How:   `project_layer_row()` reads the shared columns once, picks the variant
       from `type` and builds it in one step. Numbers go through
       `maybe_number()` so a driver handing back "0.5" still yields 0.5.

Variants:
    TextLayer · ShapeLayer · IconLayer · ImageLayer · BackgroundLayer
    UnknownLayer  (unrecognized type, or the detail row is missing)
"""

import json
import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


# ══════════════════════════════════════════════════════════════════════════
# Coercion helpers
# ══════════════════════════════════════════════════════════════════════════


def maybe_number(value: Any) -> Optional[float]:
    """
    Total numeric coercion: None stays None, anything numeric or numeric-text
    becomes a float, everything else (including NaN/inf) becomes None.

    Example:
        >>> maybe_number("0.5")
        0.5
        >>> maybe_number(0) == 0.0
        True
    """
    if value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def maybe_int(value: Any) -> Optional[int]:
    """Like maybe_number, truncated toward zero."""
    number = maybe_number(value)
    return None if number is None else int(number)


def parse_json(value: Any) -> Any:
    """JSON columns may come back as text depending on the driver."""
    if isinstance(value, (str, bytes)):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


def json_object(value: Any) -> Optional[Dict[str, Any]]:
    parsed = parse_json(value)
    return parsed if isinstance(parsed, dict) else None


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _flag(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


# ══════════════════════════════════════════════════════════════════════════
# Referenced resources
# ══════════════════════════════════════════════════════════════════════════


class AssetRef(BaseModel):
    """The asset joined onto an icon, image or background layer."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    has_alpha: Optional[bool] = None
    vector_svg: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None


class FontRef(BaseModel):
    """The font joined onto a text layer."""
    model_config = ConfigDict(frozen=True)

    family: Optional[str] = None
    style: Optional[str] = None
    weight: Optional[str] = None
    url: Optional[str] = None
    fallbacks: Any = None


# ══════════════════════════════════════════════════════════════════════════
# Layer variants
# ══════════════════════════════════════════════════════════════════════════


class LayerBase(BaseModel):
    """Columns of the `layers` table shared by every variant."""
    model_config = ConfigDict(frozen=True)

    layer_id: str
    logo_id: Optional[str] = None
    type: str
    visible: bool = False
    order: int = 0
    x: Optional[float] = None
    y: Optional[float] = None
    scale: Optional[float] = None
    rotation: Optional[float] = None
    opacity: Optional[float] = None
    flip_horizontal: bool = False
    flip_vertical: bool = False
    created_at: Optional[datetime] = None


class TextLayer(LayerBase):
    kind: Literal["text"] = "text"
    content: Optional[str] = None
    font: Optional[FontRef] = None
    font_size: Optional[float] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    align: Optional[str] = None
    baseline: Optional[str] = None
    fill_hex: Optional[str] = None
    fill_alpha: Optional[float] = None
    stroke_hex: Optional[str] = None
    stroke_alpha: Optional[float] = None
    stroke_width: Optional[float] = None
    stroke_align: Optional[str] = None
    gradient: Any = None
    underline: Optional[bool] = None
    underline_direction: Optional[str] = None
    text_case: Optional[str] = None
    font_style: Optional[str] = None
    font_weight: Optional[str] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    font_variant: Optional[str] = None


class ShapeLayer(LayerBase):
    kind: Literal["shape"] = "shape"
    shape_kind: Optional[str] = None
    svg_path: Optional[str] = None
    points: Any = None
    rx: Optional[float] = None
    ry: Optional[float] = None
    fill_hex: Optional[str] = None
    fill_alpha: Optional[float] = None
    gradient: Any = None
    stroke_hex: Optional[str] = None
    stroke_alpha: Optional[float] = None
    stroke_width: Optional[float] = None
    stroke_dash: Any = None
    line_cap: Optional[str] = None
    line_join: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None


class IconLayer(LayerBase):
    kind: Literal["icon"] = "icon"
    asset_id: Optional[str] = None
    asset: Optional[AssetRef] = None
    tint_hex: Optional[str] = None
    tint_alpha: Optional[float] = None
    allow_recolor: Optional[bool] = None


class ImageLayer(LayerBase):
    kind: Literal["image"] = "image"
    asset_id: Optional[str] = None
    asset: Optional[AssetRef] = None
    crop: Any = None
    fit: Optional[str] = None
    rounding: Optional[float] = None
    blur: Optional[float] = None
    brightness: Optional[float] = None
    contrast: Optional[float] = None


class BackgroundLayer(LayerBase):
    kind: Literal["background"] = "background"
    mode: Optional[str] = None
    fill_hex: Optional[str] = None
    fill_alpha: Optional[float] = None
    gradient: Any = None
    asset_id: Optional[str] = None
    asset: Optional[AssetRef] = None
    repeat: Optional[str] = None
    position: Optional[str] = None
    size: Optional[str] = None


class UnknownLayer(LayerBase):
    """A layer with an unrecognized type or without its detail row."""
    kind: Literal["unknown"] = "unknown"


LayerRow = Union[TextLayer, ShapeLayer, IconLayer, ImageLayer, BackgroundLayer, UnknownLayer]


# ══════════════════════════════════════════════════════════════════════════
# Projection
# ══════════════════════════════════════════════════════════════════════════


def _shared_fields(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layer_id": str(row["id"]),
        "logo_id": _text(row.get("logo_id")),
        "type": str(row.get("type") or ""),
        "visible": bool(row.get("is_visible")),
        "order": maybe_int(row.get("z_index")) or 0,
        "x": maybe_number(row.get("x_norm")),
        "y": maybe_number(row.get("y_norm")),
        "scale": maybe_number(row.get("scale")),
        "rotation": maybe_number(row.get("rotation_deg")),
        "opacity": maybe_number(row.get("opacity")),
        "flip_horizontal": bool(row.get("flip_horizontal")),
        "flip_vertical": bool(row.get("flip_vertical")),
        "created_at": row.get("created_at"),
    }


def _asset(row: Mapping[str, Any], expected_id: Any) -> Optional[AssetRef]:
    """The joined asset, but only when it is the one this detail row points at."""
    asset_id = row.get("asset_id")
    if asset_id is None or expected_id is None or str(asset_id) != str(expected_id):
        return None
    return AssetRef(
        id=str(asset_id),
        kind=row.get("asset_kind"),
        name=row.get("asset_name"),
        url=row.get("asset_url"),
        width=maybe_number(row.get("asset_width")),
        height=maybe_number(row.get("asset_height")),
        has_alpha=_flag(row.get("asset_has_alpha")),
        vector_svg=row.get("vector_svg"),
        meta=json_object(row.get("asset_meta")),
    )


def _font(row: Mapping[str, Any]) -> Optional[FontRef]:
    if row.get("font_family") is None:
        return None
    return FontRef(
        family=row.get("font_family"),
        style=row.get("default_font_style"),
        weight=row.get("default_font_weight"),
        url=row.get("font_url"),
        fallbacks=parse_json(row.get("font_fallbacks")),
    )


def _text_layer(shared: Dict[str, Any], row: Mapping[str, Any]) -> TextLayer:
    return TextLayer(
        **shared,
        content=row.get("content"),
        font=_font(row),
        font_size=maybe_number(row.get("font_size")),
        line_height=maybe_number(row.get("line_height")),
        letter_spacing=maybe_number(row.get("letter_spacing")),
        align=row.get("align"),
        baseline=row.get("baseline"),
        fill_hex=row.get("fill_hex"),
        fill_alpha=maybe_number(row.get("fill_alpha")),
        stroke_hex=row.get("stroke_hex"),
        stroke_alpha=maybe_number(row.get("stroke_alpha")),
        stroke_width=maybe_number(row.get("stroke_width")),
        stroke_align=row.get("stroke_align"),
        gradient=parse_json(row.get("text_gradient")),
        underline=_flag(row.get("underline")),
        underline_direction=row.get("underline_direction"),
        text_case=row.get("text_case"),
        font_style=row.get("font_style"),
        font_weight=row.get("font_weight"),
        text_decoration=row.get("text_decoration"),
        text_transform=row.get("text_transform"),
        font_variant=row.get("font_variant"),
    )


def _shape_layer(shared: Dict[str, Any], row: Mapping[str, Any]) -> ShapeLayer:
    return ShapeLayer(
        **shared,
        shape_kind=row.get("shape_kind"),
        svg_path=row.get("svg_path"),
        points=parse_json(row.get("points")),
        rx=maybe_number(row.get("rx")),
        ry=maybe_number(row.get("ry")),
        fill_hex=row.get("shape_fill_hex"),
        fill_alpha=maybe_number(row.get("shape_fill_alpha")),
        gradient=parse_json(row.get("shape_gradient")),
        stroke_hex=row.get("shape_stroke_hex"),
        stroke_alpha=maybe_number(row.get("shape_stroke_alpha")),
        stroke_width=maybe_number(row.get("shape_stroke_width")),
        stroke_dash=parse_json(row.get("stroke_dash")),
        line_cap=row.get("line_cap"),
        line_join=row.get("line_join"),
        meta=json_object(row.get("shape_meta")),
    )


def _icon_layer(shared: Dict[str, Any], row: Mapping[str, Any]) -> IconLayer:
    asset_id = row.get("icon_asset_id")
    return IconLayer(
        **shared,
        asset_id=_text(asset_id),
        asset=_asset(row, asset_id),
        tint_hex=row.get("tint_hex"),
        tint_alpha=maybe_number(row.get("tint_alpha")),
        allow_recolor=_flag(row.get("allow_recolor")),
    )


def _image_layer(shared: Dict[str, Any], row: Mapping[str, Any]) -> ImageLayer:
    asset_id = row.get("image_asset_id")
    return ImageLayer(
        **shared,
        asset_id=_text(asset_id),
        asset=_asset(row, asset_id),
        crop=parse_json(row.get("crop")),
        fit=row.get("fit"),
        rounding=maybe_number(row.get("rounding")),
        blur=maybe_number(row.get("blur")),
        brightness=maybe_number(row.get("brightness")),
        contrast=maybe_number(row.get("contrast")),
    )


def _background_layer(shared: Dict[str, Any], row: Mapping[str, Any]) -> BackgroundLayer:
    asset_id = row.get("bg_asset_id")
    return BackgroundLayer(
        **shared,
        mode=row.get("mode"),
        fill_hex=row.get("bg_fill_hex"),
        fill_alpha=maybe_number(row.get("bg_fill_alpha")),
        gradient=parse_json(row.get("bg_gradient")),
        asset_id=_text(asset_id),
        asset=_asset(row, asset_id),
        repeat=row.get("repeat"),
        position=row.get("position"),
        size=row.get("size"),
    )


# layer type → (column proving the detail row exists, builder)
_VARIANTS = {
    "TEXT": ("text_layer_id", _text_layer),
    "SHAPE": ("shape_layer_id", _shape_layer),
    "ICON": ("icon_layer_id", _icon_layer),
    "IMAGE": ("image_layer_id", _image_layer),
    "BACKGROUND": ("bg_layer_id", _background_layer),
}


def project_layer_row(row: Mapping[str, Any]) -> LayerRow:
    """
    Turn one wide layer row into its variant.

    Detail columns of tables other than the one matching `type` are never
    read. Rows that do not carry a presence column at all (hand-built rows)
    are treated as having their detail row.
    """
    shared = _shared_fields(row)
    variant = _VARIANTS.get(shared["type"].upper())
    if variant is None:
        return UnknownLayer(**shared)

    presence_column, build = variant
    if presence_column in row and row[presence_column] is None:
        return UnknownLayer(**shared)
    return build(shared, row)


# ══════════════════════════════════════════════════════════════════════════
# Logo row
# ══════════════════════════════════════════════════════════════════════════


class LogoRecord(BaseModel):
    """The `logos` row joined with its (optional) category."""
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: Optional[str] = None
    template_id: Optional[str] = None
    category_id: Optional[str] = None

    title: Optional[str] = None
    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    tags: Any = None
    category_name: Optional[str] = None
    category_name_en: Optional[str] = None
    category_name_ar: Optional[str] = None

    canvas_w: Optional[float] = None
    canvas_h: Optional[float] = None
    dpi: Optional[int] = None
    colors_used: Any = None
    vertical_align: Optional[str] = None
    horizontal_align: Optional[str] = None

    canvas_background_type: Optional[str] = None
    canvas_background_solid_color: Optional[str] = None
    canvas_background_gradient: Any = None
    canvas_background_image_type: Optional[str] = None
    canvas_background_image_path: Optional[str] = None

    responsive_version: Optional[str] = None
    responsive_description: Optional[str] = None
    scaling_method: Optional[str] = None
    position_method: Optional[str] = None
    fully_responsive: Optional[bool] = None
    version: Optional[int] = None
    responsive: Optional[bool] = None

    export_format: Optional[str] = None
    export_transparent_background: Optional[bool] = None
    export_quality: Optional[int] = None
    export_scalable: Optional[bool] = None
    export_maintain_aspect_ratio: Optional[bool] = None

    legacy_format_supported: bool = False
    legacy_compatibility_version: Optional[str] = None
    mobile_optimized: Optional[bool] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


_LOGO_NUMBERS = {"canvas_w", "canvas_h"}
_LOGO_INTEGERS = {"dpi", "version", "export_quality"}
_LOGO_FLAGS = {
    "fully_responsive", "responsive", "export_transparent_background",
    "export_scalable", "export_maintain_aspect_ratio", "mobile_optimized",
}
_LOGO_IDS = {"id", "owner_id", "template_id", "category_id"}
_LOGO_JSON = {"tags", "colors_used", "canvas_background_gradient"}


def project_logo_row(row: Mapping[str, Any]) -> LogoRecord:
    """Coerce a logo row (a mapping of column label → value) into a LogoRecord."""
    values: Dict[str, Any] = {}
    for name in LogoRecord.model_fields:
        if name not in row:
            continue
        value = row[name]
        if name in _LOGO_IDS:
            value = _text(value)
        elif name in _LOGO_NUMBERS:
            value = maybe_number(value)
        elif name in _LOGO_INTEGERS:
            value = maybe_int(value)
        elif name in _LOGO_FLAGS:
            value = _flag(value)
        elif name in _LOGO_JSON:
            value = parse_json(value)
        elif name == "legacy_format_supported":
            value = bool(value)
        values[name] = value
    return LogoRecord(**values)
