"""
Logo Designer Backend — Row Projection Tests
==============================================

What we test:
    ✅ maybe_number is total (None, numbers, numeric text, garbage)
    ✅ Each layer type projects into its own variant
    ✅ Columns of non-matching detail tables are ignored
    ✅ Missing detail rows and unknown types become UnknownLayer
    ✅ JSON columns delivered as text are parsed
"""

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from conftest import build_layer_row, build_logo_row
from logo_api.schemas.rows import (
    BackgroundLayer,
    IconLayer,
    ImageLayer,
    ShapeLayer,
    TextLayer,
    UnknownLayer,
    maybe_int,
    maybe_number,
    parse_json,
    project_layer_row,
    project_logo_row,
)


class TestMaybeNumber:

    @pytest.mark.parametrize(
        "value,expected",
        [(None, None), (0, 0.0), (3, 3.0), (0.5, 0.5), ("0.5", 0.5), (" 2 ", 2.0),
         (Decimal("1.25"), 1.25), ("abc", None), ("", None), (float("nan"), None),
         ([1], None)],
    )
    def test_coercion(self, value, expected):
        assert maybe_number(value) == expected

    def test_result_is_float(self):
        assert isinstance(maybe_number("7"), float)

    def test_maybe_int_truncates(self):
        assert maybe_int("3.9") == 3
        assert maybe_int(None) is None

    def test_parse_json(self):
        assert parse_json('{"src": "a.svg"}') == {"src": "a.svg"}
        assert parse_json("not json") is None
        assert parse_json({"already": "parsed"}) == {"already": "parsed"}


class TestProjectLayerRow:

    def test_numeric_strings_become_numbers(self):
        layer = project_layer_row(build_layer_row("TEXT", x_norm="0.5", scale="2"))
        assert layer.x == 0.5
        assert layer.scale == 2.0

    def test_text_variant(self):
        layer = project_layer_row(
            build_layer_row("TEXT", content="Hello", fill_hex="#111111", font_family="Inter",
                            default_font_weight="700")
        )
        assert isinstance(layer, TextLayer)
        assert layer.kind == "text"
        assert layer.content == "Hello"
        assert layer.font.family == "Inter"
        assert layer.font.weight == "700"

    def test_foreign_detail_columns_are_ignored(self):
        # A stale shape row joined onto a TEXT layer must not leak through
        layer = project_layer_row(
            build_layer_row("TEXT", fill_hex="#111111", shape_fill_hex="#999999",
                            shape_layer_id=uuid.uuid4())
        )
        assert isinstance(layer, TextLayer)
        assert not hasattr(layer, "shape_kind")
        assert layer.fill_hex == "#111111"

    def test_shape_meta_from_json_text(self):
        layer = project_layer_row(
            build_layer_row("SHAPE", shape_kind="circle", shape_meta='{"src": "shapes/circle.svg"}')
        )
        assert isinstance(layer, ShapeLayer)
        assert layer.meta == {"src": "shapes/circle.svg"}

    def test_icon_keeps_matching_asset(self):
        asset_id = uuid.uuid4()
        layer = project_layer_row(
            build_layer_row("ICON", icon_asset_id=asset_id, asset_id=asset_id,
                            asset_url="https://cdn/icon.svg", tint_hex="#ff0000")
        )
        assert isinstance(layer, IconLayer)
        assert layer.asset.url == "https://cdn/icon.svg"
        assert layer.asset_id == str(asset_id)

    def test_background_ignores_asset_of_another_detail(self):
        layer = project_layer_row(
            build_layer_row("BACKGROUND", bg_asset_id=uuid.uuid4(), asset_id=uuid.uuid4(),
                            asset_url="https://cdn/other.png")
        )
        assert isinstance(layer, BackgroundLayer)
        assert layer.asset is None

    def test_image_variant(self):
        asset_id = uuid.uuid4()
        layer = project_layer_row(
            build_layer_row("IMAGE", image_asset_id=asset_id, asset_id=asset_id,
                            asset_url="https://cdn/photo.jpg", blur="1.5")
        )
        assert isinstance(layer, ImageLayer)
        assert layer.blur == 1.5

    def test_missing_detail_row_is_unknown(self):
        layer = project_layer_row(build_layer_row("TEXT", text_layer_id=None))
        assert isinstance(layer, UnknownLayer)
        assert layer.type == "TEXT"

    def test_unknown_type(self):
        layer = project_layer_row(build_layer_row("STICKER"))
        assert isinstance(layer, UnknownLayer)

    def test_variants_are_immutable(self):
        layer = project_layer_row(build_layer_row("TEXT"))
        with pytest.raises(ValidationError):
            layer.x = 0.1


class TestProjectLogoRow:

    def test_ids_are_strings(self):
        logo = project_logo_row(build_logo_row(template_id=uuid.UUID(int=7)))
        assert logo.id == "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"
        assert logo.template_id == str(uuid.UUID(int=7))

    def test_numbers_and_json(self):
        logo = project_logo_row(
            build_logo_row(canvas_w="800", canvas_h=Decimal("400"), colors_used='[{"role": "text", "color": "#000"}]')
        )
        assert logo.canvas_w == 800.0
        assert logo.canvas_h == 400.0
        assert logo.colors_used == [{"role": "text", "color": "#000"}]

    def test_null_legacy_flag_means_unsupported(self):
        assert project_logo_row(build_logo_row(legacy_format_supported=None)).legacy_format_supported is False

    def test_unknown_columns_are_ignored(self):
        logo = project_logo_row(build_logo_row(tags_en=["x"], thumbnail_url="t.png"))
        assert logo.title_en == "Coffee House"
