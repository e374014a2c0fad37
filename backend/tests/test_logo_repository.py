"""
Logo Designer Backend — Repository Integration Tests
======================================================

What:  Runs the real repository queries against an in-memory SQLite database.
Why:   The mocked tests never execute SQL; these catch broken joins, labels
       and ordering.

What we test:
    ✅ Layer rows come back in z_index / created_at order
    ✅ Detail columns arrive under their labels
    ✅ The asset joined is the one of the detail table matching `type`
    ✅ Missing detail rows leave the presence column NULL
    ✅ Listing order, legacy filter and counts
    ✅ Category names joined onto the logo row
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

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
from logo_api.schemas.rows import IconLayer, TextLayer, UnknownLayer, project_layer_row
from logo_api.services.logo_repository import logo_repository

T0 = datetime(2025, 10, 15, 12, 0, 0, tzinfo=timezone.utc)


async def _seed(session):
    category = Category(id=uuid.uuid4(), name="Food", name_en="Food", name_ar="طعام")
    font = Font(id=uuid.uuid4(), family="Cairo", style="italic", weight="700")
    icon_asset = Asset(id=uuid.uuid4(), kind="vector", name="cup", url="https://cdn.test/cup.svg")
    stale_asset = Asset(id=uuid.uuid4(), kind="raster", name="stale", url="https://cdn.test/x.png")

    logo = Logo(
        id=uuid.uuid4(),
        category_id=category.id,
        title_en="Coffee House",
        canvas_w=1080.0,
        canvas_h=1080.0,
        legacy_format_supported=True,
        created_at=T0,
        updated_at=T0,
    )
    older = Logo(
        id=uuid.uuid4(),
        title_en="Old Logo",
        legacy_format_supported=False,
        created_at=T0 - timedelta(days=1),
        updated_at=T0 - timedelta(days=1),
    )
    session.add_all([category, font, icon_asset, stale_asset, logo, older])
    await session.flush()

    # z_index 1 twice: created_at decides
    text_id, icon_id, shape_id, orphan_id = (uuid.uuid4() for _ in range(4))
    session.add_all([
        Layer(id=icon_id, logo_id=logo.id, type="ICON", z_index=1,
              created_at=T0 + timedelta(seconds=2), updated_at=T0),
        Layer(id=text_id, logo_id=logo.id, type="TEXT", z_index=1,
              created_at=T0 + timedelta(seconds=1), updated_at=T0),
        Layer(id=shape_id, logo_id=logo.id, type="SHAPE", z_index=0,
              created_at=T0 + timedelta(seconds=5), updated_at=T0),
        Layer(id=orphan_id, logo_id=logo.id, type="IMAGE", z_index=7,
              created_at=T0, updated_at=T0),
    ])
    await session.flush()

    session.add_all([
        LayerText(layer_id=text_id, content="Coffee", font_id=font.id,
                  fill_hex="#222222", gradient={"angle": 90, "stops": []}),
        LayerShape(layer_id=shape_id, shape_kind="rect", fill_hex="#ff0000",
                   stroke_width=2.0, meta={"corner": 4}),
        LayerIcon(layer_id=icon_id, asset_id=icon_asset.id, tint_hex="#00ff00"),
        # Stale detail rows in the wrong tables for the ICON layer
        LayerImage(layer_id=icon_id, asset_id=stale_asset.id),
        LayerBackground(layer_id=icon_id, asset_id=stale_asset.id, fill_hex="#123456"),
    ])
    await session.commit()

    return {
        "logo": logo, "older": older, "category": category, "icon_asset": icon_asset,
        "text_id": text_id, "icon_id": icon_id, "shape_id": shape_id, "orphan_id": orphan_id,
    }


class TestFetchLayers:

    @pytest.mark.asyncio
    async def test_rendering_order(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.fetch_layers(sqlite_session, [str(seed["logo"].id)])

        assert [row["id"] for row in rows] == [
            seed["shape_id"], seed["text_id"], seed["icon_id"], seed["orphan_id"],
        ]

    @pytest.mark.asyncio
    async def test_detail_labels(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.fetch_layers(sqlite_session, [seed["logo"].id])
        by_id = {row["id"]: row for row in rows}

        text = by_id[seed["text_id"]]
        assert text["content"] == "Coffee"
        assert text["text_gradient"] == {"angle": 90, "stops": []}
        assert text["font_family"] == "Cairo"
        assert text["default_font_weight"] == "700"

        shape = by_id[seed["shape_id"]]
        assert shape["shape_fill_hex"] == "#ff0000"
        assert shape["shape_stroke_width"] == 2.0
        assert shape["shape_meta"] == {"corner": 4}
        assert shape["fill_hex"] is None

    @pytest.mark.asyncio
    async def test_asset_follows_layer_type(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.fetch_layers(sqlite_session, [seed["logo"].id])
        icon_rows = [row for row in rows if row["id"] == seed["icon_id"]]

        assert len(icon_rows) == 1
        assert icon_rows[0]["asset_id"] == seed["icon_asset"].id
        assert icon_rows[0]["asset_name"] == "cup"

        layer = project_layer_row(icon_rows[0])
        assert isinstance(layer, IconLayer)
        assert layer.asset.url == "https://cdn.test/cup.svg"

    @pytest.mark.asyncio
    async def test_missing_detail_row(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.fetch_layers(sqlite_session, [seed["logo"].id])
        orphan = next(row for row in rows if row["id"] == seed["orphan_id"])

        assert orphan["image_layer_id"] is None
        assert isinstance(project_layer_row(orphan), UnknownLayer)
        text = next(row for row in rows if row["id"] == seed["text_id"])
        assert isinstance(project_layer_row(text), TextLayer)

    @pytest.mark.asyncio
    async def test_no_ids_skips_query(self, sqlite_session):
        assert await logo_repository.fetch_layers(sqlite_session, []) == []


class TestLogoQueries:

    @pytest.mark.asyncio
    async def test_fetch_logo_with_category(self, sqlite_session):
        seed = await _seed(sqlite_session)
        row = await logo_repository.fetch_logo(sqlite_session, str(seed["logo"].id))

        assert row["id"] == seed["logo"].id
        assert row["title_en"] == "Coffee House"
        assert row["category_name_ar"] == "طعام"

    @pytest.mark.asyncio
    async def test_fetch_logo_missing(self, sqlite_session):
        await _seed(sqlite_session)
        assert await logo_repository.fetch_logo(sqlite_session, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_list_newest_first(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.list_logos(sqlite_session, limit=10, offset=0)

        assert [row["id"] for row in rows] == [seed["logo"].id, seed["older"].id]
        assert rows[1]["category_name"] is None

    @pytest.mark.asyncio
    async def test_list_pagination(self, sqlite_session):
        seed = await _seed(sqlite_session)
        rows = await logo_repository.list_logos(sqlite_session, limit=1, offset=1)

        assert [row["id"] for row in rows] == [seed["older"].id]

    @pytest.mark.asyncio
    async def test_legacy_filter_and_count(self, sqlite_session):
        seed = await _seed(sqlite_session)

        rows = await logo_repository.list_logos(sqlite_session, limit=10, offset=0, legacy_only=True)
        assert [row["id"] for row in rows] == [seed["logo"].id]
        assert await logo_repository.count_logos(sqlite_session) == 2
        assert await logo_repository.count_logos(sqlite_session, legacy_only=True) == 1
