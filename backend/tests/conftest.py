"""
Logo Designer Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Reusable test infrastructure: mocked DB session, wide-row factories,
       an HTTP client bound to the app, and a real in-memory SQLite database.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session:   AsyncMock standing in for AsyncSession
    ├── make_logo_row:     factory for repository logo rows
    ├── make_layer_row:    factory for wide layer rows
    ├── test_client:       httpx AsyncClient (ASGITransport) with the DB
    │                      dependency overridden
    └── sqlite_session:    AsyncSession on a fresh in-memory aiosqlite DB
"""

import os

# Override settings BEFORE any logo_api import: the settings singleton and the
# engine are created at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEFAULT_LANGUAGE"] = "en"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["EXPOSE_ERROR_DETAILS"] = "false"

import uuid  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

LOGO_ID = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"
CREATED_AT = datetime(2025, 10, 15, 21, 3, 7, 250000, tzinfo=timezone.utc)
UPDATED_AT = datetime(2025, 10, 16, 8, 30, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Row factories
# ══════════════════════════════════════════════════════════════════════════

_PRESENCE_COLUMNS = {
    "TEXT": "text_layer_id",
    "SHAPE": "shape_layer_id",
    "ICON": "icon_layer_id",
    "IMAGE": "image_layer_id",
    "BACKGROUND": "bg_layer_id",
}


def build_logo_row(**overrides):
    row = {
        "id": uuid.UUID(LOGO_ID),
        "owner_id": None,
        "template_id": None,
        "category_id": None,
        "title": "Generic title",
        "title_en": "Coffee House",
        "title_ar": "بيت القهوة",
        "description": None,
        "description_en": "A warm logo",
        "description_ar": "شعار دافئ",
        "tags": ["coffee", "brand"],
        "canvas_w": 1080.0,
        "canvas_h": 540.0,
        "dpi": 300,
        "colors_used": None,
        "vertical_align": None,
        "horizontal_align": None,
        "canvas_background_type": "solid",
        "canvas_background_solid_color": "#fafafa",
        "canvas_background_gradient": None,
        "canvas_background_image_type": None,
        "canvas_background_image_path": None,
        "responsive_version": None,
        "responsive_description": None,
        "scaling_method": None,
        "position_method": None,
        "fully_responsive": None,
        "version": None,
        "responsive": None,
        "export_format": None,
        "export_transparent_background": None,
        "export_quality": None,
        "export_scalable": None,
        "export_maintain_aspect_ratio": None,
        "legacy_format_supported": True,
        "legacy_compatibility_version": None,
        "mobile_optimized": None,
        "created_at": CREATED_AT,
        "updated_at": UPDATED_AT,
        "category_name": None,
        "category_name_en": None,
        "category_name_ar": None,
    }
    row.update(overrides)
    return row


def build_layer_row(layer_type="TEXT", **overrides):
    layer_id = overrides.pop("id", uuid.uuid4())
    row = {
        "id": layer_id,
        "logo_id": uuid.UUID(LOGO_ID),
        "type": layer_type,
        "name": None,
        "z_index": 0,
        "x_norm": 0.25,
        "y_norm": 0.75,
        "scale": 1.5,
        "rotation_deg": 15.0,
        "opacity": 0.9,
        "is_visible": True,
        "flip_horizontal": False,
        "flip_vertical": False,
        "created_at": CREATED_AT,
    }
    presence = _PRESENCE_COLUMNS.get(layer_type)
    if presence:
        row[presence] = layer_id
    row.update(overrides)
    return row


@pytest.fixture
def make_logo_row():
    return build_logo_row


@pytest.fixture
def make_layer_row():
    return build_layer_row


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    The assembler only hands the session to the repository, which the tests
    patch, so nothing is executed on it.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def sqlite_session():
    """
    An AsyncSession on a fresh in-memory SQLite database with every table
    created. Exercises the real joins of the repository.
    """
    from logo_api.database import Base
    import logo_api.models  # noqa: F401  (registers the tables)

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTPX AsyncClient talking to the app in-process.

    `get_db_session` is overridden with `mock_db_session`; tests patch
    `logo_api.services.document_assembler.logo_repository` to feed rows.
    """
    from logo_api.database import get_db_session
    from logo_api.main import app

    async def override_db_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
