"""
Logo Designer Backend — Asset and Font Models
===============================================

Reusable resources referenced by id from layer detail rows. Their lifetime
is independent of any single logo: many layers may point at one asset.
"""

import uuid

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Uuid

from logo_api.database import Base
from logo_api.models.logo import JSONType


class Asset(Base):
    """An image or vector resource (icon, background image, imported picture)."""

    __tablename__ = "assets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    kind: Mapped[str | None] = mapped_column(String(20))
    name: Mapped[str | None] = mapped_column(String(255))
    url: Mapped[str | None] = mapped_column(Text)
    width: Mapped[int | None] = mapped_column(Integer)
    height: Mapped[int | None] = mapped_column(Integer)
    has_alpha: Mapped[bool | None] = mapped_column(Boolean)
    vector_svg: Mapped[str | None] = mapped_column(Text)
    # Free-form: tags, category, source
    meta: Mapped[dict | None] = mapped_column(JSONType)


class Font(Base):
    """A typeface descriptor referenced by text layers."""

    __tablename__ = "fonts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    family: Mapped[str] = mapped_column(String(255), nullable=False)
    style: Mapped[str | None] = mapped_column(String(50))
    weight: Mapped[str | None] = mapped_column(String(50))
    url: Mapped[str | None] = mapped_column(Text)
    fallbacks: Mapped[list | None] = mapped_column(JSONType)
