# Models package init
"""
Importing this package registers every table with `Base.metadata`.
"""

from logo_api.models.asset import Asset, Font
from logo_api.models.layer import (
    Layer,
    LayerBackground,
    LayerIcon,
    LayerImage,
    LayerShape,
    LayerText,
)
from logo_api.models.logo import Category, Logo

__all__ = [
    "Asset",
    "Category",
    "Font",
    "Layer",
    "LayerBackground",
    "LayerIcon",
    "LayerImage",
    "LayerShape",
    "LayerText",
    "Logo",
]
