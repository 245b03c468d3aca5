"""Raster layer: immutable RGBA grid and its collapse to packed pixels.

Components:
    - store: Raster value type, generation, batch update, color mapping
    - render: float layer → packed-pixel bitmap

Depends only on rastercore.utils.
"""

from .render import collapse_layer, render
from .store import (
    CellOutOfRangeError,
    Raster,
    empty_raster,
    map_color,
    raster_with,
    raster_with_update,
)

__all__ = [
    'CellOutOfRangeError',
    'Raster',
    'collapse_layer',
    'empty_raster',
    'map_color',
    'raster_with',
    'raster_with_update',
    'render',
]
