"""rastercore: square RGBA raster buffer for a fine-art polygon rasterizer.

This package holds the raster layer that sits between the geometry code
(polygons already converted to cell updates) and export/display code that
wants a packed-pixel image.

Architecture layers (strict one-way dependency):
    rastercore/raster/ → rastercore/utils/

Key invariants:
    - Grid is N×N cells, stored flat with index = x*N + y
    - Rasters and bitmaps are immutable values (read-only numpy buffers)
    - Geometry lives in the unit square [0,1)²; conversion to cells at boundaries only
    - Colors are RGBA floats [0,1]; packed 0xRRGGBB only in rendered bitmaps
    - YAML-only configs
"""

__version__ = "0.3.0"
