"""Image collapse: RGBA float raster → packed-pixel bitmap.

Architecture:
    - raster.to_layer() gives an (N, N, 4) float view indexed [x, y]
    - collapse_layer() reduces every cell to one packed pixel
    - Default reduction runs color.collapse_colors() over the whole buffer
      in one numpy pass; a custom per-cell reduce is applied cell by cell

Invariants:
    - Output shape is exactly (N, N), bitmap[x, y] == reduce(raster[x, y])
    - The bitmap is fully realized before returning (eager)
    - Bitmaps are read-only arrays (uint32 for the default collapse, dtype
      inferred from a custom reducer's results); the raster is never modified

Usage:
    from rastercore.raster.render import render

    bitmap = render(raster)             # 0xRRGGBB per cell
    bitmap = render(raster, my_reduce)  # custom RGBA → int reduction
"""

import logging
from typing import Callable, Optional

import numpy as np

from rastercore.raster.store import Raster
from rastercore.utils import color, profiler
from rastercore.utils.color import RGBA

logger = logging.getLogger(__name__)

Reducer = Callable[[RGBA], int]


def collapse_layer(layer: np.ndarray, reduce: Optional[Reducer] = None) -> np.ndarray:
    """Reduce an (H, W, 4) float color layer to an (H, W) packed-pixel bitmap.

    Parameters
    ----------
    layer : np.ndarray
        Float colors, shape (H, W, 4), channels (r, g, b, a)
    reduce : Callable[[RGBA], int], optional
        Per-cell reduction; defaults to color.collapse_color (vectorized)

    Returns
    -------
    np.ndarray
        Read-only bitmap, shape (H, W); uint32 by default, otherwise the
        dtype numpy infers from the reducer results (int64 for Python ints)

    Raises
    ------
    ValueError
        If layer is not (H, W, 4)
    """
    layer = np.asarray(layer, dtype=np.float64)
    if layer.ndim != 3 or layer.shape[-1] != 4:
        raise ValueError(f"Expected layer of shape (H, W, 4), got {layer.shape}")
    h, w = layer.shape[:2]

    if reduce is None:
        packed = color.collapse_colors(layer.reshape(-1, 4))
    else:
        # Packing is up to the reducer: signed or wider than 32 bits is fine
        packed = np.array([reduce(RGBA(*row)) for row in layer.reshape(-1, 4).tolist()])

    packed.flags.writeable = False
    return packed.reshape(h, w)


def render(raster: Raster, reduce: Optional[Reducer] = None) -> np.ndarray:
    """Collapse a raster into its N×N bitmap.

    Parameters
    ----------
    raster : Raster
        Source raster (not modified)
    reduce : Callable[[RGBA], int], optional
        Per-cell reduction; defaults to color.collapse_color

    Returns
    -------
    np.ndarray
        Read-only bitmap (uint32 by default), shape (N, N), bitmap[x][y] is the packed
        pixel of cell (x, y)

    Examples
    --------
    >>> r = raster_with_update(empty_raster(size=4), [((1, 2), RGBA(1.0, 0.0, 0.0, 1.0))])
    >>> hex(render(r)[1][2])
    '0xff0000'
    """
    size = raster.size
    with profiler.timer(f"render[{size}x{size}]", sink=profiler.log_sink(logger)):
        return collapse_layer(raster.to_layer(), reduce)
