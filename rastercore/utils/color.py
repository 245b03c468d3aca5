"""RGBA color values and the collapse to packed 24-bit pixels.

Provides:
    - RGBA: immutable 4-channel float color (red, green, blue, alpha)
    - EMPTY_COLOR: fully transparent zero color used to clear rasters
    - collapse_color(): RGBA → packed 0xRRGGBB integer
    - collapse_colors(): vectorized collapse over (..., 4) float arrays
    - unpack_pixel(): packed pixel → (r, g, b) 8-bit channels

Used by:
    - Raster store: empty fill value, coercion of update colors
    - Renderer: per-cell reduction of the float layer into the bitmap

Invariants:
    - Channels are floats, nominally [0, 1]; out-of-range values are clamped
      only when collapsing, never when stored
    - Collapse flattens over black: rgb * alpha, then 8-bit round-half-up
    - NaN after flattening collapses to 0 in both scalar and vectorized paths
    - collapse_color(c) == collapse_colors(np.array(c)) for every color
"""

import math
from typing import NamedTuple, Sequence, Tuple, Union

import numpy as np


class RGBA(NamedTuple):
    """Straight (non-premultiplied) RGBA color, channels in [0, 1]."""
    red: float
    green: float
    blue: float
    alpha: float


EMPTY_COLOR = RGBA(0.0, 0.0, 0.0, 0.0)

ColorLike = Union[RGBA, Sequence[float]]


def as_rgba(value: ColorLike) -> RGBA:
    """Coerce a 4-sequence of floats into an RGBA value.

    Parameters
    ----------
    value : RGBA or sequence of float
        Color with exactly 4 channels (r, g, b, a)

    Returns
    -------
    RGBA
        Same channels as floats

    Raises
    ------
    ValueError
        If value does not have exactly 4 channels
    """
    if isinstance(value, RGBA):
        return value
    channels = tuple(value)
    if len(channels) != 4:
        raise ValueError(f"Color must have 4 channels (r, g, b, a), got {len(channels)}: {value!r}")
    return RGBA(*(float(c) for c in channels))


def _quantize(v: float) -> int:
    if math.isnan(v):
        return 0
    v = min(max(v, 0.0), 1.0)
    return int(math.floor(v * 255.0 + 0.5))


def collapse_color(color: ColorLike) -> int:
    """Collapse an RGBA color to a packed 24-bit pixel.

    Parameters
    ----------
    color : RGBA or sequence of float
        Color to collapse

    Returns
    -------
    int
        Packed pixel 0xRRGGBB

    Notes
    -----
    Alpha is flattened against a black background (each channel is
    multiplied by alpha) so the empty color collapses to 0.
    Quantization is round-half-up: floor(v * 255 + 0.5).

    Examples
    --------
    >>> hex(collapse_color(RGBA(1.0, 0.0, 0.0, 1.0)))
    '0xff0000'
    >>> collapse_color(EMPTY_COLOR)
    0
    """
    r, g, b, a = as_rgba(color)
    return (_quantize(r * a) << 16) | (_quantize(g * a) << 8) | _quantize(b * a)


def collapse_colors(colors: np.ndarray) -> np.ndarray:
    """Vectorized collapse_color over an array of colors.

    Parameters
    ----------
    colors : np.ndarray
        Float array, shape (..., 4) with channels (r, g, b, a)

    Returns
    -------
    np.ndarray
        uint32 packed pixels, shape (...)
    """
    colors = np.asarray(colors, dtype=np.float64)
    if colors.ndim == 0 or colors.shape[-1] != 4:
        raise ValueError(f"Expected shape (..., 4), got {colors.shape}")

    with np.errstate(invalid="ignore"):
        rgb = colors[..., :3] * colors[..., 3:4]
    rgb = np.clip(np.nan_to_num(rgb, nan=0.0), 0.0, 1.0)
    q = np.floor(rgb * 255.0 + 0.5).astype(np.uint32)

    return (q[..., 0] << 16) | (q[..., 1] << 8) | q[..., 2]


def unpack_pixel(packed: int) -> Tuple[int, int, int]:
    """Split a packed 0xRRGGBB pixel into (r, g, b) 8-bit channels."""
    packed = int(packed)
    return (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF
