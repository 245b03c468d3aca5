"""Coordinate conversions between the unit square and raster cells.

Core utilities:
    - Scalar transforms: to_raster_coord(), from_raster_coord()
    - Point/cell transforms: to_pixel(), from_pixel()
    - Vectorized transforms for geometry batches: to_raster_coords(), from_raster_coords()
    - Flat storage addressing: linear_index(), cell_indices()

Frames:
    - Normalized frame: continuous (x, y) in [0, 1)², produced by geometry
    - Raster frame: integer cell (x, y) in [0, N)², N = grid resolution

Invariants:
    - to_raster_coord(c) = floor(N * c); never raises, may leave [0, N)
    - from_raster_coord(i) = i / N, the lower edge of cell i
    - from_pixel(to_pixel(p)) snaps p to its cell's lower-left corner (lossy)
    - to_pixel(from_pixel(cell)) == cell for every cell in range
    - Flat index of cell (x, y) is x*N + y
"""

import math
from typing import NamedTuple, Tuple

import numpy as np


# Default grid resolution (cells per side); configs/raster.v1.yaml overrides per app
RASTER_SIZE = 512


class Pixel(NamedTuple):
    """Integer raster cell coordinate."""
    x: int
    y: int


class Point(NamedTuple):
    """Continuous coordinate in the normalized unit square."""
    x: float
    y: float


def to_raster_coord(coord: float, size: int = RASTER_SIZE) -> int:
    """Convert a normalized coordinate to a cell index.

    Parameters
    ----------
    coord : float
        Normalized coordinate, nominally in [0, 1)
    size : int
        Grid resolution N

    Returns
    -------
    int
        floor(N * coord); outside [0, N) when coord is outside [0, 1)

    Examples
    --------
    >>> to_raster_coord(0.3, size=4)
    1
    >>> to_raster_coord(1.0, size=4)  # out of grid, rejected when used to index
    4
    """
    return math.floor(size * coord)


def from_raster_coord(index: int, size: int = RASTER_SIZE) -> float:
    """Convert a cell index to the normalized coordinate of its lower edge.

    Examples
    --------
    >>> from_raster_coord(1, size=4)
    0.25
    """
    return index / size


def to_pixel(point: Tuple[float, float], size: int = RASTER_SIZE) -> Pixel:
    """Map a normalized point to the cell containing it."""
    x, y = point
    return Pixel(to_raster_coord(x, size), to_raster_coord(y, size))


def from_pixel(pixel: Tuple[int, int], size: int = RASTER_SIZE) -> Point:
    """Map a cell to the normalized point at its lower-left corner."""
    x, y = pixel
    return Point(from_raster_coord(x, size), from_raster_coord(y, size))


def to_raster_coords(coords: np.ndarray, size: int = RASTER_SIZE) -> np.ndarray:
    """Vectorized to_raster_coord.

    Parameters
    ----------
    coords : np.ndarray
        Normalized coordinates, any shape (e.g. (..., 2) point arrays)
    size : int
        Grid resolution N

    Returns
    -------
    np.ndarray
        int64 cell indices, same shape
    """
    coords = np.asarray(coords, dtype=np.float64)
    return np.floor(size * coords).astype(np.int64)


def from_raster_coords(indices: np.ndarray, size: int = RASTER_SIZE) -> np.ndarray:
    """Vectorized from_raster_coord, returns float64 of the same shape."""
    return np.asarray(indices, dtype=np.float64) / size


def linear_index(x: int, y: int, size: int = RASTER_SIZE) -> int:
    """Flat storage index of cell (x, y). No bounds check."""
    return x * size + y


def cell_indices(size: int = RASTER_SIZE) -> Tuple[np.ndarray, np.ndarray]:
    """Cell coordinates of every flat index, in ascending flat order.

    Parameters
    ----------
    size : int
        Grid resolution N

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (xs, ys), each int64 of length N*N, with xs[i] = i // N and
        ys[i] = i % N

    Notes
    -----
    Shared by raster generation, color mapping and rendering so that all
    three walk the grid in the same order with the same addressing.
    """
    flat = np.arange(size * size, dtype=np.int64)
    return flat // size, flat % size
