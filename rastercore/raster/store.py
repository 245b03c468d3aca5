"""Raster store: an immutable N×N grid of RGBA colors.

Architecture:
    - One flat float64 buffer of shape (N*N, 4), cell (x, y) at index x*N + y
    - Buffer is marked read-only; every "update" copies into a new Raster
    - Callers address cells by (x, y) only, the flat index stays internal
    - Generation, color mapping and rendering share compute.cell_indices()
      so they walk the grid in the same ascending flat order

Invariants:
    - len(raster) == N*N and every cell holds a color (never absent)
    - Out-of-range cells raise CellOutOfRangeError, never clamp or wrap
    - raster_with_update(): last write wins for repeated cells
    - Inputs are never mutated

Usage:
    from rastercore.raster.store import empty_raster, raster_with_update
    from rastercore.utils.color import RGBA

    base = empty_raster(size=4)
    red = raster_with_update(base, [((0, 0), RGBA(1.0, 0.0, 0.0, 1.0))])
    red[0, 0]   # → RGBA(red=1.0, green=0.0, blue=0.0, alpha=1.0)
    base[0, 0]  # → EMPTY_COLOR, base is unchanged
"""

import logging
import operator
from typing import Callable, Iterable, Iterator, Tuple

import numpy as np

from rastercore.utils import compute, profiler
from rastercore.utils.color import EMPTY_COLOR, RGBA, ColorLike, as_rgba
from rastercore.utils.compute import RASTER_SIZE, Pixel

logger = logging.getLogger(__name__)

CellUpdate = Tuple[Tuple[int, int], ColorLike]


class CellOutOfRangeError(IndexError):
    """A cell coordinate outside [0, N) was used to address a raster."""


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
        raise ValueError(f"Raster size must be a positive integer, got {size!r}")
    return int(size)


def _check_cell(cell: Tuple[int, int], size: int) -> Tuple[int, int]:
    """Validate a cell coordinate and return it as plain ints."""
    try:
        x, y = cell
    except (TypeError, ValueError) as e:
        raise TypeError(f"Cell must be an (x, y) pair, got {cell!r}") from e
    x, y = operator.index(x), operator.index(y)
    if not (0 <= x < size and 0 <= y < size):
        raise CellOutOfRangeError(
            f"Cell ({x}, {y}) out of range for {size}x{size} raster "
            f"(valid x, y in [0, {size}))"
        )
    return x, y


class Raster:
    """Immutable N×N grid of RGBA colors.

    Build rasters with empty_raster(), raster_with(), raster_with_update()
    or map_color() rather than the constructor.

    Attributes
    ----------
    size : int
        Grid resolution N

    Examples
    --------
    >>> r = empty_raster(size=4)
    >>> len(r), r.size
    (16, 4)
    >>> r[3, 3] == EMPTY_COLOR
    True
    """

    __slots__ = ('_size', '_cells')

    def __init__(self, cells: np.ndarray, size: int):
        """Wrap a copy of cells, shape (size*size, 4)."""
        size = _check_size(size)
        cells = np.array(cells, dtype=np.float64)
        if cells.shape != (size * size, 4):
            raise ValueError(
                f"Raster of size {size} needs cells of shape ({size * size}, 4), got {cells.shape}"
            )
        cells.flags.writeable = False
        self._size = size
        self._cells = cells

    @classmethod
    def _adopt(cls, cells: np.ndarray, size: int) -> 'Raster':
        """Take ownership of a freshly built buffer without copying."""
        raster = cls.__new__(cls)
        cells.flags.writeable = False
        raster._size = size
        raster._cells = cells
        return raster

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._cells.shape[0]

    def __getitem__(self, cell: Tuple[int, int]) -> RGBA:
        x, y = _check_cell(cell, self._size)
        return RGBA(*self._cells[compute.linear_index(x, y, self._size)].tolist())

    def __iter__(self) -> Iterator[RGBA]:
        """Colors in flat order (x-major)."""
        for row in self._cells.tolist():
            yield RGBA(*row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return self._size == other._size and np.array_equal(self._cells, other._cells)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Raster(size={self._size})"

    def to_array(self) -> np.ndarray:
        """Read-only flat buffer, shape (N*N, 4)."""
        return self._cells

    def to_layer(self) -> np.ndarray:
        """Read-only (N, N, 4) view indexed [x, y, channel]."""
        return self._cells.reshape(self._size, self._size, 4)


def empty_raster(size: int = RASTER_SIZE) -> Raster:
    """Raster with every cell set to EMPTY_COLOR."""
    size = _check_size(size)
    cells = np.tile(np.asarray(EMPTY_COLOR, dtype=np.float64), (size * size, 1))
    return Raster._adopt(cells, size)


def raster_with(
    f: Callable[..., object],
    size: int = RASTER_SIZE,
    *,
    vectorized: bool = False
) -> Raster:
    """Generate a raster by evaluating f at every cell's normalized coordinates.

    Parameters
    ----------
    f : Callable
        Scalar mode: f(x_norm, y_norm) -> color, called once per cell in
        ascending flat order with x_norm = from_raster_coord(i // N) and
        y_norm = from_raster_coord(i % N).
        Vectorized mode: f(xs_norm, ys_norm) -> array (N*N, 4), called once
        with float64 arrays of length N*N in flat order.
    size : int
        Grid resolution N
    vectorized : bool
        Use the single-call array path, default False

    Returns
    -------
    Raster
        New raster with raster[x, y] == f(x / N, y / N)

    Raises
    ------
    ValueError
        If size is not positive, a scalar result is not 4 channels, or a
        vectorized result has the wrong shape

    Examples
    --------
    >>> gradient = raster_with(lambda x, y: (x, y, 0.0, 1.0), size=4)
    >>> gradient[1, 2]
    RGBA(red=0.25, green=0.5, blue=0.0, alpha=1.0)
    """
    size = _check_size(size)
    n_cells = size * size
    xs, ys = compute.cell_indices(size)

    with profiler.timer(f"raster_with[{size}x{size}]", sink=profiler.log_sink(logger)):
        if vectorized:
            out = np.array(
                f(compute.from_raster_coords(xs, size), compute.from_raster_coords(ys, size)),
                dtype=np.float64,
            )
            if out.shape != (n_cells, 4):
                raise ValueError(
                    f"Vectorized generator must return shape ({n_cells}, 4), got {out.shape}"
                )
            cells = out
        else:
            cells = np.empty((n_cells, 4), dtype=np.float64)
            for i, (x, y) in enumerate(zip(xs.tolist(), ys.tolist())):
                cells[i] = as_rgba(f(compute.from_raster_coord(x, size),
                                     compute.from_raster_coord(y, size)))

    return Raster._adopt(cells, size)


def raster_with_update(base: Raster, updates: Iterable[CellUpdate]) -> Raster:
    """Copy base with the given cells replaced.

    Parameters
    ----------
    base : Raster
        Source raster (not modified)
    updates : Iterable[((x, y), color)]
        Cell/color pairs; cells as tuples or Pixel, colors as RGBA or any
        4-sequence of floats

    Returns
    -------
    Raster
        New raster; repeated cells take the color of their last occurrence

    Raises
    ------
    CellOutOfRangeError
        If any cell lies outside [0, N). All cells are checked before
        anything is written.
    ValueError
        If a color is not 4 channels

    Notes
    -----
    Updates are collapsed to one write per cell before touching the copy, so
    the result does not depend on numpy's ordering of repeated fancy-index
    assignments.
    """
    size = base.size
    pending = {}
    n_updates = 0
    for cell, color in updates:
        x, y = _check_cell(cell, size)
        pending[compute.linear_index(x, y, size)] = as_rgba(color)
        n_updates += 1

    cells = base.to_array().copy()
    if pending:
        index = np.fromiter(pending.keys(), dtype=np.int64, count=len(pending))
        cells[index] = np.array(list(pending.values()), dtype=np.float64)

    if n_updates > len(pending):
        logger.debug(
            f"raster_with_update: {n_updates} updates, {n_updates - len(pending)} "
            f"overwritten by later writes to the same cell"
        )
    else:
        logger.debug(f"raster_with_update: {n_updates} updates")

    return Raster._adopt(cells, size)


def map_color(raster: Raster, fn: Callable[[Pixel, RGBA], ColorLike]) -> Raster:
    """New raster with each cell replaced by fn(Pixel(x, y), color).

    Cells are visited in ascending flat order; raster is not modified.

    Examples
    --------
    >>> opaque = map_color(raster, lambda px, c: c._replace(alpha=1.0))
    """
    size = raster.size
    xs, ys = compute.cell_indices(size)
    src = raster.to_array().tolist()
    cells = np.empty((size * size, 4), dtype=np.float64)
    for i, (x, y) in enumerate(zip(xs.tolist(), ys.tolist())):
        cells[i] = as_rgba(fn(Pixel(x, y), RGBA(*src[i])))
    return Raster._adopt(cells, size)
