"""Lightweight wall-clock timing for raster operations.

Provides:
    - timer(): Context manager for wall-clock timing with optional sink
    - log_sink(): Sink factory that reports timings through a logger

Used to measure full-grid passes (generation, collapse) on large N.
No heavy dependencies (no cProfile overhead during rendering).
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds)
        If None, prints to stdout

    Yields
    ------
    None

    Examples
    --------
    >>> with timer("render"):
    ...     bitmap = render(raster)
    render: 0.012 s
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            print(f"{name}: {elapsed:.3f} s")


def log_sink(logger: logging.Logger, level: int = logging.DEBUG) -> Callable[[str, float], None]:
    """Build a timer sink that logs "<name>: <ms> ms" at the given level."""
    def _sink(name: str, elapsed: float) -> None:
        if logger.isEnabledFor(level):
            logger.log(level, f"{name}: {elapsed * 1000:.2f} ms")
    return _sink
