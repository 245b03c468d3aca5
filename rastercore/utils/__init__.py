"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - RGBA colors and the collapse to packed pixels (color)
    - Unit-square ↔ raster cell conversions (compute)
    - Config validation (validators)
    - YAML loading (fs)
    - Unified logging (logging_config)
    - Timing (profiler)

No module in utils/ may import from rastercore.raster.

Convenience imports:
    from rastercore.utils import color, compute, validators
    from rastercore.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import compute
from . import fs
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'compute',
    'fs',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
