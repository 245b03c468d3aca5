"""YAML schema validation and config loading.

Validates configs with pydantic so bad values fail at start-up with an
actionable message instead of surfacing later as a mis-sized raster:
    - Raster schema (raster.v1.yaml): grid resolution and logging options

Usage:
    from rastercore.utils import validators
    from rastercore.utils.logging_config import setup_logging

    cfg = validators.load_raster_config("configs/raster.v1.yaml")
    setup_logging(**cfg.logging.model_dump(by_alias=True))
    raster = empty_raster(size=cfg.raster_size)
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator

from .compute import RASTER_SIZE


# ============================================================================
# RASTER SCHEMA V1
# ============================================================================

class LoggingConfig(BaseModel):
    """Keyword arguments for logging_config.setup_logging()."""
    log_level: str = Field("INFO", description="Root log level")
    json_output: bool = Field(False, alias="json", description="JSON-lines output")
    color: bool = Field(True, description="ANSI colors on console")

    model_config = {"populate_by_name": True}

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got '{v}'")
        return v.upper()


class RasterConfigV1(BaseModel):
    """Raster configuration (raster.v1.yaml schema).

    Changing raster_size invalidates any raster built with the old size.
    """
    schema_version: str = Field("raster.v1", alias="schema", description="Schema version")
    raster_size: int = Field(RASTER_SIZE, gt=0, description="Grid resolution N (cells per side)")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"populate_by_name": True}

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "raster.v1":
            raise ValueError(f"Expected schema 'raster.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_raster_config(path: Union[str, Path]) -> RasterConfigV1:
    """Load and validate raster config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to raster.v1.yaml file

    Returns
    -------
    RasterConfigV1
        Validated raster configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raster config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return RasterConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Raster config validation failed at {path}: {e}") from e
