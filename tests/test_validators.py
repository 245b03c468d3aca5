"""Test raster config loading and validation.

Tests for rastercore.utils.validators and rastercore.utils.fs:
    - Shipped configs/raster.v1.yaml validates
    - Defaults when keys are omitted
    - Bad schema / non-positive size / bad log level rejected with file name
    - Missing files and malformed YAML

Run:
    pytest tests/test_validators.py -v
"""

from pathlib import Path

import pytest
import yaml

from rastercore.utils import compute, fs, validators


@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_shipped_config_loads(project_root):
    """configs/raster.v1.yaml is valid."""
    cfg = validators.load_raster_config(project_root / "configs/raster.v1.yaml")
    assert cfg.schema_version == "raster.v1"
    assert cfg.raster_size == compute.RASTER_SIZE
    assert cfg.logging.log_level == "INFO"


def test_defaults(tmp_path):
    """Only the schema key is required."""
    cfg = validators.load_raster_config(write_yaml(tmp_path / "r.yaml", {"schema": "raster.v1"}))
    assert cfg.raster_size == compute.RASTER_SIZE
    assert cfg.logging.json_output is False
    assert cfg.logging.color is True


def test_logging_block_dumps_setup_kwargs(tmp_path):
    """logging block round-trips to setup_logging() keyword names."""
    cfg = validators.load_raster_config(write_yaml(tmp_path / "r.yaml", {
        "schema": "raster.v1",
        "raster_size": 8,
        "logging": {"log_level": "debug", "json": True},
    }))
    assert cfg.raster_size == 8
    assert cfg.logging.model_dump(by_alias=True) == {
        "log_level": "DEBUG",
        "json": True,
        "color": True,
    }


@pytest.mark.parametrize("data, message", [
    ({"schema": "raster.v2"}, "raster.v1"),
    ({"schema": "raster.v1", "raster_size": 0}, "raster_size"),
    ({"schema": "raster.v1", "raster_size": -16}, "raster_size"),
    ({"schema": "raster.v1", "logging": {"log_level": "LOUD"}}, "log_level"),
])
def test_invalid_config_rejected(tmp_path, data, message):
    """Validation errors name the file and the offending key."""
    path = write_yaml(tmp_path / "bad.yaml", data)
    with pytest.raises(ValueError, match=message) as exc:
        validators.load_raster_config(path)
    assert "bad.yaml" in str(exc.value)


def test_missing_config(tmp_path):
    """Missing file is FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        validators.load_raster_config(tmp_path / "nope.yaml")


def test_load_yaml_errors(tmp_path):
    """fs.load_yaml reports malformed YAML with the path; empty files are {}."""
    bad = tmp_path / "broken.yaml"
    bad.write_text("raster_size: [1, 2\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError, match="broken.yaml"):
        fs.load_yaml(bad)

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert fs.load_yaml(empty) == {}

    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "missing.yaml")
