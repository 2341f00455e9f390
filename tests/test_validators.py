"""Test render config validation.

Tests for src.utils.validators:
    - The shipped configs/render.v1.yaml loads with expected values
    - Defaults for omitted sections
    - Rejection of bad epsilon, size, output suffix, log level, schema

Run:
    pytest tests/test_validators.py -v
"""

import pytest
import yaml

from src.utils import validators
from src.utils.fuzzy import DEFAULT_EPSILON


@pytest.fixture
def write_config(tmp_path):
    """Dump a dict to a YAML file and return its path."""
    def _write(data):
        path = tmp_path / "render.v1.yaml"
        path.write_text(yaml.safe_dump(data))
        return path
    return _write


def test_shipped_config_loads(project_root):
    cfg = validators.load_render_config(project_root / "configs" / "render.v1.yaml")
    assert cfg.schema_version == "render.v1"
    assert cfg.canvas.width == 900
    assert cfg.canvas.height == 550
    assert cfg.fuzzy.epsilon == pytest.approx(1e-5)
    assert cfg.output.path == "projectile.png"
    assert cfg.logging.log_level == "INFO"


def test_defaults_for_missing_sections(write_config):
    cfg = validators.load_render_config(write_config({"schema": "render.v1"}))
    assert cfg.fuzzy.epsilon == DEFAULT_EPSILON
    assert (cfg.canvas.width, cfg.canvas.height) == (900, 550)
    assert cfg.logging.log_file is None


def test_logging_setup_kwargs(write_config):
    """Logging section maps onto setup_logging() keyword arguments."""
    cfg = validators.load_render_config(write_config({
        "schema": "render.v1",
        "logging": {"level": "debug", "json": True, "color": False, "file": "out/render.log"},
    }))
    assert cfg.logging.setup_kwargs() == {
        "log_level": "DEBUG",
        "log_file": "out/render.log",
        "json": True,
        "color": False,
    }


@pytest.mark.parametrize("data, fragment", [
    ({"schema": "render.v2"}, "schema"),
    ({"schema": "render.v1", "fuzzy": {"epsilon": 0.0}}, "epsilon"),
    ({"schema": "render.v1", "fuzzy": {"epsilon": 2.0}}, "epsilon"),
    ({"schema": "render.v1", "canvas": {"width": -1}}, "width"),
    ({"schema": "render.v1", "output": {"path": "projectile.ppm"}}, ".png"),
    ({"schema": "render.v1", "logging": {"level": "LOUD"}}, "Log level"),
])
def test_invalid_config(write_config, data, fragment):
    """Bad values fail fast with a message naming the problem."""
    with pytest.raises(ValueError, match="Render config validation failed") as exc_info:
        validators.load_render_config(write_config(data))
    assert fragment in str(exc_info.value)


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_render_config(tmp_path / "missing.yaml")
