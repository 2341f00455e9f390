"""YAML schema validation and config loading.

Provides centralized validation for render configuration using pydantic:
    - Render schema (render.v1.yaml): fuzzy epsilon, canvas size, output path,
      logging options

Drivers load configs through these validators for fail-fast error detection
with actionable messages (offending keys, expected ranges).

Usage:
    from src.utils import validators

    cfg = validators.load_render_config("configs/render.v1.yaml")
    fuzzy.set_epsilon(cfg.fuzzy.epsilon)
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fuzzy import DEFAULT_EPSILON

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ============================================================================
# RENDER SCHEMA V1
# ============================================================================

class FuzzyConfig(BaseModel):
    """Tolerance for floating-point comparisons."""
    epsilon: float = Field(DEFAULT_EPSILON, gt=0.0, lt=1.0, description="Fuzzy equality tolerance")


class CanvasConfig(BaseModel):
    """Canvas dimensions in pixels."""
    width: int = Field(900, ge=0, description="Canvas width (px)")
    height: int = Field(550, ge=0, description="Canvas height (px)")


class OutputConfig(BaseModel):
    """Where the encoded PNG is written."""
    path: str = Field("projectile.png", min_length=1, description="Output PNG path")

    @field_validator('path')
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v.lower().endswith(".png"):
            raise ValueError(f"Output path must end with .png, got: {v}")
        return v


class LoggingConfig(BaseModel):
    """Arguments forwarded to logging_config.setup_logging()."""
    model_config = ConfigDict(populate_by_name=True)

    log_level: str = Field("INFO", alias="level")
    log_file: Optional[str] = Field(None, alias="file")
    json_format: bool = Field(False, alias="json")
    color: bool = True

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {_LOG_LEVELS}, got '{v}'")
        return level

    def setup_kwargs(self) -> dict:
        """Keyword arguments for setup_logging()."""
        return {
            'log_level': self.log_level,
            'log_file': self.log_file,
            'json': self.json_format,
            'color': self.color,
        }


class RenderConfigV1(BaseModel):
    """Complete render configuration (render.v1.yaml schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("render.v1", alias="schema", description="Schema version")
    fuzzy: FuzzyConfig = Field(default_factory=FuzzyConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "render.v1":
            raise ValueError(f"Expected schema 'render.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_render_config(path: Union[str, Path]) -> RenderConfigV1:
    """Load and validate render config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to render.v1.yaml file

    Returns
    -------
    RenderConfigV1
        Validated render configuration

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
        raise FileNotFoundError(f"Render config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return RenderConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Render config validation failed at {path}: {e}") from e
