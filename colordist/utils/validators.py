"""YAML schema validation and config loading.

Validates the colordist config (colordist.v1 schema) with pydantic:
    - Default distance metric (cie2000, oklab or all)
    - CIEDE2000 parametric weights kL, kC, kH
    - Output precision for the CLI
    - Logging settings passed straight to setup_logging()

Load through these validators for fail-fast errors naming the file and
the offending key.

Usage:
    from colordist.utils import validators

    cfg = validators.load_config("configs/colordist.v1.yaml")
    cfg.weights.k_l  # 1.0
"""

import logging
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging_config import LOG_LEVELS

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "colordist.v1"
DEFAULT_CONFIG_PATH = Path("configs/colordist.v1.yaml")

Metric = Literal["cie2000", "oklab", "all"]


# ============================================================================
# CONFIG SCHEMA V1
# ============================================================================

class DeltaEWeights(BaseModel):
    """CIEDE2000 parametric factors (1.0 = reference conditions)."""
    model_config = ConfigDict(extra="forbid")

    k_l: float = Field(1.0, gt=0.0, description="Lightness weight kL")
    k_c: float = Field(1.0, gt=0.0, description="Chroma weight kC")
    k_h: float = Field(1.0, gt=0.0, description="Hue weight kH")


class LoggingSettings(BaseModel):
    """Arguments for logging_config.setup_logging()."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_lines: bool = Field(False, alias="json", description="Emit JSON lines")
    color: bool = Field(True, description="ANSI colors on a TTY")

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{v}'")
        return v.upper()

    def setup_kwargs(self) -> dict:
        """Keyword arguments for setup_logging()."""
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "json": self.json_lines,
            "color": self.color,
        }


class ColorDistConfigV1(BaseModel):
    """Top-level colordist config (colordist.v1.yaml schema)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, alias="schema", description="Schema version")
    metric: Metric = Field("cie2000", description="Distance reported by default")
    weights: DeltaEWeights = Field(default_factory=DeltaEWeights)
    precision: int = Field(4, ge=0, le=12, description="Decimals in CLI output")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Expected schema '{SCHEMA_VERSION}', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def default_config() -> ColorDistConfigV1:
    """Config with every field at its default."""
    return ColorDistConfigV1()


def load_config(path: Union[str, Path]) -> ColorDistConfigV1:
    """Load and validate colordist config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to colordist.v1.yaml file

    Returns
    -------
    ColorDistConfigV1
        Validated configuration

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
        raise FileNotFoundError(f"Config not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Config validation failed at {path}: top level must be a mapping")
    try:
        cfg = ColorDistConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Config validation failed at {path}: {e}") from e

    logger.debug("Loaded config %s (metric=%s)", path, cfg.metric)
    return cfg


def dump_config(cfg: ColorDistConfigV1, path: Union[str, Path]) -> None:
    """Write cfg to YAML using the on-disk key names (schema, json)."""
    from . import fs

    fs.atomic_yaml_dump(cfg.model_dump(by_alias=True), path)
