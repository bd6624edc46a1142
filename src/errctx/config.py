"""Configuration management for errctx using Pydantic models."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".errctx.json"


class AppMode(str, Enum):
    """Application modes."""
    RELEASE = "release"
    DEV = "dev"
    DEBUG = "debug"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class CaptureConfig(BaseModel):
    """Error context capture section."""
    capture_stack: bool = Field(alias="captureStack", default=True)
    compact_records: bool = Field(alias="compactRecords", default=True)
    skip: int = 0  # Extra frames to skip above the wrapping call

    @field_validator("skip")
    @classmethod
    def validate_skip(cls, v):
        if v < 0:
            raise ValueError("skip must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ParserConfig(BaseModel):
    """Symbol parser configuration section."""
    strict_mode: bool = Field(alias="strictMode", default=False)
    max_length: int = Field(alias="maxLength", default=4096)

    @field_validator("max_length")
    @classmethod
    def validate_max_length(cls, v):
        if v < 1:
            raise ValueError("max_length must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)

    def to_parser_config(self) -> Dict[str, Any]:
        """Convert to the plain dict accepted by symname.SymbolParser."""
        return {"strict_mode": self.strict_mode, "max_length": self.max_length}


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class ErrctxConfig(BaseModel):
    """Complete errctx configuration model."""
    mode: AppMode = AppMode.RELEASE
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def in_production_mode(self) -> bool:
        """True when running in release mode."""
        return self.mode == AppMode.RELEASE

    def effective_capture(self) -> CaptureConfig:
        """Capture settings with the mode applied.

        Debug mode renders errors with their location instead of as records,
        unless the capture section sets compactRecords itself.
        """
        if self.mode == AppMode.DEBUG and "compact_records" not in self.capture.model_fields_set:
            return self.capture.model_copy(update={"compact_records": False})
        return self.capture


def load_config(config_path: str | Path | None = None) -> ErrctxConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .errctx.json

    Returns:
        ErrctxConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if not config_path or not config_path.exists():
        return create_default_config()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    try:
        return ErrctxConfig(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .errctx.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> ErrctxConfig:
    """Create default configuration: release mode, stack capture and compact records on."""
    return ErrctxConfig()
