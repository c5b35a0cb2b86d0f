"""Configuration management for the text field layout engine."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    EmptyConfigFileError,
    TextfitError,
)
from .models import (
    DEFAULT_CHARACTER_SPACING,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_HEIGHT,
    TextFieldConfig,
)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class OffsetCalibration(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TEXTFIT_CALIBRATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Fractions of the line-box/anchor difference applied per vertical alignment.

    Tuned against reference output of the document renderer; the golden
    fixtures under tests/golden pin the values in use.
    """

    top_fraction: float = Field(1.0, ge=0.0, le=1.0, description="Share moved to top offset")
    bottom_fraction: float = Field(
        1.0, ge=0.0, le=1.0, description="Share moved to bottom offset"
    )
    middle_top_fraction: float = Field(
        0.5, ge=0.0, le=1.0, description="Share of a middle split given to the top offset"
    )


class LayoutSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TEXTFIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Engine-wide defaults for sizing and recalculation."""

    default_font_size: float = Field(DEFAULT_FONT_SIZE, gt=0.0, description="Static font size")
    default_line_height: float = Field(DEFAULT_LINE_HEIGHT, gt=0.0, description="Line height")
    default_character_spacing: float = Field(
        DEFAULT_CHARACTER_SPACING, description="Character spacing in points"
    )
    size_step: float = Field(0.25, gt=0.0, description="Granularity of the size search")
    debounce_seconds: float = Field(0.0, ge=0.0, description="Delay before recalculating")
    max_workers: int = Field(2, ge=1, description="Background workers for recalculation")
    log_level: str = Field("INFO", description="Log level")

    calibration: OffsetCalibration = Field(default_factory=OffsetCalibration)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return level


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseModel:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        if issubclass(config_class, BaseSettings):
            # YAML values win over .env for this instance
            class YamlConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return YamlConfig(**config_data)
        return config_class(**config_data)
    except TextfitError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", details=e) from e


def _add_yaml_methods():
    """Add YAML loading methods to configuration classes."""

    @classmethod
    def from_yaml(cls, config_path: str | Path):
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    for config_class in [LayoutSettings, OffsetCalibration, TextFieldConfig]:
        config_class.from_yaml = from_yaml


_add_yaml_methods()
