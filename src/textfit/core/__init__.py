"""Core components: configuration, exceptions and data models."""

from .config import LayoutSettings, OffsetCalibration, load_config_from_yaml
from .exceptions import (
    ConfigurationError,
    FontLoadError,
    FontNotFoundError,
    InvalidBoundsError,
    TextfitError,
)
from .models import (
    Alignment,
    FieldLayout,
    FitMode,
    FittingResult,
    FontSizeBounds,
    LayoutBox,
    TextFieldConfig,
    VerticalAdjustment,
    VerticalAlignment,
)

__all__ = [
    "Alignment",
    "ConfigurationError",
    "FieldLayout",
    "FitMode",
    "FittingResult",
    "FontLoadError",
    "FontNotFoundError",
    "FontSizeBounds",
    "InvalidBoundsError",
    "LayoutBox",
    "LayoutSettings",
    "OffsetCalibration",
    "TextFieldConfig",
    "TextfitError",
    "VerticalAdjustment",
    "VerticalAlignment",
    "load_config_from_yaml",
]
