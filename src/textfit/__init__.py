"""Text Field Layout Engine
========================

Keeps an editable text field preview consistent with a separately rendered
document:
- Parses font binaries for exact glyph metrics
- Finds the largest font size that fits live-edited text into a box
- Computes vertical offsets reconciling line-box and baseline layout models
"""

__version__ = "1.0.0"
__author__ = "textfit Team"

from .core.config import LayoutSettings, OffsetCalibration
from .core.exceptions import FontLoadError, InvalidBoundsError, TextfitError
from .core.models import (
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
from .editing import EditingSession, RecalculationScheduler
from .fonts import FontCache, FontDescriptor, FontRepository, ParsedFont, resolve_font
from .layout import adjust, fit, layout_field

__all__ = [
    "Alignment",
    "EditingSession",
    "FieldLayout",
    "FitMode",
    "FittingResult",
    "FontCache",
    "FontDescriptor",
    "FontLoadError",
    "FontRepository",
    "FontSizeBounds",
    "InvalidBoundsError",
    "LayoutBox",
    "LayoutSettings",
    "OffsetCalibration",
    "ParsedFont",
    "RecalculationScheduler",
    "TextFieldConfig",
    "TextfitError",
    "VerticalAdjustment",
    "VerticalAlignment",
    "adjust",
    "fit",
    "layout_field",
    "resolve_font",
]
