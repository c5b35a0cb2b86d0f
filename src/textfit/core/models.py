"""Pydantic models for type-safe layout data structures."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..utils.units import mm2pt, pt2px
from .exceptions import (
    MinGreaterThanMaxError,
    NegativeDimensionError,
    NonFiniteValueError,
    NonPositiveValueError,
)

DEFAULT_FONT_SIZE = 13.0
DEFAULT_LINE_HEIGHT = 1.0
DEFAULT_CHARACTER_SPACING = 0.0
DEFAULT_FONT_COLOR = "#000000"
DEFAULT_OPACITY = 1.0


class Alignment(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlignment(str, Enum):
    """Vertical text alignment inside the box."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class FitMode(str, Enum):
    """Which box dimension drives the dynamic size search."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def check_finite(field_name: str, value: float) -> None:
    if not math.isfinite(value):
        raise NonFiniteValueError(field_name, value)


def check_non_negative(field_name: str, value: float) -> None:
    check_finite(field_name, value)
    if value < 0:
        raise NegativeDimensionError(field_name, value)


def check_positive(field_name: str, value: float) -> None:
    check_finite(field_name, value)
    if value <= 0:
        raise NonPositiveValueError(field_name, value)


class FontSizeBounds(BaseModel):
    """Inclusive font size range for dynamic sizing."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    fit: FitMode = FitMode.VERTICAL

    @model_validator(mode="after")
    def validate_range(self) -> "FontSizeBounds":
        self.check()
        return self

    def check(self) -> None:
        """Raise InvalidBoundsError for negative or inverted bounds."""
        check_non_negative("min", self.min)
        check_non_negative("max", self.max)
        if self.min > self.max:
            raise MinGreaterThanMaxError(self.min, self.max)

    def clamp(self, size: float) -> float:
        return max(self.min, min(self.max, size))


class LayoutBox(BaseModel):
    """Text box geometry and paragraph settings, in points."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    line_height: float = DEFAULT_LINE_HEIGHT
    character_spacing: float = DEFAULT_CHARACTER_SPACING
    alignment: Alignment = Alignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP

    @model_validator(mode="after")
    def validate_geometry(self) -> "LayoutBox":
        self.check()
        return self

    def check(self) -> None:
        """Raise InvalidBoundsError for negative dimensions or line height."""
        check_non_negative("width", self.width)
        check_non_negative("height", self.height)
        check_positive("line_height", self.line_height)
        check_finite("character_spacing", self.character_spacing)


class FittingResult(BaseModel):
    """Outcome of a dynamic font size search."""

    model_config = ConfigDict(frozen=True)

    font_size: float = Field(..., ge=0.0)
    line_count: int = Field(..., ge=0)
    overflow: bool = False
    lines: tuple[str, ...] = ()


class VerticalAdjustment(BaseModel):
    """Top and bottom corrections applied to the preview, in points."""

    model_config = ConfigDict(frozen=True)

    top_offset: float = 0.0
    bottom_offset: float = 0.0

    def to_pixels(self) -> "VerticalAdjustment":
        return VerticalAdjustment(
            top_offset=pt2px(self.top_offset),
            bottom_offset=pt2px(self.bottom_offset),
        )


class TextFieldConfig(BaseModel):
    """Read-only configuration record of a text field.

    Box geometry is in millimetres, font sizes and spacing in points.
    """

    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    font_name: str | None = None
    font_size: float = DEFAULT_FONT_SIZE
    dynamic_font_size: FontSizeBounds | None = None
    line_height: float = DEFAULT_LINE_HEIGHT
    character_spacing: float = DEFAULT_CHARACTER_SPACING
    alignment: Alignment = Alignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.TOP
    opacity: float = Field(DEFAULT_OPACITY, ge=0.0, le=1.0)
    font_color: str = DEFAULT_FONT_COLOR
    background_color: str | None = None

    @model_validator(mode="after")
    def validate_geometry(self) -> "TextFieldConfig":
        check_non_negative("width", self.width)
        check_non_negative("height", self.height)
        check_non_negative("font_size", self.font_size)
        check_positive("line_height", self.line_height)
        check_finite("character_spacing", self.character_spacing)
        return self

    def with_defaults(
        self,
        font_size: float = DEFAULT_FONT_SIZE,
        line_height: float = DEFAULT_LINE_HEIGHT,
        character_spacing: float = DEFAULT_CHARACTER_SPACING,
    ) -> "TextFieldConfig":
        """Copy of this config taking the given values for fields it does not set."""
        defaults = {
            "font_size": font_size,
            "line_height": line_height,
            "character_spacing": character_spacing,
        }
        unset = {k: v for k, v in defaults.items() if k not in self.model_fields_set}
        if not unset:
            return self
        return self.model_validate({**self.model_dump(), **unset})

    def to_layout_box(self) -> LayoutBox:
        """Build the point-based layout box for this field."""
        return LayoutBox(
            width=mm2pt(self.width),
            height=mm2pt(self.height),
            line_height=self.line_height,
            character_spacing=self.character_spacing,
            alignment=self.alignment,
            vertical_alignment=self.vertical_alignment,
        )


class FieldLayout(BaseModel):
    """Computed font size and offsets for one render of a field."""

    model_config = ConfigDict(frozen=True)

    font_name: str
    font_size: float
    adjustment: VerticalAdjustment
    fitting: FittingResult | None = None

    @property
    def is_dynamic(self) -> bool:
        return self.fitting is not None

    @property
    def overflow(self) -> bool:
        return self.fitting.overflow if self.fitting else False
