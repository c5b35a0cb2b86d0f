"""Tests for the error hierarchy and how layout failures surface."""

import pytest

from textfit.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    EmptyFontDataError,
    FontLoadError,
    FontNotFoundError,
    InvalidBoundsError,
    InvalidUnitsPerEmError,
    MinGreaterThanMaxError,
    NegativeDimensionError,
    NoFontsRegisteredError,
    NonFiniteValueError,
    NonPositiveValueError,
    SchedulerClosedError,
    TextfitError,
)
from textfit.core.models import FitMode, FontSizeBounds, TextFieldConfig
from textfit.layout.field import layout_field


class TestExceptionHierarchy:
    """Test exception types and messages."""

    @pytest.mark.parametrize(
        "error, parent",
        [
            (FontNotFoundError("Missing", ["A"]), FontLoadError),
            (EmptyFontDataError("A"), FontLoadError),
            (InvalidUnitsPerEmError("A", 0), FontLoadError),
            (NoFontsRegisteredError(), FontLoadError),
            (MinGreaterThanMaxError(20, 4), InvalidBoundsError),
            (NegativeDimensionError("width", -1), InvalidBoundsError),
            (NonPositiveValueError("step", 0), InvalidBoundsError),
            (NonFiniteValueError("max", float("inf")), InvalidBoundsError),
            (ConfigFileNotFoundError("x.yaml"), ConfigurationError),
            (SchedulerClosedError(), TextfitError),
        ],
    )
    def test_error_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, TextfitError)

    def test_bounds_errors_are_not_value_errors(self):
        """Test that bounds errors pass through model validation unchanged."""
        assert not issubclass(InvalidBoundsError, ValueError)
        assert not issubclass(FontLoadError, ValueError)

    def test_messages(self):
        assert str(MinGreaterThanMaxError(20, 4)) == "min font size 20 is greater than max 4"
        assert str(NegativeDimensionError("height", -2)) == "height cannot be negative: -2"
        assert "Missing" in str(FontNotFoundError("Missing", ["A", "B"]))

    def test_details(self):
        error = TextfitError("failed", details={"field": "name"})

        assert error.details == {"field": "name"}
        assert TextfitError("failed").details is None


class TestLayoutFailures:
    """Test that invalid input fails the field layout instead of being clamped."""

    def test_invalid_bounds_fail_layout(self, parsed_font):
        config = TextFieldConfig.model_construct(
            width=70.0,
            height=20.0,
            font_name="TestSans",
            font_size=13.0,
            dynamic_font_size=FontSizeBounds.model_construct(
                min=30.0, max=10.0, fit=FitMode.VERTICAL
            ),
            line_height=1.0,
            character_spacing=0.0,
            vertical_alignment="top",
        )

        with pytest.raises(MinGreaterThanMaxError):
            layout_field(config, "Hello", parsed_font)

    def test_static_field_skips_solver(self, parsed_font):
        config = TextFieldConfig(width=70, height=20, font_size=11)

        layout = layout_field(config, "Hello", parsed_font)

        assert layout.font_size == 11
        assert layout.fitting is None
