"""Custom exceptions for the text field layout engine."""

from typing import Any


class TextfitError(Exception):
    """Base exception for all textfit errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class FontLoadError(TextfitError):
    """Exception raised when font bytes cannot be parsed."""


class FontNotFoundError(FontLoadError):
    """Exception raised when a font name is not registered."""

    def __init__(self, font_name: str, available: list[str]):
        super().__init__(
            f"Font not found: {font_name}. Available fonts: {available}",
            details={"font_name": font_name, "available": available},
        )


class EmptyFontDataError(FontLoadError):
    """Exception raised when a font descriptor carries no bytes."""

    def __init__(self, font_name: str):
        super().__init__(f"Font data is empty: {font_name}")


class InvalidUnitsPerEmError(FontLoadError):
    """Exception raised when a font declares a non-positive em size."""

    def __init__(self, font_name: str, units_per_em: int):
        super().__init__(f"Invalid unitsPerEm {units_per_em} in font: {font_name}")


class NoFontsRegisteredError(FontLoadError):
    """Exception raised when a default font is requested from an empty repository."""

    def __init__(self):
        super().__init__("No fonts registered")


class InvalidBoundsError(TextfitError):
    """Exception raised for invalid size bounds or box dimensions."""


class MinGreaterThanMaxError(InvalidBoundsError):
    """Exception raised when the minimum font size exceeds the maximum."""

    def __init__(self, minimum: float, maximum: float):
        super().__init__(f"min font size {minimum} is greater than max {maximum}")


class NegativeDimensionError(InvalidBoundsError):
    """Exception raised when a size or box dimension is negative."""

    def __init__(self, field_name: str, value: float):
        super().__init__(f"{field_name} cannot be negative: {value}")


class NonPositiveValueError(InvalidBoundsError):
    """Exception raised when a multiplier or step is not positive."""

    def __init__(self, field_name: str, value: float):
        super().__init__(f"{field_name} must be positive: {value}")


class NonFiniteValueError(InvalidBoundsError):
    """Exception raised when a size or dimension is infinite or NaN."""

    def __init__(self, field_name: str, value: float):
        super().__init__(f"{field_name} must be finite: {value}")


class ConfigurationError(TextfitError):
    """Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class SchedulerClosedError(TextfitError):
    """Exception raised when scheduling on a scheduler that was shut down."""

    def __init__(self):
        super().__init__("Recalculation scheduler has been shut down")
