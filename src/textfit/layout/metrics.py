"""Font metrics scaled to a requested font size."""

from dataclasses import dataclass

from ..core.models import check_non_negative
from ..fonts.models import ParsedFont


def scale(value: float, font_size: float, units_per_em: int) -> float:
    """Convert a font-unit value to the units of ``font_size``."""
    return value * font_size / units_per_em


@dataclass(frozen=True)
class ScaledMetrics:
    """Vertical metrics of a font at one size."""

    font_size: float
    ascent: float
    descent: float
    line_gap: float

    @property
    def content_height(self) -> float:
        """Ascent plus descent plus line gap, before any line height multiplier."""
        return self.ascent + self.descent + self.line_gap

    def line_box_height(self, line_height: float) -> float:
        return self.content_height * line_height


def scale_metrics(font: ParsedFont, font_size: float) -> ScaledMetrics:
    check_non_negative("font_size", font_size)
    return ScaledMetrics(
        font_size=font_size,
        ascent=scale(font.ascent, font_size, font.units_per_em),
        descent=scale(font.descent, font_size, font.units_per_em),
        line_gap=scale(font.line_gap, font_size, font.units_per_em),
    )


def text_width(
    font: ParsedFont, text: str, font_size: float, character_spacing: float = 0.0
) -> float:
    """
    Width of a single line of text.

    Character spacing is added between characters, not after the last one.
    """
    check_non_negative("font_size", font_size)
    if not text:
        return 0.0
    units = sum(font.advance(char) for char in text)
    return scale(units, font_size, font.units_per_em) + (len(text) - 1) * character_spacing
