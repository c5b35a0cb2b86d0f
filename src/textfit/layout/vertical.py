"""Vertical offset reconciliation between the preview and document renderers.

The preview lays out each line in a line box of ``ascent + descent + lineGap``
scaled by the line height multiplier. The document renderer places the first
baseline ``ascent`` below the box top at the literal font size. The
difference between the two is moved into padding above or below the preview
text depending on the vertical alignment.
"""

import logging

from ..core.config import OffsetCalibration
from ..core.models import VerticalAdjustment, VerticalAlignment, check_positive
from ..fonts.models import ParsedFont
from .metrics import scale_metrics

logger = logging.getLogger(__name__)


def line_box_delta(font: ParsedFont, font_size: float, line_height: float) -> float:
    """Preview line box height minus the document renderer's baseline anchor."""
    check_positive("line_height", line_height)
    metrics = scale_metrics(font, font_size)
    return metrics.line_box_height(line_height) - metrics.ascent


def adjust(
    font: ParsedFont,
    font_size: float,
    line_height: float,
    vertical_alignment: VerticalAlignment | str,
    calibration: OffsetCalibration | None = None,
) -> VerticalAdjustment:
    """
    Compute preview padding that lines text up with the rendered document.

    Args:
        font: Parsed font metrics
        font_size: Font size in points
        line_height: Line height multiplier
        vertical_alignment: top, middle or bottom
        calibration: Split fractions; defaults to OffsetCalibration()

    Returns:
        VerticalAdjustment in points. Offsets are negative when the line box is
        shorter than the ascent.
    """
    calibration = calibration or OffsetCalibration()
    alignment = VerticalAlignment(vertical_alignment)
    delta = line_box_delta(font, font_size, line_height)

    if alignment == VerticalAlignment.TOP:
        adjustment = VerticalAdjustment(top_offset=delta * calibration.top_fraction)
    elif alignment == VerticalAlignment.BOTTOM:
        adjustment = VerticalAdjustment(bottom_offset=delta * calibration.bottom_fraction)
    else:
        top = delta * calibration.middle_top_fraction
        adjustment = VerticalAdjustment(top_offset=top, bottom_offset=delta - top)

    logger.debug(
        f"Vertical adjustment for {font.name} at {font_size}pt ({alignment.value}): "
        f"delta={delta:.4f} top={adjustment.top_offset:.4f} bottom={adjustment.bottom_offset:.4f}"
    )
    return adjustment
