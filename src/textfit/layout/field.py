"""Layout of a configured text field for one render pass."""

import logging

from ..core.config import LayoutSettings
from ..core.models import FieldLayout, TextFieldConfig
from ..fonts.models import ParsedFont
from .solver import fit
from .vertical import adjust

logger = logging.getLogger(__name__)


def layout_field(
    config: TextFieldConfig,
    value: str,
    font: ParsedFont,
    settings: LayoutSettings | None = None,
    starting_size: float | None = None,
) -> FieldLayout:
    """
    Compute the font size and vertical offsets for a field's current value.

    The size is solved only when the field has dynamic sizing and a non-empty
    value; otherwise the configured static size is used. Font size, line height
    and character spacing the config leaves unset come from ``settings``.

    Args:
        config: Field configuration (box in millimetres)
        value: Current text
        font: Parsed font named by the field
        settings: Engine settings for the size step and calibration
        starting_size: Size from the previous render, used to seed the search

    Returns:
        FieldLayout with the chosen size and preview offsets in points
    """
    settings = settings or LayoutSettings()
    config = config.with_defaults(
        font_size=settings.default_font_size,
        line_height=settings.default_line_height,
        character_spacing=settings.default_character_spacing,
    )

    fitting = None
    font_size = config.font_size
    if config.dynamic_font_size is not None and value:
        fitting = fit(
            value,
            font,
            config.to_layout_box(),
            config.dynamic_font_size,
            starting_size=starting_size,
            step=settings.size_step,
        )
        font_size = fitting.font_size
        if fitting.overflow:
            logger.info(
                f"Text overflows {config.width}x{config.height}mm at {font_size}pt "
                f"({fitting.line_count} lines)"
            )

    adjustment = adjust(
        font,
        font_size,
        config.line_height,
        config.vertical_alignment,
        settings.calibration,
    )
    return FieldLayout(
        font_name=font.name,
        font_size=font_size,
        adjustment=adjustment,
        fitting=fitting,
    )
