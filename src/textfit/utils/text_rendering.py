"""Preview rendering of a laid-out text field with Pillow."""

import logging
from io import BytesIO

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..core.exceptions import FontLoadError
from ..core.models import Alignment, FieldLayout, TextFieldConfig, VerticalAlignment
from ..fonts.models import FontDescriptor, ParsedFont
from ..layout.metrics import scale_metrics, text_width
from ..layout.wrapping import split_paragraphs, wrap_paragraph
from .units import PT_PER_INCH

logger = logging.getLogger(__name__)

DEFAULT_DPI = 96
DEFAULT_BACKGROUND = "#ffffff"


class PreviewRenderer:
    """Draws field text the way the preview lays it out: line boxes plus offsets."""

    def __init__(self, dpi: int = DEFAULT_DPI):
        self.dpi = dpi

    @property
    def px_per_pt(self) -> float:
        return self.dpi / PT_PER_INCH

    def render(
        self,
        value: str,
        config: TextFieldConfig,
        layout: FieldLayout,
        font: ParsedFont,
        descriptor: FontDescriptor,
    ) -> Image.Image:
        """Render text as a PIL Image.

        Args:
            value: Field text
            config: Field configuration
            layout: Result of layout_field for the same value
            font: Parsed metrics of the field font
            descriptor: Font bytes for rasterising glyphs

        Returns:
            RGBA image the size of the field box

        """
        scale = self.px_per_pt
        box = config.to_layout_box()
        width_px = max(1, round(box.width * scale))
        height_px = max(1, round(box.height * scale))

        background = ImageColor.getrgb(config.background_color or DEFAULT_BACKGROUND)
        image = Image.new("RGBA", (width_px, height_px), color=(*background[:3], 255))
        if not value:
            return image

        try:
            pil_font = ImageFont.truetype(
                BytesIO(descriptor.data), max(1, round(layout.font_size * scale))
            )
        except OSError as e:
            raise FontLoadError(f"Pillow could not load font {descriptor.name}: {e}") from e

        # (line, ends paragraph) pairs; justified text leaves paragraph ends ragged
        rows: list[tuple[str, bool]] = []
        for paragraph in split_paragraphs(value):
            wrapped = wrap_paragraph(
                paragraph, font, layout.font_size, box.width, box.character_spacing
            )
            rows.extend((line, i == len(wrapped) - 1) for i, line in enumerate(wrapped))

        metrics = scale_metrics(font, layout.font_size)
        line_box = metrics.line_box_height(box.line_height)
        half_leading = (line_box - metrics.ascent - metrics.descent) / 2
        block_height = line_box * len(rows)

        top = layout.adjustment.top_offset
        bottom = layout.adjustment.bottom_offset
        if box.vertical_alignment == VerticalAlignment.BOTTOM:
            y = box.height - bottom - block_height
        elif box.vertical_alignment == VerticalAlignment.MIDDLE:
            y = top + (box.height - top - bottom - block_height) / 2
        else:
            y = top

        color = ImageColor.getrgb(config.font_color)
        fill = (*color[:3], round(config.opacity * 255))

        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for line, last in rows:
            line_width = text_width(font, line, layout.font_size, box.character_spacing)
            word_gap = 0.0
            if box.alignment == Alignment.CENTER:
                x = (box.width - line_width) / 2
            elif box.alignment == Alignment.RIGHT:
                x = box.width - line_width
            else:
                x = 0.0
                if box.alignment == Alignment.JUSTIFY and not last and " " in line:
                    word_gap = max(0.0, box.width - line_width) / line.count(" ")

            baseline = y + half_leading + metrics.ascent
            for char in line:
                draw.text(
                    (x * scale, baseline * scale), char, font=pil_font, fill=fill, anchor="ls"
                )
                x += text_width(font, char, layout.font_size) + box.character_spacing
                if char == " ":
                    x += word_gap
            y += line_box

        logger.debug(f"Rendered {len(rows)} lines at {layout.font_size}pt into {image.size}")
        return Image.alpha_composite(image, layer)


def render_preview(
    value: str,
    config: TextFieldConfig,
    layout: FieldLayout,
    font: ParsedFont,
    descriptor: FontDescriptor,
    dpi: int = DEFAULT_DPI,
) -> Image.Image:
    """Simple preview rendering function."""
    return PreviewRenderer(dpi=dpi).render(value, config, layout, font, descriptor)
