"""
Font Parsing
============

Reads the metrics the layout engine needs out of raw TrueType/OpenType bytes
using fontTools.
"""

import logging
from io import BytesIO
from types import MappingProxyType

from fontTools.ttLib import TTFont

from ..core.exceptions import EmptyFontDataError, FontLoadError, InvalidUnitsPerEmError
from .models import FontDescriptor, ParsedFont

logger = logging.getLogger(__name__)

# OpenType name IDs
FAMILY_NAME_ID = 1
SUBFAMILY_NAME_ID = 2
ENGLISH_LANG_IDS = (0, 1033)


def parse_font(descriptor: FontDescriptor) -> ParsedFont:
    """
    Parse font bytes into an immutable ParsedFont.

    Args:
        descriptor: Named font binary

    Returns:
        ParsedFont with vertical metrics and advance widths

    Raises:
        FontLoadError: If the bytes are empty, corrupt or not a supported font
    """
    if not descriptor.data:
        raise EmptyFontDataError(descriptor.name)

    try:
        font = TTFont(BytesIO(descriptor.data), lazy=False)
    except Exception as e:
        raise FontLoadError(f"Failed to parse font {descriptor.name}: {e}", details=e) from e

    try:
        units_per_em = font["head"].unitsPerEm
        if units_per_em <= 0:
            raise InvalidUnitsPerEmError(descriptor.name, units_per_em)

        hhea = font["hhea"]
        hmtx = font["hmtx"]
        cmap = font.getBestCmap() or {}

        advance_widths = {
            code: hmtx.metrics[glyph_name][0]
            for code, glyph_name in cmap.items()
            if glyph_name in hmtx.metrics
        }
        notdef = font.getGlyphOrder()[0]
        default_advance = hmtx.metrics[notdef][0] if notdef in hmtx.metrics else 0

        family_name, style_name = _read_names(font)

        parsed = ParsedFont(
            name=descriptor.name,
            checksum=descriptor.checksum,
            units_per_em=units_per_em,
            ascent=hhea.ascent,
            descent=abs(hhea.descent),
            line_gap=hhea.lineGap,
            advance_widths=MappingProxyType(advance_widths),
            default_advance=default_advance,
            family_name=family_name or descriptor.name,
            style_name=style_name or "Regular",
        )
    except FontLoadError:
        raise
    except Exception as e:
        raise FontLoadError(
            f"Unsupported font data in {descriptor.name}: {e}", details=e
        ) from e
    finally:
        font.close()

    logger.debug(
        f"Parsed font {parsed.name}: upm={parsed.units_per_em} ascent={parsed.ascent} "
        f"descent={parsed.descent} lineGap={parsed.line_gap} glyphs={parsed.glyph_count}"
    )
    return parsed


def _read_names(font: TTFont) -> tuple[str | None, str | None]:
    """Read family and subfamily names, tolerating a missing name table."""
    if "name" not in font:
        return None, None
    name_table = font["name"]
    return (
        _get_font_name(name_table, FAMILY_NAME_ID),
        _get_font_name(name_table, SUBFAMILY_NAME_ID),
    )


def _get_font_name(name_table, name_id: int) -> str | None:
    """Extract font name from name table, preferring English records."""
    fallback = None
    for record in name_table.names:
        if record.nameID != name_id:
            continue
        try:
            value = record.toUnicode()
        except UnicodeDecodeError:
            continue
        if record.langID in ENGLISH_LANG_IDS:
            return value
        fallback = fallback or value
    return fallback
