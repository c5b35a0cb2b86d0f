"""
Pytest configuration and fixtures for textfit tests.
"""

import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from textfit.core.config import LayoutSettings
from textfit.core.models import FontSizeBounds, LayoutBox, TextFieldConfig
from textfit.editing.session import EditingSession
from textfit.fonts.models import FontDescriptor
from textfit.fonts.parser import parse_font
from textfit.fonts.repository import FontRepository

PRINTABLE_ASCII = [chr(code) for code in range(0x20, 0x7F)]


def build_font_bytes(
    family: str = "Test Sans",
    units_per_em: int = 1000,
    ascent: int = 800,
    descent: int = 200,
    line_gap: int = 0,
    advance: int = 500,
    notdef_advance: int | None = None,
    advances: dict[str, int] | None = None,
) -> bytes:
    """Build a TrueType font covering printable ASCII with box glyphs."""
    advances = advances or {}
    glyph_names = {char: f"uni{ord(char):04X}" for char in PRINTABLE_ASCII}
    glyph_order = [".notdef", *glyph_names.values()]

    fb = FontBuilder(units_per_em, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(char): name for char, name in glyph_names.items()})

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((0, ascent // 2))
    pen.lineTo((units_per_em * 2 // 5, ascent // 2))
    pen.lineTo((units_per_em * 2 // 5, 0))
    pen.closePath()
    glyph = pen.glyph()
    fb.setupGlyf({name: glyph for name in glyph_order})

    metrics = {".notdef": (notdef_advance if notdef_advance is not None else advance, 0)}
    for char, name in glyph_names.items():
        metrics[name] = (advances.get(char, advance), 0)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ascent, descent=-descent, lineGap=line_gap)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=ascent,
        sTypoDescender=-descent,
        sTypoLineGap=line_gap,
        usWinAscent=ascent,
        usWinDescent=descent,
    )
    fb.setupPost()

    buffer = BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def font_factory():
    """Factory building font bytes with custom metrics."""
    return build_font_bytes


@pytest.fixture(scope="session")
def font_bytes():
    """Font with upm 1000, ascent 800, descent 200, no line gap, 500-unit advances."""
    return build_font_bytes()


@pytest.fixture(scope="session")
def wide_font_bytes():
    """Font with different metrics from the default test font."""
    return build_font_bytes(
        family="Wide Serif", units_per_em=2048, ascent=1900, descent=500, line_gap=67, advance=1200
    )


@pytest.fixture
def test_descriptor(font_bytes):
    return FontDescriptor(name="TestSans", data=font_bytes, fallback=True)


@pytest.fixture
def wide_descriptor(wide_font_bytes):
    return FontDescriptor(name="WideSerif", data=wide_font_bytes)


@pytest.fixture
def corrupt_descriptor():
    return FontDescriptor(name="Broken", data=b"definitely not a font file")


@pytest.fixture
def parsed_font(test_descriptor):
    """ParsedFont of the default test font."""
    return parse_font(test_descriptor)


@pytest.fixture
def repository(test_descriptor, wide_descriptor):
    """Repository with the default test font as fallback."""
    return FontRepository([test_descriptor, wide_descriptor])


@pytest.fixture
def sample_box():
    """The 200x50 box used by the sizing scenarios."""
    return LayoutBox(width=200, height=50, line_height=1.0)


@pytest.fixture
def sample_bounds():
    return FontSizeBounds(min=4, max=20)


@pytest.fixture
def sample_field_config():
    """Dynamic-size field, 70x17.64mm (about 198x50pt)."""
    return TextFieldConfig(
        width=70,
        height=17.64,
        font_name="TestSans",
        font_size=13,
        dynamic_font_size=FontSizeBounds(min=4, max=20),
        vertical_alignment="top",
    )


@pytest.fixture
def settings():
    return LayoutSettings()


@pytest.fixture
def session(repository, settings):
    """Editing session closed after the test."""
    with EditingSession(repository, settings) as editing_session:
        yield editing_session


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)
