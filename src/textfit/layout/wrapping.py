"""Greedy line wrapping of plain text at a box width."""

from ..fonts.models import ParsedFont
from .metrics import text_width

# Slack for float accumulation when comparing widths
WIDTH_TOLERANCE = 1e-9


def split_paragraphs(text: str) -> list[str]:
    """Split text on hard line breaks."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def wrap_paragraph(
    paragraph: str,
    font: ParsedFont,
    font_size: float,
    max_width: float,
    character_spacing: float = 0.0,
) -> list[str]:
    """
    Wrap one paragraph into lines no wider than ``max_width``.

    Breaks at spaces; a word wider than the box is broken between characters.
    An empty paragraph is a single empty line.
    """

    def fits(line: str) -> bool:
        return text_width(font, line, font_size, character_spacing) <= max_width + WIDTH_TOLERANCE

    if fits(paragraph):
        return [paragraph]

    lines: list[str] = []
    current = ""
    for word in paragraph.split(" "):
        candidate = f"{current} {word}" if current else word
        if fits(candidate):
            current = candidate
            continue

        if current:
            lines.append(current.rstrip(" "))

        if fits(word):
            current = word
        else:
            pieces = _break_word(word, fits)
            lines.extend(pieces[:-1])
            current = pieces[-1]

    lines.append(current)
    return lines


def _break_word(word: str, fits) -> list[str]:
    pieces: list[str] = []
    piece = ""
    for char in word:
        if piece and not fits(piece + char):
            pieces.append(piece)
            piece = char
        else:
            piece += char
    pieces.append(piece)
    return pieces


def wrap_text(
    text: str,
    font: ParsedFont,
    font_size: float,
    max_width: float,
    character_spacing: float = 0.0,
) -> list[str]:
    """Wrap every paragraph of ``text`` and return the flattened lines."""
    lines: list[str] = []
    for paragraph in split_paragraphs(text):
        lines.extend(wrap_paragraph(paragraph, font, font_size, max_width, character_spacing))
    return lines
