"""
Font data models and types.
"""

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path


@dataclass(frozen=True)
class FontDescriptor:
    """Named font binary as supplied by the font provider."""

    name: str
    data: bytes = field(repr=False)
    bold: bool = False
    italic: bool = False
    fallback: bool = False  # repository default
    path: str | None = None

    @cached_property
    def checksum(self) -> str:
        """SHA-256 of the font bytes."""
        return hashlib.sha256(self.data).hexdigest()

    @property
    def style(self) -> str:
        if self.bold and self.italic:
            return "bold-italic"
        if self.bold:
            return "bold"
        if self.italic:
            return "italic"
        return "normal"

    @property
    def extension(self) -> str:
        return Path(self.path).suffix.lower() if self.path else ""

    def __str__(self) -> str:
        return f"{self.name} {self.style} ({len(self.data)} bytes)"


@dataclass(frozen=True)
class ParsedFont:
    """Scalable metrics of a parsed font, in font units.

    ``descent`` is stored as a positive distance below the baseline.
    """

    name: str
    checksum: str
    units_per_em: int
    ascent: int
    descent: int
    line_gap: int
    advance_widths: Mapping[int, int] = field(repr=False)
    default_advance: int = 0
    family_name: str = "Unknown"
    style_name: str = "Regular"

    def advance(self, char: str) -> int:
        """Advance width of a single character in font units."""
        return self.advance_widths.get(ord(char), self.default_advance)

    def has_glyph(self, char: str) -> bool:
        return ord(char) in self.advance_widths

    @property
    def glyph_count(self) -> int:
        return len(self.advance_widths)

    def __str__(self) -> str:
        return f"{self.family_name} {self.style_name} ({self.name})"
