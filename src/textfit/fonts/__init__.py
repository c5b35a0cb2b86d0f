"""Font Repository & Cache
=======================

Resolves font identities to parsed glyph metrics and memoizes the parses per
editing session.
"""

from .cache import CacheStats, FontCache, resolve_font
from .models import FontDescriptor, ParsedFont
from .parser import parse_font
from .repository import FontRepository

__all__ = [
    "CacheStats",
    "FontCache",
    "FontDescriptor",
    "FontRepository",
    "ParsedFont",
    "parse_font",
    "resolve_font",
]
