"""Parsed Font Cache
=================

Session-scoped memo of parsed fonts:
- Owned by the caller (one per editing session), never a module global
- Thread-safe; a font is parsed at most once even when requested concurrently
- Entries are validated against the descriptor checksum
- Optional background parsing of cache misses
"""

import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

from ..core.exceptions import FontLoadError
from .models import FontDescriptor, ParsedFont
from .parser import parse_font
from .repository import FontRepository

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Statistics for font cache performance."""

    hits: int = 0
    misses: int = 0
    parse_failures: int = 0
    replacements: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100.0) if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "parse_failures": self.parse_failures,
            "replacements": self.replacements,
            "hit_rate_percent": self.hit_rate,
        }


class FontCache:
    """Thread-safe cache of ParsedFont instances keyed by font name."""

    def __init__(self):
        self._fonts: dict[str, ParsedFont] = {}
        self._lock = threading.Lock()
        self._parse_locks: dict[str, threading.Lock] = {}
        self._stats = CacheStats()

    def _parse_lock(self, font_name: str) -> threading.Lock:
        with self._lock:
            return self._parse_locks.setdefault(font_name, threading.Lock())

    def _lookup(self, descriptor: FontDescriptor) -> ParsedFont | None:
        with self._lock:
            parsed = self._fonts.get(descriptor.name)
            if parsed is not None and parsed.checksum == descriptor.checksum:
                self._stats.hits += 1
                return parsed
            return None

    def get_or_parse(self, descriptor: FontDescriptor) -> ParsedFont:
        """Get the parsed font for a descriptor, parsing it on a miss.

        Args:
            descriptor: Font binary to resolve

        Returns:
            The cached ParsedFont; repeated calls return the same instance

        Raises:
            FontLoadError: If the font bytes cannot be parsed
        """
        parsed = self._lookup(descriptor)
        if parsed is not None:
            logger.debug(f"Cache hit for font {descriptor.name}")
            return parsed

        # One writer per font name; later waiters find the published entry
        with self._parse_lock(descriptor.name):
            parsed = self._lookup(descriptor)
            if parsed is not None:
                return parsed

            with self._lock:
                self._stats.misses += 1

            logger.info(f"Cache miss for font {descriptor.name}, parsing...")
            start_time = time.time()
            try:
                parsed = parse_font(descriptor)
            except FontLoadError:
                with self._lock:
                    self._stats.parse_failures += 1
                raise

            with self._lock:
                if descriptor.name in self._fonts:
                    self._stats.replacements += 1
                    logger.info(f"Font {descriptor.name} changed, replacing cached metrics")
                self._fonts[descriptor.name] = parsed

            logger.info(
                f"Parsed and cached font {descriptor.name} "
                f"({parsed.glyph_count} glyphs) in {time.time() - start_time:.3f}s"
            )
            return parsed

    def get(self, font_name: str) -> ParsedFont | None:
        """Return a cached font without parsing, or None."""
        with self._lock:
            return self._fonts.get(font_name)

    def prefetch(
        self, descriptors: Iterable[FontDescriptor], max_workers: int = 2
    ) -> dict[str, ParsedFont]:
        """Parse several fonts on a thread pool.

        Args:
            descriptors: Fonts to warm the cache with
            max_workers: Maximum number of concurrent parses

        Returns:
            Mapping of font name to ParsedFont for every font that parsed

        Raises:
            FontLoadError: The first parse failure, after all parses finish
        """
        descriptors = list(descriptors)
        logger.info(f"Prefetching {len(descriptors)} fonts with max_workers={max_workers}")

        parsed: dict[str, ParsedFont] = {}
        first_error: FontLoadError | None = None
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(self.get_or_parse, d): d for d in descriptors}
            for future in as_completed(futures):
                descriptor = futures[future]
                try:
                    parsed[descriptor.name] = future.result()
                except FontLoadError as e:
                    logger.warning(f"Failed to prefetch font {descriptor.name}: {e}")
                    first_error = first_error or e

        if first_error is not None:
            raise first_error
        return parsed

    def clear(self) -> None:
        """Drop all cached fonts."""
        with self._lock:
            count = len(self._fonts)
            self._fonts.clear()
            self._parse_locks.clear()
        logger.info(f"Font cache cleared: {count} fonts")

    def get_stats(self) -> CacheStats:
        """Get a snapshot of cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                parse_failures=self._stats.parse_failures,
                replacements=self._stats.replacements,
            )

    def __contains__(self, font_name: str) -> bool:
        with self._lock:
            return font_name in self._fonts

    def __len__(self) -> int:
        with self._lock:
            return len(self._fonts)


def resolve_font(
    font_name: str | None, cache: FontCache, repository: FontRepository
) -> ParsedFont:
    """
    Resolve a font name to parsed metrics through a caller-owned cache.

    Args:
        font_name: Registered font name, or None for the repository default
        cache: Session cache that memoizes parses
        repository: Source of font binaries

    Returns:
        ParsedFont, reference-identical across calls for the same font

    Raises:
        FontLoadError: If the name is unknown or the bytes cannot be parsed
    """
    return cache.get_or_parse(repository.get(font_name))
