"""
Font Repository
===============

Registry of named font binaries supplied by the host application, including
the documented default font used when a field names no font.
"""

import logging
from pathlib import Path

from ..core.exceptions import FontNotFoundError, NoFontsRegisteredError
from .models import FontDescriptor

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = {".ttf", ".otf"}


class FontRepository:
    """
    Named font descriptors.

    Lookup is exact by name. Choosing a substitute for an unknown name is the
    caller's policy, so ``get`` raises instead of falling back.
    """

    def __init__(self, descriptors: list[FontDescriptor] | None = None):
        self._descriptors: dict[str, FontDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: FontDescriptor) -> None:
        """Add or replace a font under its name."""
        if descriptor.name in self._descriptors:
            logger.info(f"Replacing registered font: {descriptor.name}")
        self._descriptors[descriptor.name] = descriptor
        logger.debug(f"Registered font: {descriptor}")

    @property
    def default_name(self) -> str:
        """Name of the font flagged ``fallback``, else the first registered."""
        if not self._descriptors:
            raise NoFontsRegisteredError()
        for name, descriptor in self._descriptors.items():
            if descriptor.fallback:
                return name
        return next(iter(self._descriptors))

    def get(self, font_name: str | None = None) -> FontDescriptor:
        """
        Get a font descriptor by name.

        Args:
            font_name: Registered font name, or None for the default font

        Returns:
            The registered FontDescriptor

        Raises:
            FontNotFoundError: If the name is not registered
        """
        if not font_name:
            return self._descriptors[self.default_name]

        descriptor = self._descriptors.get(font_name)
        if descriptor is None:
            raise FontNotFoundError(font_name, self.names())
        return descriptor

    def names(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, font_name: str) -> bool:
        return font_name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    @classmethod
    def from_directory(
        cls, fonts_dir: Path, default_font: str | None = None
    ) -> "FontRepository":
        """
        Load every TrueType/OpenType file in a directory.

        Args:
            fonts_dir: Directory containing font files; names are file stems
            default_font: Optional name to flag as the fallback font

        Returns:
            Repository holding the loaded descriptors
        """
        repository = cls()
        for font_path in sorted(Path(fonts_dir).iterdir()):
            if font_path.suffix.lower() not in FONT_EXTENSIONS:
                continue
            stem = font_path.stem
            style = stem.lower()
            repository.register(
                FontDescriptor(
                    name=stem,
                    data=font_path.read_bytes(),
                    bold="bold" in style,
                    italic="italic" in style or "oblique" in style,
                    fallback=stem == default_font,
                    path=str(font_path),
                )
            )

        if default_font and default_font not in repository:
            raise FontNotFoundError(default_font, repository.names())

        logger.info(f"Loaded {len(repository)} fonts from {fonts_dir}")
        return repository
