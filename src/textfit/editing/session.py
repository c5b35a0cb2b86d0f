"""
Editing Session
===============

Session-scoped handle owning the font cache and the per-field recalculation
scheduler. Independent sessions never share parsed fonts or pending work.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future

from ..core.config import LayoutSettings
from ..core.models import FieldLayout, TextFieldConfig
from ..fonts.cache import FontCache, resolve_font
from ..fonts.models import ParsedFont
from ..fonts.repository import FontRepository
from ..layout.field import layout_field
from .scheduler import RecalculationScheduler

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Layout state for the text fields of one editor instance.

    The initial render calls ``layout`` synchronously; every edit afterwards
    goes through ``schedule_edit`` so that only the latest value of a field is
    published.
    """

    def __init__(
        self,
        repository: FontRepository,
        settings: LayoutSettings | None = None,
        scheduler: RecalculationScheduler | None = None,
    ):
        self.repository = repository
        self.settings = settings or LayoutSettings()
        self.cache = FontCache()
        self.scheduler = scheduler or RecalculationScheduler(
            max_workers=self.settings.max_workers,
            debounce_seconds=self.settings.debounce_seconds,
        )
        self._last_sizes: dict[str, float] = {}
        self._lock = threading.Lock()

    def resolve_font(self, font_name: str | None = None) -> ParsedFont:
        return resolve_font(font_name, self.cache, self.repository)

    def prefetch(self, font_names: list[str]) -> dict[str, ParsedFont]:
        """Parse fonts in the background ahead of the first render."""
        descriptors = [self.repository.get(name) for name in font_names]
        return self.cache.prefetch(descriptors, max_workers=self.settings.max_workers)

    def _compute(self, field_id: str, config: TextFieldConfig, value: str) -> FieldLayout:
        font = self.resolve_font(config.font_name)
        with self._lock:
            starting_size = self._last_sizes.get(field_id)
        return layout_field(config, value, font, self.settings, starting_size=starting_size)

    def _record(self, field_id: str, layout: FieldLayout) -> None:
        with self._lock:
            self._last_sizes[field_id] = layout.font_size

    def layout(self, field_id: str, config: TextFieldConfig, value: str) -> FieldLayout:
        """
        Lay out a field synchronously.

        Args:
            field_id: Stable identifier of the field within the session
            config: Field configuration
            value: Current text

        Returns:
            FieldLayout for the value

        Raises:
            FontLoadError: If the field's font cannot be resolved
            InvalidBoundsError: If the field's size bounds are invalid
        """
        layout = self._compute(field_id, config, value)
        self._record(field_id, layout)
        return layout

    def schedule_edit(
        self,
        field_id: str,
        config: TextFieldConfig,
        value: str,
        on_result: Callable[[FieldLayout], None] | None = None,
    ) -> Future:
        """
        Recalculate a field after an edit, superseding earlier edits.

        Returns:
            Future resolving to the FieldLayout, or None if a newer edit won
        """

        def publish(layout: FieldLayout) -> None:
            self._record(field_id, layout)
            if on_result is not None:
                on_result(layout)

        logger.debug(f"Scheduling recalculation for field {field_id} ({len(value)} chars)")
        return self.scheduler.submit(
            field_id,
            lambda: self._compute(field_id, config, value),
            publish,
        )

    def last_font_size(self, field_id: str) -> float | None:
        with self._lock:
            return self._last_sizes.get(field_id)

    def close(self) -> None:
        self.scheduler.shutdown()

    def __enter__(self) -> "EditingSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
