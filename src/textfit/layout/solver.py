"""Dynamic Font Size Solver
========================

Finds the largest font size in a range at which text fits a box.

Candidate sizes lie on a grid of ``step`` from ``bounds.min`` with
``bounds.max`` always included. Fitting is monotone in size, so a binary
search over the grid returns the same size as scanning down from the maximum.
Candidates are computed from their index, so a search costs
O(log((max - min) / step)) measurements whatever the width of the range.
"""

import logging
import math

from ..core.models import (
    FitMode,
    FittingResult,
    FontSizeBounds,
    LayoutBox,
    check_finite,
    check_positive,
)
from ..fonts.models import ParsedFont
from .metrics import text_width
from .wrapping import WIDTH_TOLERANCE, split_paragraphs, wrap_text

logger = logging.getLogger(__name__)

DEFAULT_SIZE_STEP = 0.25
HEIGHT_TOLERANCE = 1e-9
# Slack so that sizes like 4 + 24 * 0.25 land on the grid despite float error
GRID_TOLERANCE = 1e-9


def _grid_count(bounds: FontSizeBounds, step: float) -> int:
    """Number of on-grid candidates ``min + i * step`` not above ``max``."""
    return math.floor((bounds.max - bounds.min) / step + GRID_TOLERANCE) + 1


def candidate_count(bounds: FontSizeBounds, step: float = DEFAULT_SIZE_STEP) -> int:
    """Number of sizes the solver may return."""
    check_positive("step", step)
    count = _grid_count(bounds, step)
    if candidate_size(bounds, step, count - 1) < bounds.max:
        count += 1
    return count


def candidate_size(bounds: FontSizeBounds, step: float, index: int) -> float:
    """The candidate at ``index``; indices past the grid give ``bounds.max``."""
    if index >= _grid_count(bounds, step):
        return bounds.max
    return min(round(bounds.min + index * step, 6), bounds.max)


def candidate_index(bounds: FontSizeBounds, step: float, size: float) -> int:
    """Index of the largest candidate not above ``size``, clamped to the range."""
    size = bounds.clamp(size)
    if size >= bounds.max:
        return candidate_count(bounds, step) - 1
    index = math.floor((size - bounds.min) / step + GRID_TOLERANCE)
    return max(0, min(index, _grid_count(bounds, step) - 1))


def measure(
    text: str,
    font: ParsedFont,
    box: LayoutBox,
    font_size: float,
    fit_mode: FitMode = FitMode.VERTICAL,
) -> tuple[list[str], bool]:
    """
    Wrap text at a size and report whether it fits the box.

    Returns:
        Tuple of (wrapped lines, fits)
    """
    lines = wrap_text(text, font, font_size, box.width, box.character_spacing)
    block_height = len(lines) * font_size * box.line_height
    if block_height > box.height + HEIGHT_TOLERANCE:
        return lines, False

    # Wider than the box is only possible for a single oversized glyph
    widths = lines
    if fit_mode == FitMode.HORIZONTAL:
        widths = split_paragraphs(text)
    widest = max(
        (text_width(font, line, font_size, box.character_spacing) for line in widths),
        default=0.0,
    )
    return lines, widest <= box.width + WIDTH_TOLERANCE


def fit(
    text: str,
    font: ParsedFont,
    box: LayoutBox,
    bounds: FontSizeBounds,
    starting_size: float | None = None,
    step: float = DEFAULT_SIZE_STEP,
) -> FittingResult:
    """
    Find the largest font size at which ``text`` fits ``box``.

    Args:
        text: Text to lay out; ``\\n`` starts a new paragraph
        font: Parsed font supplying advance widths
        box: Box geometry, line height and character spacing
        bounds: Inclusive size range and fit mode
        starting_size: Previous result, measured first
        step: Size granularity

    Returns:
        FittingResult; ``overflow`` is set when even ``bounds.min`` does not fit

    Raises:
        InvalidBoundsError: For negative, inverted or non-finite bounds and box dimensions
    """
    bounds.check()
    box.check()
    check_positive("step", step)

    if not text:
        return FittingResult(font_size=bounds.max, line_count=0, overflow=False)

    count = candidate_count(bounds, step)
    measured: dict[int, tuple[list[str], bool]] = {}

    def fits_at(index: int) -> bool:
        if index not in measured:
            size = candidate_size(bounds, step, index)
            measured[index] = measure(text, font, box, size, bounds.fit)
            logger.debug(f"Size {size}: fits={measured[index][1]}")
        return measured[index][1]

    # Invariant: every index below lo fits, every index above hi does not
    lo, hi = 0, count - 1
    if starting_size is not None:
        check_finite("starting_size", starting_size)
        start = candidate_index(bounds, step, starting_size)
        if fits_at(start):
            lo = start + 1
        else:
            hi = start - 1

    best = lo - 1 if lo > 0 else None
    while lo <= hi:
        mid = (lo + hi) // 2
        if fits_at(mid):
            best = mid
            lo = mid + 1
        else:
            hi = mid - 1

    if best is None:
        fits_at(0)
        lines, _ = measured[0]
        logger.debug(f"Text overflows box at minimum size {bounds.min}")
        return FittingResult(
            font_size=bounds.min, line_count=len(lines), overflow=True, lines=tuple(lines)
        )

    lines, _ = measured[best]
    return FittingResult(
        font_size=candidate_size(bounds, step, best),
        line_count=len(lines),
        overflow=False,
        lines=tuple(lines),
    )
