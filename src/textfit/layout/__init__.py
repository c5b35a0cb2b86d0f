"""Layout: metrics scaling, size solving and vertical reconciliation."""

from .field import layout_field
from .metrics import ScaledMetrics, scale, scale_metrics, text_width
from .solver import candidate_count, candidate_size, fit
from .vertical import adjust, line_box_delta
from .wrapping import split_paragraphs, wrap_text

__all__ = [
    "ScaledMetrics",
    "adjust",
    "candidate_count",
    "candidate_size",
    "fit",
    "layout_field",
    "line_box_delta",
    "scale",
    "scale_metrics",
    "split_paragraphs",
    "text_width",
    "wrap_text",
]
