"""Session-scoped caching and cancellable per-field recalculation."""

from .scheduler import FieldTask, RecalculationScheduler
from .session import EditingSession

__all__ = [
    "EditingSession",
    "FieldTask",
    "RecalculationScheduler",
]
