"""Per-field recalculation scheduling.

Each edit submits a task for its field. Submitting again for the same field
cancels the pending task, and a task that was already running when it got
superseded drops its result instead of publishing it. The last edit wins;
edits are never queued behind each other.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import SchedulerClosedError

logger = logging.getLogger(__name__)


@dataclass
class FieldTask:
    """In-flight recalculation for one field."""

    field_id: str
    generation: int
    future: Future | None = None
    superseded: threading.Event = field(default_factory=threading.Event)


class RecalculationScheduler:
    """Runs at most one live recalculation per field on a thread pool."""

    def __init__(self, max_workers: int = 2, debounce_seconds: float = 0.0):
        """
        Initialize the scheduler.

        Args:
            max_workers: Worker threads shared by all fields
            debounce_seconds: Delay before a task computes; a newer edit during
                the delay supersedes it without computing
        """
        self.debounce_seconds = debounce_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="textfit-recalc"
        )
        self._tasks: dict[str, FieldTask] = {}
        self._generations: dict[str, int] = {}
        self._publish_locks: dict[str, threading.Lock] = {}
        self._lock = threading.RLock()
        self._closed = False

    def submit(
        self,
        field_id: str,
        compute: Callable[[], Any],
        on_result: Callable[[Any], None] | None = None,
    ) -> Future:
        """
        Schedule a recalculation, superseding any pending one for the field.

        Args:
            field_id: Field the work belongs to
            compute: Work to run on a worker thread
            on_result: Called with the result if the task is still current

        Returns:
            Future resolving to the result. A superseded task is cancelled
            or resolves to None.
        """
        with self._lock:
            if self._closed:
                raise SchedulerClosedError()

            previous = self._tasks.get(field_id)
            if previous is not None:
                self._supersede(previous)

            self._publish_locks.setdefault(field_id, threading.Lock())
            generation = self._generations.get(field_id, 0) + 1
            self._generations[field_id] = generation
            task = FieldTask(field_id=field_id, generation=generation)
            task.future = self._executor.submit(self._run, task, compute, on_result)
            self._tasks[field_id] = task

        return task.future

    def _supersede(self, task: FieldTask) -> None:
        task.superseded.set()
        if task.future is not None and task.future.cancel():
            logger.debug(f"Cancelled pending recalculation {task.generation} for {task.field_id}")

    def _run(
        self,
        task: FieldTask,
        compute: Callable[[], Any],
        on_result: Callable[[Any], None] | None,
    ) -> Any:
        try:
            if self.debounce_seconds and task.superseded.wait(self.debounce_seconds):
                logger.debug(
                    f"Edit {task.generation} for {task.field_id} superseded while debouncing"
                )
                return None
            if task.superseded.is_set():
                return None

            result = compute()

            # The field lock orders publishes of one field; the scheduler lock is
            # released before on_result so other fields keep scheduling
            with self._publish_locks[task.field_id]:
                with self._lock:
                    current = (
                        self._generations.get(task.field_id) == task.generation
                        and not task.superseded.is_set()
                    )
                    if not current:
                        logger.debug(
                            f"Discarding stale result {task.generation} for {task.field_id}"
                        )
                        return None
                    self._tasks.pop(task.field_id, None)
                if on_result is not None:
                    on_result(result)
            return result
        except Exception:
            logger.exception(f"Recalculation {task.generation} for {task.field_id} failed")
            with self._lock:
                if self._tasks.get(task.field_id) is task:
                    del self._tasks[task.field_id]
            raise

    def cancel(self, field_id: str) -> bool:
        """Supersede the pending task for a field, if any."""
        with self._lock:
            task = self._tasks.pop(field_id, None)
            if task is None:
                return False
            self._generations[field_id] = task.generation + 1
            self._supersede(task)
            return True

    def pending(self, field_id: str) -> bool:
        """Whether a live task exists for the field."""
        with self._lock:
            return field_id in self._tasks

    def shutdown(self, wait: bool = True) -> None:
        """Supersede every pending task and stop the worker threads."""
        with self._lock:
            self._closed = True
            for task in self._tasks.values():
                self._supersede(task)
            self._tasks.clear()
        self._executor.shutdown(wait=wait)
        logger.debug("Recalculation scheduler shut down")
