"""Calendar Store: in-memory, lock-guarded mapping of date key to ordered tasks.

Invariants:
    - Task ids are unique across the whole store and strictly increasing
    - next_id is always greater than every id ever issued (deleted ids are never reused)
    - Every public operation holds the single store lock for its whole read-modify-write
    - update_task is scoped to the given date; delete_task scans every date
    - A date key, once created, is never removed (empty lists are allowed)

Design Decisions:
    - One whole-store threading.Lock, not per-date: id allocation crosses dates
    - Routes are sync `def`, so FastAPI runs them on its thread pool and the lock
      is a real mutual exclusion, not an event-loop formality
    - Reads return copies: callers never hold references into guarded state
"""

import logging
import threading

from calendar_api.core.domain_types import DateKey, DaySnapshot, Task, TaskId
from calendar_api.core.errors import ErrorContext, InvalidInputError

logger = logging.getLogger(__name__)


class CalendarStore:
    """Process-lifetime task store. Construct one per app and inject it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks_by_date: dict[DateKey, list[Task]] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        """Id the next created task will receive."""
        with self._lock:
            return self._next_id

    def task_count(self) -> int:
        with self._lock:
            return sum(len(tasks) for tasks in self._tasks_by_date.values())

    def list_all(self) -> list[DaySnapshot]:
        """Snapshot of every date with its tasks, dates in ascending key order."""
        with self._lock:
            return [
                DaySnapshot(
                    date=date,
                    tasks=tuple(Task(t.id, t.text) for t in tasks),
                )
                for date, tasks in sorted(self._tasks_by_date.items())
            ]

    def create_task(self, date: str, text: str) -> Task:
        """Append a new task under `date` and return a copy of it.

        Raises InvalidInputError when date or text is missing or blank.
        """
        _require_non_blank(date, "date")
        _require_non_blank(text, "text")
        with self._lock:
            task = Task(id=TaskId(self._next_id), text=text)
            self._next_id += 1
            self._tasks_by_date.setdefault(DateKey(date), []).append(task)
        logger.info(
            f"Created task {task.id}",
            extra={"task_id": task.id, "date": date},
        )
        return Task(task.id, task.text)

    def update_task(self, task_id: int, date: str, text: str) -> bool:
        """Replace the text of task `task_id` under `date`.

        Returns False (without mutating anything) when the date is unknown or
        holds no task with that id, including when the id lives under another date.
        """
        with self._lock:
            for task in self._tasks_by_date.get(DateKey(date), ()):
                if task.id == task_id:
                    task.text = text
                    updated = True
                    break
            else:
                updated = False
        if not updated:
            logger.info(
                f"Update missed: no task {task_id} under {date!r}",
                extra={"task_id": task_id, "date": date},
            )
        return updated

    def delete_task(self, task_id: int) -> bool:
        """Remove task `task_id` from whichever date holds it.

        A missing id is a no-op. Returns whether something was removed.
        """
        removed = False
        with self._lock:
            for tasks in self._tasks_by_date.values():
                kept = [t for t in tasks if t.id != task_id]
                if len(kept) != len(tasks):
                    tasks[:] = kept
                    removed = True
        logger.debug(
            f"Delete task {task_id}: removed={removed}",
            extra={"task_id": task_id},
        )
        return removed


def _require_non_blank(value: str | None, field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(
            f"'{field}' is required and cannot be blank",
            field,
            ErrorContext(debug_info={"field": field}),
        )
