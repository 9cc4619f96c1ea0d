"""Domain Types: named types for the primitives the calendar passes around.

Invariants:
    - TaskId is a positive int issued by CalendarStore, never reused
    - DateKey is any non-blank string, stored verbatim (no ISO-8601 normalization)
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", int)
DateKey = NewType("DateKey", str)


# ─── Entities ────────────────────────────────────────────────────

@dataclass
class Task:
    """A single to-do item. Only `text` changes after creation."""
    id: TaskId
    text: str


@dataclass(frozen=True)
class DaySnapshot:
    """One date key with a copy of its tasks, in insertion order."""
    date: DateKey
    tasks: tuple[Task, ...]
