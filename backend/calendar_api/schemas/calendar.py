"""Calendar Schemas: Pydantic models for the calendar API boundary.

Invariants:
    - TaskWrite.date and TaskWrite.text are required strings, non-blank
    - Values are kept verbatim (no stripping): the date key is caller-defined
    - Numbers are not coerced into strings (strict str)

Design Decisions:
    - One write schema for POST and PUT: both carry {date, text}
    - Response models mirror the wire format exactly: {"id", "text"} and
      {"days": [{"date", "tasks"}]}
"""

from pydantic import BaseModel, StrictStr, field_validator

from calendar_api.core.domain_types import DaySnapshot, Task


class TaskWrite(BaseModel):
    """Body of POST /task and PUT /task/{id}."""
    date: StrictStr
    text: StrictStr

    @field_validator("date", "text")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v


class TaskResponse(BaseModel):
    id: int
    text: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(id=task.id, text=task.text)


class DayResponse(BaseModel):
    date: str
    tasks: list[TaskResponse]


class MonthResponse(BaseModel):
    """GET /month payload: every known date with its tasks."""
    days: list[DayResponse]

    @classmethod
    def from_snapshots(cls, days: list[DaySnapshot]) -> "MonthResponse":
        return cls(days=[
            DayResponse(
                date=day.date,
                tasks=[TaskResponse.from_task(t) for t in day.tasks],
            )
            for day in days
        ])
