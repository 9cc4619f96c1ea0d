"""Calendar Routes: month listing and task create/update/delete.

Invariants:
    - Routes never contain business logic: every mutation goes through CalendarStore
    - Bodies validated by TaskWrite before reaching the handler (400 otherwise)
    - Bodies are decoded as JSON whatever the Content-Type says (browsers send
      text/plain for a bare string body)
    - {task_id} must be a non-negative integer (400 otherwise)
    - PUT answers 200 "OK" or 200 "Failed"; DELETE always answers 200 "OK"

Design Decisions:
    - Handlers are sync `def`: FastAPI runs them on its thread pool, CalendarStore locks
    - Store injected via Depends(get_store) from app.state: tests build a fresh one per app
    - POST returns 200, not 201: existing clients expect 200
"""

import logging

from fastapi import APIRouter, Depends, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from calendar_api.core.calendar_store import CalendarStore
from calendar_api.schemas.calendar import MonthResponse, TaskResponse, TaskWrite

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/calendar", tags=["calendar"])

OK_BODY = "OK"
FAILED_BODY = "Failed"


def get_store(request: Request) -> CalendarStore:
    """Store attached to the running app by create_app()."""
    return request.app.state.store


async def read_task_write(request: Request) -> TaskWrite:
    """Parse the raw request body as a TaskWrite, ignoring Content-Type."""
    raw = await request.body()
    try:
        return TaskWrite.model_validate_json(raw)
    except ValidationError as exc:
        errors = [
            {**e, "loc": ("body", *e["loc"])}
            for e in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=raw) from exc


@router.get("/month", response_model=MonthResponse)
def get_month(store: CalendarStore = Depends(get_store)):
    """Every known date with its tasks."""
    return MonthResponse.from_snapshots(store.list_all())


@router.post("/task", response_model=TaskResponse)
def create_task(
    body: TaskWrite = Depends(read_task_write),
    store: CalendarStore = Depends(get_store),
):
    """Create a task under body.date and return it with its new id."""
    task = store.create_task(body.date, body.text)
    return TaskResponse.from_task(task)


@router.put("/task/{task_id}", response_class=PlainTextResponse)
def update_task(
    task_id: int = Path(ge=0),
    body: TaskWrite = Depends(read_task_write),
    store: CalendarStore = Depends(get_store),
):
    """Rename task `task_id` under body.date. A miss is "Failed", not an HTTP error."""
    updated = store.update_task(task_id, body.date, body.text)
    return PlainTextResponse(OK_BODY if updated else FAILED_BODY)


@router.delete("/task/{task_id}", response_class=PlainTextResponse)
def delete_task(
    task_id: int = Path(ge=0),
    store: CalendarStore = Depends(get_store),
):
    """Delete task `task_id` wherever it lives. Unknown ids are a no-op."""
    store.delete_task(task_id)
    return PlainTextResponse(OK_BODY)
