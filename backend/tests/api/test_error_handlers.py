"""Error handling at the request boundary: 500s, domain errors, logging.

Invariants:
    - An unexpected exception becomes 500 "Server Error: <description>" with CORS headers
    - The app keeps serving after a 500
    - InvalidInputError raised by the store (not the schema) is still a 400
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from calendar_api.core.calendar_store import CalendarStore
from calendar_api.core.errors import ErrorContext, InvalidInputError
from calendar_api.main import create_app


class _ExplodingStore(CalendarStore):
    """Store whose listing fails, to exercise the catch-all path."""

    def list_all(self):
        raise RuntimeError("snapshot exploded")


class _PickyStore(CalendarStore):
    """Store that rejects input the schema already accepted."""

    def create_task(self, date, text):
        raise InvalidInputError(
            "date must look like YYYY-MM-DD", "date", ErrorContext(date=date),
        )


@pytest.fixture
async def exploding_client():
    app = create_app(store=_ExplodingStore())
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


async def test_unexpected_error_is_500_with_description(exploding_client):
    res = await exploding_client.get("/api/calendar/month")
    assert res.status_code == 500
    assert res.text == "Server Error: snapshot exploded"
    assert res.headers["access-control-allow-origin"] == "*"
    assert res.headers["access-control-allow-headers"] == "Content-Type"


async def test_app_keeps_serving_after_500(exploding_client):
    await exploding_client.get("/api/calendar/month")
    res = await exploding_client.post(
        "/api/calendar/task", json={"date": "2024-01-10", "text": "still here"},
    )
    assert res.status_code == 200
    assert res.json() == {"id": 1, "text": "still here"}


async def test_unexpected_error_is_logged_with_traceback(exploding_client, caplog):
    with caplog.at_level(logging.ERROR, logger="calendar_api.api.error_handlers"):
        await exploding_client.get("/api/calendar/month")
    records = [r for r in caplog.records if r.exc_info]
    assert records
    assert "snapshot exploded" in records[0].getMessage()


async def test_store_level_invalid_input_is_400_envelope():
    app = create_app(store=_PickyStore())
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        res = await client.post(
            "/api/calendar/task", json={"date": "tomorrow", "text": "x"},
        )
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["context"]["date"] == "tomorrow"
    assert res.headers["access-control-allow-origin"] == "*"


async def test_not_found_is_logged_as_warning(client, caplog):
    with caplog.at_level(logging.WARNING, logger="calendar_api.api.error_handlers"):
        await client.get("/api/calendar/nothing")
    assert any(
        r.levelno == logging.WARNING and getattr(r, "error_code", None) == "NOT_FOUND"
        for r in caplog.records
    )
