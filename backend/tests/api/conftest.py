"""API test fixtures: fresh app + fresh CalendarStore + httpx test client.

Invariants:
    - Every test gets its own CalendarStore (no state shared between tests)
    - Requests go through the full ASGI stack: CORS middleware, error handlers, router
"""

import pytest
from httpx import ASGITransport, AsyncClient

from calendar_api.core.calendar_store import CalendarStore
from calendar_api.main import create_app


@pytest.fixture
def store():
    return CalendarStore()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
async def client(app):
    """Async client bound to the per-test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
