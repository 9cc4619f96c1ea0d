"""Root conftest: shared test configuration."""

import pytest

from calendar_api.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """No test sees a developer's CALENDAR_* environment or a cached Settings."""
    for key in (
        "CALENDAR_HOST", "CALENDAR_LOCAL_PORT", "CALENDAR_GUI_PORT",
        "CALENDAR_LOG_LEVEL", "CALENDAR_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
