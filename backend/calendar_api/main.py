"""Calendar API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Exactly one CalendarStore per app, created here and exposed as app.state.store
    - Global error handlers + CORS middleware registered before the app serves anything

Design Decisions:
    - create_app() factory: tests get a fresh app and a fresh store per test
    - Module-level `app` for `uvicorn calendar_api.main:app`
    - Lifespan over @app.on_event
    - redirect_slashes=False: a trailing-slash path is an unknown route (404), not a 307
    - The "Server running on" line is logged by __main__, which knows the bound port
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from calendar_api.api.cors import register_cors
from calendar_api.api.error_handlers import register_error_handlers
from calendar_api.api.routes import calendar
from calendar_api.config import Settings, get_settings
from calendar_api.core.calendar_store import CalendarStore
from calendar_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    store: CalendarStore | None = None, settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI app around `store` (a new empty one by default)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info("Calendar API started")
        yield
        logger.info(
            f"Calendar API shutting down ({app.state.store.task_count()} tasks discarded)",
        )

    app = FastAPI(
        title="Calendar API", version="1.0.0", lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.store = store if store is not None else CalendarStore()
    app.state.settings = settings

    register_error_handlers(app)
    register_cors(app)

    app.include_router(calendar.router)
    return app


app = create_app()
