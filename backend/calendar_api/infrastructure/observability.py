"""Structured Logging: JSON formatter and setup for the calendar API.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (task_id, date, error_code, path, method) surfaced when present
    - setup_logging installs exactly one handler, however often it is called

Design Decisions:
    - JSONFormatter on stdlib logging, no third-party logging lib
    - setup_logging called once on startup via lifespan (and again by the CLI before uvicorn)
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_KEYS = ("task_id", "date", "error_code", "path", "method")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _CalendarHandler(logging.StreamHandler):
    """Marker type so repeated setup_logging calls replace, not stack."""


def setup_logging(level: str = "INFO", fmt: str = "text"):
    """Configure root logging for the application."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _CalendarHandler):
            logging.root.removeHandler(existing)
    handler = _CalendarHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
