"""Command-line entry point: `python -m calendar_api [--local-port N] [--gui-port N]`.

Invariants:
    - Flags override environment settings; unset flags keep the environment value
    - --help prints usage and exits without starting the server
"""

import argparse
import logging

import uvicorn

from calendar_api.config import Settings, get_settings
from calendar_api.infrastructure.observability import setup_logging
from calendar_api.main import create_app

logger = logging.getLogger(__name__)


def _port(value: str) -> int:
    port = int(value)
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-api",
        description="In-memory calendar task API.",
    )
    parser.add_argument(
        "-l", "--local-port", type=_port, default=None,
        help="Set local server port (default 8080)",
    )
    parser.add_argument(
        "-g", "--gui-port", type=_port, default=None,
        help="Set GUI server port (informational, default 3000)",
    )
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--log-level", default=None, help="Root log level")
    return parser


def resolve_settings(argv: list[str] | None = None) -> Settings:
    """Environment settings with command-line overrides applied."""
    args = build_parser().parse_args(argv)
    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None
    }
    return get_settings().model_copy(update=overrides)


def main(argv: list[str] | None = None) -> None:
    settings = resolve_settings(argv)
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server running on http://localhost:{settings.local_port}")
    logger.info(f"GUI server expected on port {settings.gui_port}")
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.local_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
