"""
structlog setup for the matching API.

Swipe, match and feed events are emitted through the stdlib ``logging``
module and rendered by structlog, so third-party loggers (uvicorn,
sqlalchemy, asyncpg) end up in the same stream and format.

Rendering depends on ``settings.app_env``:
    dev        colored key/value lines for the terminal
    otherwise  one JSON object per line, ready for log shipping

Every line carries the ``request_id`` bound by the middleware in
``app.main``, so the swipe that produced a match can be traced:

    {"event": "Match 6f1c... created for family 2b9e..., caregiver 81d0..., job 4c3a...",
     "logger": "app.services.match_service", "level": "info",
     "request_id": "3f2a...", "timestamp": "2026-10-17T09:12:44.102Z"}

Degraded compatibility scores (rating lookup failed) are logged at
WARNING by ``app.services.scoring_service``.
"""

import logging
import sys

import structlog

# Loggers that only add noise once requests are flowing
QUIET_OUTSIDE_DEV = ("uvicorn.access", "sqlalchemy.engine", "asyncpg")


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(app_env: str = "dev", level: int = logging.INFO) -> None:
    """
    Route all application and library logging through structlog.

    Args:
        app_env: "dev" selects the console renderer, anything else JSON.
        level: Root log level.
    """
    shared = _shared_processors()
    renderer = (
        structlog.dev.ConsoleRenderer()
        if app_env == "dev"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    if app_env != "dev":
        for name in QUIET_OUTSIDE_DEV:
            logging.getLogger(name).setLevel(logging.WARNING)
