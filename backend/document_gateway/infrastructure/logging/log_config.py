"""Logging setup for the gateway.

The root level comes from ``LOG_LEVEL``; each category below has its own
``LOG_LEVEL_<CATEGORY>`` setting so that, for example, repository traffic
can be traced at DEBUG while boto3 and SQLAlchemy stay quiet.

Usage:
    from document_gateway.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from document_gateway.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Category → logger names. The level of each category is read from the
# Settings field ``log_level_<category>``.
_CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "http": ("httpx", "httpcore"),
    "uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "repository": (
        "document_gateway.infrastructure.repository",
        "document_gateway.application.services.document_search_service",
    ),
    "storage": ("document_gateway.infrastructure.storage", "boto3", "botocore"),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category levels; return the level set per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; tests and scripts may have none.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for category, logger_names in _CATEGORY_LOGGERS.items():
        level = _parse_level(getattr(settings, f"log_level_{category}"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[category] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, %s",
        settings.log_level,
        ", ".join(f"{c}={logging.getLevelName(level)}" for c, level in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
