"""Process-wide logging setup shared by the HTTP server and the migration CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Per-request access lines duplicate the latency middleware; pool chatter is only useful when
# debugging connection issues.
_QUIET_LOGGERS = ("uvicorn.access", "psycopg.pool")


def configure_logging(level: str = "INFO") -> None:
    """Install a single stderr handler at `level` (usually `Settings.log_level`)."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
