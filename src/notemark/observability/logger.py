"""Structured JSON logger for notemark.

Each log record is written as one JSON object per line, ready for a log
aggregation pipeline.

Typical structured output::

    {"ts": "2026-10-19T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "notemark.compiler", "message": "compile complete",
     "op": "compile", "blocks": 12, "warnings": 0, "duration_ms": 0.41}

Usage::

    from notemark.observability import get_logger

    log = get_logger("notemark.compiler")
    log.debug("compile complete", extra={"extra_fields": {"blocks": 12}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Keys of a LogRecord that must never be overwritten by ``extra_fields``.
_RESERVED_KEYS = frozenset({"ts", "level", "logger", "message"})


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed via ``extra={"extra_fields": {...}}`` are
    merged at the top level; they cannot shadow the guaranteed keys.
    Exception and stack information are serialised when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields:
            for key, value in extra_fields.items():
                if key not in _RESERVED_KEYS:
                    log_entry[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


# One handler per logger name, so repeated ``get_logger`` calls from
# different modules never stack handlers.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "notemark",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name, e.g. ``"notemark.compiler"``.
    level:
        Minimum log level as an ``int`` or a case-insensitive name.  Only
        applied the first time *name* is configured.  The compiler's
        per-call records are ``DEBUG``, so the default keeps them quiet.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The configured logger.  Calling again with the same *name*
        returns the same logger without adding another handler.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
