"""Logging setup for the retrier logger hierarchy.

Library modules log through stdlib loggers named ``retrier.<area>`` and never
configure handlers themselves. Applications that want the output call
configure_logging() once at startup:

    >>> from retrier.runtime.observability import configure_logging
    >>> configure_logging(format="console", level="DEBUG")  # or "json" for production

Defaults come from LoggingSettings (RETRIER_LOG_LEVEL, RETRIER_LOG_FORMAT).
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

import orjson

from retrier.foundation.config import get_settings

ROOT = "retrier"

# LogRecord attributes that are not user-supplied extras
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class ConsoleFormatter(logging.Formatter):
    """Human-readable output: ``time [level] logger: message key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, UTC).strftime("%H:%M:%S.%f")[:-3]
        extras = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        line = f"{ts} [{record.levelname.lower()}] {record.name}: {record.getMessage()}"
        if extras:
            line = f"{line} {extras}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation (Elasticsearch, Loki, Datadog, etc.)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=repr, option=orjson.OPT_NON_STR_KEYS).decode()


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
) -> logging.Handler:
    """Attach a single handler to the retrier logger. Format: "console" (human) or "json" (machine).

    Calling it again replaces the previously installed handler.
    """
    settings = get_settings()
    format = format or settings.logging.format
    level = (level or settings.effective_log_level).upper()
    match format:
        case "console": formatter: logging.Formatter = ConsoleFormatter()
        case "json": formatter = JsonFormatter()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console' or 'json'")

    logger = logging.getLogger(ROOT)
    for old in [h for h in logger.handlers if getattr(h, "_retrier", False)]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)
    handler._retrier = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.WARNING))
    return handler