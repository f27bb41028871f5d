"""Observability: logging setup for the retrier logger hierarchy."""

from .logging import ConsoleFormatter, JsonFormatter, configure_logging

__all__ = ["ConsoleFormatter", "JsonFormatter", "configure_logging"]
