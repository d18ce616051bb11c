"""Structured logging configuration with JSON output and profile context.

Uses python-json-logger for structured JSON logging so rendering runs in CI
produce machine-readable output.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from pythonjsonlogger import jsonlogger

from renovate_profiles.config import get_settings

# Context variable for the profile being built or rendered
profile_ctx: ContextVar[str | None] = ContextVar("profile", default=None)


class ProfileContextFilter(logging.Filter):
    """Log filter that adds the active profile name to all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.profile = profile_ctx.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        if getattr(record, "profile", None):
            log_record["profile"] = record.profile

        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno


@contextmanager
def profile_context(name: str) -> Iterator[None]:
    """Bind ``name`` as the active profile for log records emitted inside."""
    token = profile_ctx.set(name)
    try:
        yield
    finally:
        profile_ctx.reset(token)


def setup_logging() -> None:
    """Configure logging for the command line tooling."""
    settings = get_settings()

    # Logs go to stderr; stdout carries rendered configuration
    handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        formatter: logging.Formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    handler.addFilter(ProfileContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    logging.debug(
        "Logging configured",
        extra={"log_level": settings.log_level, "log_format": settings.log_format},
    )
