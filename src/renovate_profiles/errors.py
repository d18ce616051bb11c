"""Exceptions raised while building, loading or rendering bot configuration."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class BotConfigError(Exception):
    """Base exception for bot configuration errors."""

    def __init__(self, message: str, *, source: str | None = None):
        super().__init__(message)
        self.source = source


class UnknownProfileError(BotConfigError):
    """Raised when a profile name is not registered."""

    def __init__(self, name: str, available: list[str]):
        super().__init__(f"Unknown profile {name!r}; available: {', '.join(available)}")
        self.name = name
        self.available = available


class UnsupportedFormatError(BotConfigError):
    """Raised for serialization formats or file suffixes we cannot handle."""

    pass


class ConfigValidationError(BotConfigError):
    """Raised when configuration data does not match the bot schema."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        source: str | None = None,
    ):
        super().__init__(message, source=source)
        self.errors = errors or []

    @classmethod
    def from_validation_error(
        cls, exc: ValidationError, *, source: str | None = None
    ) -> ConfigValidationError:
        errors = [
            {
                "loc": ".".join(str(part) for part in err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        where = f" in {source}" if source else ""
        return cls(
            f"Invalid bot configuration{where}: {exc.error_count()} error(s)",
            errors=errors,
            source=source,
        )
