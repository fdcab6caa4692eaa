"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from whistlevault.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str, level: str | None = None) -> None:
    """Configure structlog for a script or host process.

    Args:
        environment: "production" for JSON lines, anything else for console.
        level: Optional level name overriding $LOG_LEVEL.
    """
    _configure_structlog(environment=environment, level=level)


__all__ = ["configure_structlog"]
