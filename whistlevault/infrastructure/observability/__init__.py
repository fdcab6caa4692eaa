"""Logging setup for WhistleVault processes."""

from whistlevault.infrastructure.observability.logging import (
    REDACTED,
    configure_structlog,
    redact_confidential_values,
)

__all__: list[str] = ["REDACTED", "configure_structlog", "redact_confidential_values"]
