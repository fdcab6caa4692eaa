"""structlog setup for WhistleVault.

Production writes one JSON object per line; anything else gets coloured
console output. Plaintext report values never reach a sink:
``redact_confidential_values`` masks them whatever a caller bound.

Log Entry Format:
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "submission_started",
        "correlation_id": "9f1c...",
        "service": "ReportLifecycleOrchestrator",
        "operation": "submit_report",
        "report_id": "report-1767225600000"
    }
"""

import logging
import os
from typing import Any, cast

import structlog
from structlog.typing import Processor

from whistlevault.application.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"

# Event keys that may carry a report's confidential value
CONFIDENTIAL_FIELDS = frozenset(
    {"value", "clear_value", "clear_values", "plaintext", "clear_values_payload"}
)
REDACTED = "[redacted]"


def redact_confidential_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor masking confidential report values."""
    for key in CONFIDENTIAL_FIELDS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_structlog(environment: str = "production", level: str | None = None) -> None:
    """Configure structlog once at startup.

    Args:
        environment: "production" for JSON lines, anything else for console.
        level: Level name; falls back to $LOG_LEVEL, then INFO.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        cast(Processor, redact_confidential_values),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment == "production":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
