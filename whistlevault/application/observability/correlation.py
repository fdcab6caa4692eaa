"""Correlation ids tying together the log entries of one user action.

A submission or a reveal spans several awaits: encryption, the ledger
write, finality and reconciliation. The id lives in a contextvar so every
step logs under it without threading it through call signatures.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_active_id: ContextVar[str | None] = ContextVar(
    "whistlevault_correlation_id", default=None
)


def start_correlation() -> str:
    """Open a fresh correlation scope and return its id."""
    correlation_id = uuid4().hex
    _active_id.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Return the active id, or "" outside any operation."""
    return _active_id.get() or ""


def set_correlation_id(correlation_id: str) -> None:
    _active_id.set(correlation_id or None)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor: add the active id to entries that lack one."""
    correlation_id = _active_id.get()
    if correlation_id and "correlation_id" not in event_dict:
        event_dict["correlation_id"] = correlation_id
    return event_dict
