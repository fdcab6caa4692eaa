"""Observability helpers shared by application services."""

from whistlevault.application.observability.correlation import (
    correlation_id_processor,
    get_correlation_id,
    set_correlation_id,
    start_correlation,
)

__all__ = [
    "correlation_id_processor",
    "get_correlation_id",
    "set_correlation_id",
    "start_correlation",
]
