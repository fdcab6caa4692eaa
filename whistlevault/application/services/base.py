"""Structured logging shared by lifecycle services.

Each service binds its class name and component once. Every public
orchestrator operation then opens a correlation scope, so the entries for
its encryption, ledger and reconciliation steps can be grouped.

Example:
    class ReportStore(LoggingMixin):
        def __init__(self) -> None:
            self._reports = {}
            self._init_logger(component="store")

        def upsert(self, report):
            self._log.debug("report_upserted", report_id=report.id)
"""

import structlog

from whistlevault.application.observability.correlation import (
    get_correlation_id,
    start_correlation,
)


class LoggingMixin:
    """Mixin giving services a bound structlog logger.

    Attributes:
        _log: Logger bound with ``service`` and ``component``.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "lifecycle") -> None:
        """Bind the service name. Call from __init__."""
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Logger for one step, carrying the active correlation id."""
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )

    def _begin_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Start a new correlation scope for a user-initiated operation.

        Args:
            operation: Operation name, e.g. "submit_report".
            **context: Extra fields bound for the whole operation.

        Returns:
            Logger bound with the operation and its fresh correlation id.
        """
        start_correlation()
        return self._log_operation(operation, **context)
