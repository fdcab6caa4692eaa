"""Application services for WhistleVault.

The orchestrator is the only writer of the store, the status channel and
the history log; the UI reads them.
"""

from whistlevault.application.services.encryption_lifecycle_gate import (
    EncryptionLifecycleGate,
)
from whistlevault.application.services.history_log import HistoryLog
from whistlevault.application.services.report_id_generator import ReportIdGenerator
from whistlevault.application.services.report_lifecycle_orchestrator import (
    ReportLifecycleOrchestrator,
)
from whistlevault.application.services.report_store import ReportStore
from whistlevault.application.services.status_channel import StatusChannel

__all__ = [
    "EncryptionLifecycleGate",
    "HistoryLog",
    "ReportIdGenerator",
    "ReportLifecycleOrchestrator",
    "ReportStore",
    "StatusChannel",
]
