"""Domain models for WhistleVault."""

from whistlevault.domain.models.history import HistoryEntry
from whistlevault.domain.models.report import (
    DEFAULT_CATEGORY,
    DEFAULT_RISK_LEVEL,
    RISK_LEVEL_MAX,
    RISK_LEVEL_MIN,
    Report,
    ReportCategory,
    ReportDraft,
    ReportStats,
)
from whistlevault.domain.models.session import SessionContext
from whistlevault.domain.models.status import StatusNotice, StatusTag

__all__: list[str] = [
    "DEFAULT_CATEGORY",
    "DEFAULT_RISK_LEVEL",
    "HistoryEntry",
    "RISK_LEVEL_MAX",
    "RISK_LEVEL_MIN",
    "Report",
    "ReportCategory",
    "ReportDraft",
    "ReportStats",
    "SessionContext",
    "StatusNotice",
    "StatusTag",
]
