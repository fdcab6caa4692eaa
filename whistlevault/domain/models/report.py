"""Confidential report domain model.

This module defines the report entity tracked by the orchestrator and the
draft a submitter fills in before a report exists on the ledger.

Invariants:
- clear_value is present if and only if is_verified is True
- is_verified is monotonic: once True it never reverts
- public_risk_level is stored in clear, in [1, 10]
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from whistlevault.domain.errors.lifecycle import InvalidReportDraftError

RISK_LEVEL_MIN: int = 1
RISK_LEVEL_MAX: int = 10
DEFAULT_RISK_LEVEL: int = 5


class ReportCategory(Enum):
    """Category of a confidential report.

    The ledger does not store a category. Reports first seen through a
    ledger listing are assigned DEFAULT_CATEGORY.
    """

    CORRUPTION = "corruption"
    FRAUD = "fraud"
    SAFETY = "safety"
    ENVIRONMENT = "environment"
    OTHER = "other"


DEFAULT_CATEGORY: ReportCategory = ReportCategory.CORRUPTION


def _check_risk_level(risk_level: object) -> None:
    if isinstance(risk_level, bool) or not isinstance(risk_level, int):
        raise InvalidReportDraftError(
            f"risk_level must be an integer, got {type(risk_level).__name__}"
        )
    if not RISK_LEVEL_MIN <= risk_level <= RISK_LEVEL_MAX:
        raise InvalidReportDraftError(
            f"risk_level must be in [{RISK_LEVEL_MIN}, {RISK_LEVEL_MAX}], "
            f"got {risk_level}"
        )


@dataclass(frozen=True)
class ReportDraft:
    """Submitter input for a new confidential report.

    Attributes:
        title: Short summary of the disclosure.
        category: Report category.
        value: The confidential integer, encrypted before it leaves the client.
        description: Free-text description, stored in clear.
        risk_level: Public risk estimate in [1, 10].
    """

    title: str
    category: ReportCategory
    value: int
    description: str
    risk_level: int = DEFAULT_RISK_LEVEL

    def __post_init__(self) -> None:
        """Validate draft fields."""
        if not self.title.strip():
            raise InvalidReportDraftError("title must not be blank")
        if not self.description.strip():
            raise InvalidReportDraftError("description must not be blank")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidReportDraftError(
                f"value must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise InvalidReportDraftError(f"value must be non-negative, got {self.value}")
        _check_risk_level(self.risk_level)


@dataclass(frozen=True, eq=True)
class Report:
    """A confidential disclosure as known to the orchestrator.

    Attributes:
        id: Globally unique report identifier, assigned at creation.
        title: Submitter-owned title.
        description: Submitter-owned description.
        category: Report category (local knowledge, not on the ledger).
        public_risk_level: Clear risk level in [1, 10].
        is_verified: Whether the value has been revealed and verified.
        clear_value: The revealed value, only when is_verified.
        encrypted_handle: Ledger reference to the encrypted value, None
            until the report has been read back from the ledger.
        public_value2: Secondary clear value stored alongside the report.
        created_at: Ledger timestamp, None until reconciled.
        creator: Submitting identity, None until reconciled.
    """

    id: str
    title: str
    description: str
    category: ReportCategory
    public_risk_level: int
    is_verified: bool = False
    clear_value: int | None = None
    encrypted_handle: str | None = None
    public_value2: int = 0
    created_at: datetime | None = None
    creator: str | None = None

    def __post_init__(self) -> None:
        """Validate the risk range and the clear value invariant."""
        if not self.id:
            raise ValueError("Report id must not be empty")
        if not RISK_LEVEL_MIN <= self.public_risk_level <= RISK_LEVEL_MAX:
            raise ValueError(
                f"Report {self.id} risk level must be in "
                f"[{RISK_LEVEL_MIN}, {RISK_LEVEL_MAX}], got {self.public_risk_level}"
            )
        if self.is_verified and self.clear_value is None:
            raise ValueError(f"Verified report {self.id} must carry a clear value")
        if not self.is_verified and self.clear_value is not None:
            raise ValueError(f"Unverified report {self.id} must not carry a clear value")

    def matches(self, term: str) -> bool:
        """Check whether title or description contains the term.

        Matching is case-insensitive; an empty term matches every report.
        """
        needle = term.strip().lower()
        if not needle:
            return True
        return needle in self.title.lower() or needle in self.description.lower()


@dataclass(frozen=True)
class ReportStats:
    """Aggregate counts over the reports currently in the store."""

    total: int
    verified: int
    pending: int
    average_risk: float

    @classmethod
    def from_reports(cls, reports: list[Report] | tuple[Report, ...]) -> ReportStats:
        total = len(reports)
        verified = sum(1 for report in reports if report.is_verified)
        average = (
            sum(report.public_risk_level for report in reports) / total if total else 0.0
        )
        return cls(
            total=total,
            verified=verified,
            pending=total - verified,
            average_risk=average,
        )
