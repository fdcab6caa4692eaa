"""Report Store - session-scoped cache of every report known to the orchestrator.

The store is the single source of truth the UI renders from. It is
mutated only by the orchestrator; readers receive immutable snapshots.

Upsert Field Groups:
- Descriptive (title, description, category, risk level, value2): last writer wins
- Ledger-assigned (encrypted_handle, created_at, creator): None never erases
- Verification (is_verified, clear_value): never downgraded

Replace Semantics:
- replace_all() rebuilds the mapping wholesale from a ledger listing
- A category known locally survives replace_all(), since the ledger does
  not store categories
- A verified entry is never replaced by a stale unverified read
"""

from __future__ import annotations

from dataclasses import replace

from whistlevault.application.services.base import LoggingMixin
from whistlevault.domain.models.report import DEFAULT_CATEGORY, Report, ReportStats


class ReportStore(LoggingMixin):
    """In-memory mapping from report id to Report.

    Insertion order determines default display order. Every mutation
    swaps in a new dict, so a snapshot taken between two awaits is never
    torn.

    Attributes:
        _reports: Dictionary mapping report.id to Report.
    """

    def __init__(self) -> None:
        self._reports: dict[str, Report] = {}
        self._init_logger(component="store")

    def get(self, report_id: str) -> Report | None:
        return self._reports.get(report_id)

    def __contains__(self, report_id: object) -> bool:
        return report_id in self._reports

    def __len__(self) -> int:
        return len(self._reports)

    def snapshot(self) -> tuple[Report, ...]:
        """Return a point-in-time view of all reports in display order."""
        return tuple(self._reports.values())

    def search(self, term: str) -> tuple[Report, ...]:
        """Return reports whose title or description contains the term."""
        return tuple(report for report in self._reports.values() if report.matches(term))

    def stats(self) -> ReportStats:
        return ReportStats.from_reports(self.snapshot())

    def replace_all(self, reports: list[Report]) -> None:
        """Replace the whole store with a fresh ledger listing.

        Args:
            reports: Reports mapped from the ledger, in display order.
        """
        rebuilt: dict[str, Report] = {}
        for report in reports:
            known = self._reports.get(report.id)
            if known is not None:
                report = self._carry_local_state(known, report)
            rebuilt[report.id] = report
        self._reports = rebuilt
        self._log.debug("store_replaced", report_count=len(rebuilt))

    def upsert(self, report: Report) -> Report:
        """Insert or merge a single report keyed by id.

        Args:
            report: The incoming report state.

        Returns:
            The report as stored after merging.
        """
        existing = self._reports.get(report.id)
        merged = report if existing is None else self._merge(existing, report)
        updated = dict(self._reports)
        updated[report.id] = merged
        self._reports = updated
        self._log.debug(
            "store_upserted",
            report_id=report.id,
            is_verified=merged.is_verified,
            inserted=existing is None,
        )
        return merged

    @staticmethod
    def _carry_local_state(known: Report, listed: Report) -> Report:
        category = listed.category
        if category == DEFAULT_CATEGORY and known.category != DEFAULT_CATEGORY:
            category = known.category
        if known.is_verified and not listed.is_verified:
            return replace(
                listed,
                category=category,
                is_verified=True,
                clear_value=known.clear_value,
            )
        return replace(listed, category=category)

    @staticmethod
    def _merge(existing: Report, incoming: Report) -> Report:
        if existing.is_verified and not incoming.is_verified:
            is_verified, clear_value = existing.is_verified, existing.clear_value
        else:
            is_verified, clear_value = incoming.is_verified, incoming.clear_value
        return replace(
            incoming,
            is_verified=is_verified,
            clear_value=clear_value,
            encrypted_handle=incoming.encrypted_handle or existing.encrypted_handle,
            created_at=incoming.created_at or existing.created_at,
            creator=incoming.creator or existing.creator,
        )
