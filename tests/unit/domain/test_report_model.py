"""Unit tests for the report domain model."""

from datetime import datetime, timedelta, timezone

import pytest

from whistlevault.domain.errors import InvalidReportDraftError
from whistlevault.domain.models import (
    DEFAULT_RISK_LEVEL,
    Report,
    ReportCategory,
    ReportDraft,
    ReportStats,
    StatusNotice,
    StatusTag,
)
from whistlevault.domain.models.session import SessionContext


def _report(report_id: str = "report-1", **overrides) -> Report:
    fields = {
        "id": report_id,
        "title": "Procurement kickbacks",
        "description": "Inflated supplier invoices",
        "category": ReportCategory.FRAUD,
        "public_risk_level": 7,
    }
    fields.update(overrides)
    return Report(**fields)


class TestReportDraft:
    """Tests for draft validation."""

    def test_defaults_risk_level(self) -> None:
        draft = ReportDraft(
            title="Dumping",
            category=ReportCategory.ENVIRONMENT,
            value=10,
            description="Chemical waste in the river",
        )
        assert draft.risk_level == DEFAULT_RISK_LEVEL == 5

    def test_zero_value_is_valid(self) -> None:
        draft = ReportDraft("t", ReportCategory.OTHER, 0, "d", risk_level=1)
        assert draft.value == 0

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title: str) -> None:
        with pytest.raises(InvalidReportDraftError, match="title"):
            ReportDraft(title, ReportCategory.OTHER, 1, "desc")

    def test_blank_description_rejected(self) -> None:
        with pytest.raises(InvalidReportDraftError, match="description"):
            ReportDraft("title", ReportCategory.OTHER, 1, "  ")

    def test_negative_value_rejected(self) -> None:
        with pytest.raises(InvalidReportDraftError, match="non-negative"):
            ReportDraft("title", ReportCategory.OTHER, -1, "desc")

    @pytest.mark.parametrize("value", [True, 1.5, "7"])
    def test_non_integer_value_rejected(self, value: object) -> None:
        with pytest.raises(InvalidReportDraftError, match="integer"):
            ReportDraft("title", ReportCategory.OTHER, value, "desc")  # type: ignore[arg-type]

    @pytest.mark.parametrize("risk_level", [0, 11, -3])
    def test_out_of_range_risk_rejected(self, risk_level: int) -> None:
        with pytest.raises(InvalidReportDraftError, match=r"\[1, 10\]"):
            ReportDraft("title", ReportCategory.OTHER, 1, "desc", risk_level=risk_level)

    def test_invalid_draft_is_value_error(self) -> None:
        """Callers validating forms may catch plain ValueError."""
        with pytest.raises(ValueError):
            ReportDraft("", ReportCategory.OTHER, 1, "desc")


class TestReport:
    """Tests for the clear value invariant and search."""

    def test_unverified_report_has_no_clear_value(self) -> None:
        report = _report()
        assert report.is_verified is False
        assert report.clear_value is None

    def test_verified_requires_clear_value(self) -> None:
        with pytest.raises(ValueError, match="must carry a clear value"):
            _report(is_verified=True)

    def test_unverified_rejects_clear_value(self) -> None:
        with pytest.raises(ValueError, match="must not carry a clear value"):
            _report(clear_value=42)

    def test_verified_zero_is_valid(self) -> None:
        assert _report(is_verified=True, clear_value=0).clear_value == 0

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            _report("")

    @pytest.mark.parametrize("risk_level", [0, 11])
    def test_out_of_range_risk_rejected(self, risk_level: int) -> None:
        with pytest.raises(ValueError, match=r"risk level must be in \[1, 10\]"):
            _report(public_risk_level=risk_level)

    @pytest.mark.parametrize(
        ("term", "expected"),
        [
            ("", True),
            ("KICKBACK", True),
            ("supplier", True),
            ("  invoices ", True),
            ("river", False),
        ],
    )
    def test_matches(self, term: str, expected: bool) -> None:
        assert _report().matches(term) is expected


class TestReportStats:
    def test_empty(self) -> None:
        stats = ReportStats.from_reports([])
        assert stats == ReportStats(total=0, verified=0, pending=0, average_risk=0.0)

    def test_counts_and_average(self) -> None:
        stats = ReportStats.from_reports(
            [
                _report("report-1", public_risk_level=2),
                _report("report-2", public_risk_level=9, is_verified=True, clear_value=5),
                _report("report-3", public_risk_level=4),
            ]
        )
        assert stats.total == 3
        assert stats.verified == 1
        assert stats.pending == 2
        assert stats.average_risk == pytest.approx(5.0)


class TestStatusNotice:
    def test_without_expiry_never_expires(self) -> None:
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        notice = StatusNotice(StatusTag.PENDING, "working", issued)
        assert not notice.is_expired(issued + timedelta(days=365))

    def test_expires_at_boundary(self) -> None:
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        notice = StatusNotice(
            StatusTag.SUCCESS, "done", issued, expires_at=issued + timedelta(seconds=2)
        )
        assert not notice.is_expired(issued + timedelta(milliseconds=1999))
        assert notice.is_expired(issued + timedelta(seconds=2))


class TestSessionContext:
    @pytest.mark.parametrize(
        ("identity", "contract", "resolved"),
        [
            (None, None, False),
            ("0xabc", None, False),
            (None, "0xdef", False),
            ("", "0xdef", False),
            ("0xabc", "0xdef", True),
        ],
    )
    def test_is_resolved(self, identity, contract, resolved: bool) -> None:
        assert SessionContext(identity, contract).is_resolved is resolved
