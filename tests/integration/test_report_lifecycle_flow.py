"""Integration tests for the full report lifecycle through bootstrap wiring.

Runs against the development stubs selected by DEV_LEDGER_CLIENT_CONFIG,
with a FakeTimeAuthority driving status expiry and history timestamps.
"""

import pytest

from tests.helpers import FakeTimeAuthority
from whistlevault.bootstrap.orchestrator import (
    LifecycleComponents,
    create_report_orchestrator,
)
from whistlevault.config import DEV_LEDGER_CLIENT_CONFIG, TEST_LIFECYCLE_CONFIG
from whistlevault.domain.models import (
    ReportCategory,
    ReportDraft,
    SessionContext,
    StatusTag,
)
from whistlevault.infrastructure.stubs import DEV_CONTRACT_ADDRESS, DEV_SIGNER_ADDRESS

SESSION = SessionContext(identity=DEV_SIGNER_ADDRESS, contract_address=DEV_CONTRACT_ADDRESS)


def _draft(title: str, value: int, risk_level: int) -> ReportDraft:
    return ReportDraft(
        title=title,
        category=ReportCategory.SAFETY,
        value=value,
        description="Inspection records falsified",
        risk_level=risk_level,
    )


@pytest.fixture
def clock() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def components(clock: FakeTimeAuthority) -> LifecycleComponents:
    return create_report_orchestrator(
        DEV_LEDGER_CLIENT_CONFIG, TEST_LIFECYCLE_CONFIG, time_authority=clock
    )


class TestReportLifecycleFlow:
    """Submit, reveal and reveal again through the wired components."""

    @pytest.mark.asyncio
    async def test_full_flow(
        self, components: LifecycleComponents, clock: FakeTimeAuthority
    ) -> None:
        orchestrator = components.orchestrator

        assert await orchestrator.check_availability() is True
        assert components.status_channel.current().message == "System status: operational"

        assert await components.gate.on_identity_available(SESSION) is True
        assert components.gate.is_ready

        first = await orchestrator.submit_report(SESSION, _draft("Bridge cracks", 900, 9))
        clock.advance(seconds=1)
        second = await orchestrator.submit_report(SESSION, _draft("Gas leak", 40, 3))
        assert first is not None and second is not None
        assert first.id != second.id
        assert first.category is ReportCategory.SAFETY
        assert not first.is_verified and first.clear_value is None

        stats = components.store.stats()
        assert (stats.total, stats.verified, stats.pending) == (2, 0, 2)
        assert stats.average_risk == pytest.approx(6.0)

        assert await orchestrator.verify_and_decrypt(SESSION, first.id) == 900
        notice = components.status_channel.current()
        assert notice.tag is StatusTag.SUCCESS
        assert notice.message == "Evidence decrypted and verified"

        revealed = components.store.get(first.id)
        assert revealed.is_verified and revealed.clear_value == 900
        assert revealed.category is ReportCategory.SAFETY

        assert await orchestrator.verify_and_decrypt(SESSION, first.id) == 900
        assert (
            components.status_channel.current().message
            == "Data already verified on the ledger"
        )

        stats = components.store.stats()
        assert (stats.total, stats.verified, stats.pending) == (2, 1, 1)

        actions = [entry.action for entry in components.history.entries()]
        assert actions == [
            "Created report: Bridge cracks",
            "Created report: Gas leak",
            f"Decrypted report evidence: {first.id}",
        ]

    @pytest.mark.asyncio
    async def test_verification_race_resolves_as_success(
        self, components: LifecycleComponents
    ) -> None:
        await components.gate.on_identity_available(SESSION)
        report = await components.orchestrator.submit_report(
            SESSION, _draft("Spill", 77, 6)
        )
        assert report is not None

        async def verify_elsewhere() -> None:
            components.ledger.mark_verified_externally(report.id, 77)

        components.gateway.before_proof_ready = verify_elsewhere

        assert await components.orchestrator.verify_and_decrypt(SESSION, report.id) == 77
        assert components.status_channel.current().tag is StatusTag.SUCCESS
        assert components.store.get(report.id).is_verified

    @pytest.mark.asyncio
    async def test_status_expires_and_refresh_reloads(
        self, components: LifecycleComponents, clock: FakeTimeAuthority
    ) -> None:
        await components.gate.on_identity_available(SESSION)
        await components.orchestrator.submit_report(SESSION, _draft("Leak", 5, 2))

        clock.advance_ms(TEST_LIFECYCLE_CONFIG.success_display_ms)
        assert components.status_channel.current() is None

        components.store.replace_all([])
        assert await components.orchestrator.refresh(SESSION) is True
        assert len(components.store) == 1
        assert components.status_channel.current().message == "Loaded 1 reports"

    @pytest.mark.asyncio
    async def test_submit_before_handshake_fails_without_ledger_write(
        self, components: LifecycleComponents
    ) -> None:
        report = await components.orchestrator.submit_report(
            SESSION, _draft("Too early", 1, 1)
        )

        assert report is None
        assert components.status_channel.current().tag is StatusTag.ERROR
        assert components.ledger.report_count() == 0
        assert len(components.history) == 0
