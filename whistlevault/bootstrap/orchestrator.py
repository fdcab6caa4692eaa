"""Bootstrap wiring for the report lifecycle orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from whistlevault.application.ports.encryption_gateway import EncryptionGatewayProtocol
from whistlevault.application.ports.ledger_client import LedgerClientProtocol
from whistlevault.application.ports.time_authority import TimeAuthorityProtocol
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
from whistlevault.config.lifecycle_config import LedgerClientConfig, LifecycleConfig
from whistlevault.infrastructure.adapters.factory import (
    get_encryption_gateway,
    get_ledger_client,
)
from whistlevault.infrastructure.adapters.time.system_time_authority import (
    SystemTimeAuthority,
)


@dataclass(frozen=True)
class LifecycleComponents:
    """Everything a UI session needs: the orchestrator and what it writes."""

    orchestrator: ReportLifecycleOrchestrator
    store: ReportStore
    status_channel: StatusChannel
    history: HistoryLog
    gate: EncryptionLifecycleGate
    ledger: LedgerClientProtocol
    gateway: EncryptionGatewayProtocol


def create_report_orchestrator(
    ledger_config: LedgerClientConfig | None = None,
    lifecycle_config: LifecycleConfig | None = None,
    *,
    ledger: LedgerClientProtocol | None = None,
    gateway: EncryptionGatewayProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> LifecycleComponents:
    """Wire one orchestrator with its session-scoped collaborators.

    Configuration is read from the environment when not given. Injected
    adapters take precedence over the configured ones.

    Raises:
        GatewayNotConfiguredError: Outside dev mode with no gateway injected.
    """
    ledger_config = ledger_config or LedgerClientConfig.from_environment()
    lifecycle_config = lifecycle_config or LifecycleConfig.from_environment()
    time_authority = time_authority or SystemTimeAuthority()

    ledger = ledger or get_ledger_client(ledger_config, time_authority)
    gateway = get_encryption_gateway(ledger_config, gateway)

    store = ReportStore()
    status_channel = StatusChannel(time_authority, lifecycle_config)
    history = HistoryLog(time_authority, lifecycle_config)
    gate = EncryptionLifecycleGate(gateway, status_channel)
    orchestrator = ReportLifecycleOrchestrator(
        ledger=ledger,
        gateway=gateway,
        store=store,
        status_channel=status_channel,
        history=history,
        gate=gate,
        id_generator=ReportIdGenerator(time_authority),
    )
    return LifecycleComponents(
        orchestrator=orchestrator,
        store=store,
        status_channel=status_channel,
        history=history,
        gate=gate,
        ledger=ledger,
        gateway=gateway,
    )


__all__ = ["LifecycleComponents", "create_report_orchestrator"]
