"""Application ports for WhistleVault.

Ports are the interfaces the orchestrator depends on. Adapters in the
infrastructure layer implement them.
"""

from whistlevault.application.ports.encryption_gateway import (
    DecryptionResult,
    EncryptedInput,
    EncryptionGatewayProtocol,
    ProofReadyCallback,
)
from whistlevault.application.ports.ledger_client import (
    LedgerClientProtocol,
    LedgerReportRecord,
    TransactionHandle,
    TransactionReceipt,
)
from whistlevault.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "DecryptionResult",
    "EncryptedInput",
    "EncryptionGatewayProtocol",
    "LedgerClientProtocol",
    "LedgerReportRecord",
    "ProofReadyCallback",
    "TimeAuthorityProtocol",
    "TransactionHandle",
    "TransactionReceipt",
]
