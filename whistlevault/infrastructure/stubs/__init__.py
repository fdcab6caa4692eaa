"""In-memory stub adapters for development and testing.

WARNING: Stubs provide no confidentiality and no durability. Production
deployments inject real adapters through the bootstrap layer.
"""

from whistlevault.infrastructure.stubs.encryption_gateway_stub import (
    EncryptionGatewayStub,
)
from whistlevault.infrastructure.stubs.ledger_client_stub import (
    DEV_CONTRACT_ADDRESS,
    DEV_SIGNER_ADDRESS,
    LedgerClientStub,
)

__all__: list[str] = [
    "DEV_CONTRACT_ADDRESS",
    "DEV_SIGNER_ADDRESS",
    "EncryptionGatewayStub",
    "LedgerClientStub",
]
