"""Adapter factories selected by LedgerClientConfig.

Development mode (WHISTLEVAULT_DEV_MODE=true) returns the in-memory stubs.
Outside development mode the ledger client talks HTTP to the configured
gateway, and the encryption gateway must be injected by the host: this
package ships no production encryption engine.
"""

from __future__ import annotations

import structlog

from whistlevault.application.ports.encryption_gateway import EncryptionGatewayProtocol
from whistlevault.application.ports.ledger_client import LedgerClientProtocol
from whistlevault.application.ports.time_authority import TimeAuthorityProtocol
from whistlevault.config.lifecycle_config import LedgerClientConfig
from whistlevault.domain.errors import GatewayNotConfiguredError
from whistlevault.infrastructure.adapters.ledger.http_ledger_client import (
    HttpLedgerClient,
)
from whistlevault.infrastructure.stubs.encryption_gateway_stub import (
    EncryptionGatewayStub,
)
from whistlevault.infrastructure.stubs.ledger_client_stub import LedgerClientStub

logger = structlog.get_logger(__name__)

DEV_MODE_WARNING = "[DEV MODE] in-memory stub in use - NOT FOR PRODUCTION"


def get_ledger_client(
    config: LedgerClientConfig,
    time_authority: TimeAuthorityProtocol | None = None,
) -> LedgerClientProtocol:
    """Get the ledger client for the configured mode."""
    if config.dev_mode:
        logger.warning(DEV_MODE_WARNING, adapter="LedgerClientStub")
        return LedgerClientStub(time_authority)
    logger.info("ledger_client_selected", base_url=config.base_url)
    return HttpLedgerClient(config)


def get_encryption_gateway(
    config: LedgerClientConfig,
    gateway: EncryptionGatewayProtocol | None = None,
) -> EncryptionGatewayProtocol:
    """Get the encryption gateway, preferring an injected one.

    Raises:
        GatewayNotConfiguredError: Outside dev mode with no gateway injected.
    """
    if gateway is not None:
        return gateway
    if config.dev_mode:
        logger.warning(DEV_MODE_WARNING, adapter="EncryptionGatewayStub")
        return EncryptionGatewayStub()
    raise GatewayNotConfiguredError()
