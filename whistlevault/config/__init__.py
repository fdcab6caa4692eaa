"""Configuration module for WhistleVault.

Available Configurations:
- LifecycleConfig: Status display durations and history view size
- LedgerClientConfig: Ledger gateway connection and dev mode
"""

from whistlevault.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    DEV_LEDGER_CLIENT_CONFIG,
    TEST_LIFECYCLE_CONFIG,
    LedgerClientConfig,
    LifecycleConfig,
)

__all__ = [
    "LifecycleConfig",
    "LedgerClientConfig",
    "DEFAULT_LIFECYCLE_CONFIG",
    "DEV_LEDGER_CLIENT_CONFIG",
    "TEST_LIFECYCLE_CONFIG",
]
