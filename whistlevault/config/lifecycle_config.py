"""Lifecycle and ledger client configuration.

This module defines configuration for status display durations, the
history view and the ledger client, with environment variable overrides.

Environment Variables (Lifecycle):
- WHISTLEVAULT_SUCCESS_DISPLAY_MS: Success notice lifetime (default: 2000)
- WHISTLEVAULT_ERROR_DISPLAY_MS: Error/cancel notice lifetime (default: 3000)
- WHISTLEVAULT_HISTORY_VIEW_LIMIT: History entries shown (default: 5)

Environment Variables (Ledger):
- WHISTLEVAULT_LEDGER_URL: Ledger gateway base URL
- WHISTLEVAULT_LEDGER_TIMEOUT: Request timeout in seconds (default: 30.0)
- WHISTLEVAULT_FINALITY_TIMEOUT: Finality wait in seconds (default: 120.0)
- WHISTLEVAULT_DEV_MODE: Use in-memory stubs (default: false)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts true/false, 1/0, yes/no (case-insensitive).
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return default


@dataclass(frozen=True)
class LifecycleConfig:
    """Configuration for status display and history.

    Attributes:
        success_display_ms: How long success notices stay visible.
        error_display_ms: How long error and cancellation notices stay visible.
        history_view_limit: Number of most recent history entries shown.
    """

    success_display_ms: int = 2000
    error_display_ms: int = 3000
    history_view_limit: int = 5

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.success_display_ms < 1:
            raise ValueError(
                f"success_display_ms must be positive, got {self.success_display_ms}"
            )
        if self.error_display_ms < 1:
            raise ValueError(
                f"error_display_ms must be positive, got {self.error_display_ms}"
            )
        if self.history_view_limit < 1:
            raise ValueError(
                f"history_view_limit must be positive, got {self.history_view_limit}"
            )

    @classmethod
    def from_environment(cls) -> "LifecycleConfig":
        """Create config from environment variables with defaults."""
        return cls(
            success_display_ms=_get_int_env("WHISTLEVAULT_SUCCESS_DISPLAY_MS", 2000),
            error_display_ms=_get_int_env("WHISTLEVAULT_ERROR_DISPLAY_MS", 3000),
            history_view_limit=_get_int_env("WHISTLEVAULT_HISTORY_VIEW_LIMIT", 5),
        )


@dataclass(frozen=True)
class LedgerClientConfig:
    """Configuration for the ledger client.

    Attributes:
        base_url: Ledger gateway base URL. Required outside dev mode.
        timeout_seconds: Per-request timeout.
        finality_timeout_seconds: Upper bound on waiting for finality.
        dev_mode: Use in-memory stubs for ledger and encryption engine.
    """

    base_url: str = ""
    timeout_seconds: float = 30.0
    finality_timeout_seconds: float = 120.0
    dev_mode: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )
        if self.finality_timeout_seconds < self.timeout_seconds:
            raise ValueError(
                f"finality_timeout_seconds ({self.finality_timeout_seconds}) must be "
                f"at least timeout_seconds ({self.timeout_seconds})"
            )
        if not self.dev_mode and not self.base_url:
            raise ValueError("base_url is required when dev_mode is disabled")

    @classmethod
    def from_environment(cls) -> "LedgerClientConfig":
        """Create config from environment variables with defaults."""
        return cls(
            base_url=os.environ.get("WHISTLEVAULT_LEDGER_URL", ""),
            timeout_seconds=_get_float_env("WHISTLEVAULT_LEDGER_TIMEOUT", 30.0),
            finality_timeout_seconds=_get_float_env(
                "WHISTLEVAULT_FINALITY_TIMEOUT", 120.0
            ),
            dev_mode=_get_bool_env("WHISTLEVAULT_DEV_MODE", False),
        )


# Default lifecycle config: 2 s success, 3 s error, last 5 history entries
DEFAULT_LIFECYCLE_CONFIG = LifecycleConfig()

# Testing config with short display durations
TEST_LIFECYCLE_CONFIG = LifecycleConfig(
    success_display_ms=100,
    error_display_ms=150,
    history_view_limit=3,
)

# Development ledger config backed by in-memory stubs
DEV_LEDGER_CLIENT_CONFIG = LedgerClientConfig(dev_mode=True)
