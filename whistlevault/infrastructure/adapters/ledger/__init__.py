"""Ledger adapters."""

from whistlevault.infrastructure.adapters.ledger.http_ledger_client import (
    HttpLedgerClient,
)

__all__ = ["HttpLedgerClient"]
