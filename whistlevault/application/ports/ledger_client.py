"""Ledger client port.

This module defines the abstract interface for read-only and signed-write
access to the report contract. Implementations may talk to a ledger
gateway over HTTP or simulate the contract in memory.

Developer Golden Rules:
1. FAIL LOUD - Adapters raise typed domain errors, never return sentinels
2. CODED REJECTIONS - Map ledger rejection codes to RejectionReason
3. NO CACHING - Every read reflects the ledger's current state
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TransactionHandle:
    """Reference to a submitted write transaction.

    Attributes:
        tx_hash: Ledger transaction identifier.
    """

    tx_hash: str


@dataclass(frozen=True)
class TransactionReceipt:
    """Confirmation that a transaction reached finality.

    Attributes:
        tx_hash: Ledger transaction identifier.
        block_number: Block that included the transaction.
    """

    tx_hash: str
    block_number: int


@dataclass(frozen=True)
class LedgerReportRecord:
    """Public fields of a report as stored by the contract.

    Attributes:
        title: Report title.
        public_value1: Clear risk level.
        public_value2: Secondary clear value.
        description: Report description.
        timestamp: Creation time in epoch seconds, assigned by the ledger.
        creator: Submitting identity.
        is_verified: Whether the value has been revealed.
        clear_value: Revealed value; meaningless (0) until is_verified.
        encrypted_handle: Ledger reference to the encrypted value.
    """

    title: str
    public_value1: int
    public_value2: int
    description: str
    timestamp: int
    creator: str
    is_verified: bool
    clear_value: int
    encrypted_handle: str


class LedgerClientProtocol(Protocol):
    """Protocol for report contract access.

    Read methods:
        list_report_ids, get_report, get_encrypted_handle, check_liveness

    Signed write methods:
        create_report, submit_verification, wait_for_finality
    """

    async def list_report_ids(self) -> list[str]:
        """Enumerate every report identifier known to the ledger.

        Raises:
            LedgerReadFailureError: If the listing fails.
        """
        ...

    async def get_report(self, report_id: str) -> LedgerReportRecord:
        """Fetch a report's public record.

        Raises:
            LedgerReadFailureError: If the report is missing or the read fails.
        """
        ...

    async def get_encrypted_handle(self, report_id: str) -> str:
        """Fetch the encrypted-value handle of a report.

        Raises:
            LedgerReadFailureError: If the report is missing or the read fails.
        """
        ...

    async def check_liveness(self) -> bool:
        """Return True when the contract reports itself available."""
        ...

    async def create_report(
        self,
        report_id: str,
        title: str,
        encrypted_payload: bytes,
        proof: bytes,
        risk_level: int,
        initial_value2: int,
        description: str,
    ) -> TransactionHandle:
        """Submit a new encrypted report.

        Raises:
            UserDeclinedSignatureError: If the signer refused.
            LedgerWriteRejectedError: If the ledger refused the write.
        """
        ...

    async def submit_verification(
        self, report_id: str, clear_values_payload: bytes, proof: bytes
    ) -> TransactionHandle:
        """Submit a decryption verification for a report.

        Raises:
            UserDeclinedSignatureError: If the signer refused.
            AlreadyVerifiedError: If the report was verified already.
            LedgerWriteRejectedError: If the ledger refused the write.
        """
        ...

    async def wait_for_finality(self, tx: TransactionHandle) -> TransactionReceipt:
        """Wait until a transaction is durable on the ledger.

        Raises:
            LedgerWriteRejectedError: If the transaction reverted or timed out.
        """
        ...
