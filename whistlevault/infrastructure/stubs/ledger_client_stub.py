"""Ledger client stub implementation.

This module provides an in-memory stand-in for the report contract, for
development and testing purposes. It enforces the contract's rules:

- Report ids are unique ("Business data already exists")
- Input proofs must match the encrypted payload and the signer
- A report can be verified once ("Data already verified")
- Decryption proofs must match the stored handle and clear values

Failure injection knobs cover the collaborator failures the orchestrator
must survive: declined signatures, listing failures, per-report read
failures, liveness and verification by another party.

The stub has one fixed signer. Real writes are signed by whichever
identity the session connected, but here input proofs are checked against
``signer`` only: a payload encrypted for any other identity is rejected
with "Invalid input proof". Construct the stub with ``signer=`` set to the
session identity when testing a non-default identity.
"""

from __future__ import annotations

import asyncio
import hashlib
from dataclasses import dataclass

from whistlevault.application.ports.ledger_client import (
    LedgerClientProtocol,
    LedgerReportRecord,
    TransactionHandle,
    TransactionReceipt,
)
from whistlevault.application.ports.time_authority import TimeAuthorityProtocol
from whistlevault.domain.errors import (
    AlreadyVerifiedError,
    LedgerReadFailureError,
    LedgerWriteRejectedError,
    LedgerWriteStage,
    RejectionReason,
    UserDeclinedSignatureError,
)
from whistlevault.infrastructure.adapters.time.system_time_authority import (
    SystemTimeAuthority,
)
from whistlevault.infrastructure.stubs.confidential_codec import (
    decode_clear_values,
    decryption_proof,
    handle_from_payload,
    input_proof,
)

DEV_CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
DEV_SIGNER_ADDRESS = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"


@dataclass
class _StoredReport:
    title: str
    description: str
    encrypted_handle: str
    public_value1: int
    public_value2: int
    timestamp: int
    creator: str
    is_verified: bool = False
    clear_value: int = 0

    def to_record(self) -> LedgerReportRecord:
        return LedgerReportRecord(
            title=self.title,
            public_value1=self.public_value1,
            public_value2=self.public_value2,
            description=self.description,
            timestamp=self.timestamp,
            creator=self.creator,
            is_verified=self.is_verified,
            clear_value=self.clear_value,
            encrypted_handle=self.encrypted_handle,
        )


class LedgerClientStub(LedgerClientProtocol):
    """In-memory stub implementation of LedgerClientProtocol.

    NOT suitable for production use.

    Attributes:
        contract_address: Address the stub contract answers for.
        signer: Identity that signs every write transaction. Input proofs
            are checked against it, whatever identity the session holds.
        available: Value returned by check_liveness().
        decline_signatures: If True, every write raises UserDeclinedSignatureError.
        fail_listing: If True, list_report_ids() raises LedgerReadFailureError.
        failing_report_ids: Ids whose reads raise LedgerReadFailureError.
        calls: Names of every protocol method called, in order.
    """

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol | None = None,
        *,
        contract_address: str = DEV_CONTRACT_ADDRESS,
        signer: str = DEV_SIGNER_ADDRESS,
    ) -> None:
        self._time = time_authority or SystemTimeAuthority()
        self.contract_address = contract_address
        self.signer = signer
        self.available = True
        self.decline_signatures = False
        self.fail_listing = False
        self.failing_report_ids: set[str] = set()
        self.calls: list[str] = []
        self._reports: dict[str, _StoredReport] = {}
        self._receipts: dict[str, TransactionReceipt] = {}
        self._block_number = 0
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_report_ids(self) -> list[str]:
        self.calls.append("list_report_ids")
        if self.fail_listing:
            raise LedgerReadFailureError("Ledger listing unavailable")
        return list(self._reports)

    async def get_report(self, report_id: str) -> LedgerReportRecord:
        self.calls.append("get_report")
        return self._require(report_id).to_record()

    async def get_encrypted_handle(self, report_id: str) -> str:
        self.calls.append("get_encrypted_handle")
        return self._require(report_id).encrypted_handle

    async def check_liveness(self) -> bool:
        self.calls.append("check_liveness")
        return self.available

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

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
        self.calls.append("create_report")
        self._check_signature()
        async with self._lock:
            if report_id in self._reports:
                raise LedgerWriteRejectedError(
                    f"Business data already exists: {report_id}",
                    reason=RejectionReason.ALREADY_EXISTS,
                    stage=LedgerWriteStage.CREATE,
                )
            if proof != input_proof(encrypted_payload, self.contract_address, self.signer):
                raise LedgerWriteRejectedError(
                    "Invalid input proof",
                    reason=RejectionReason.INVALID_PROOF,
                    stage=LedgerWriteStage.CREATE,
                )
            self._reports[report_id] = _StoredReport(
                title=title,
                description=description,
                encrypted_handle=handle_from_payload(encrypted_payload),
                public_value1=risk_level,
                public_value2=initial_value2,
                timestamp=int(self._time.now().timestamp()),
                creator=self.signer,
            )
            return self._mine(f"create:{report_id}")

    async def submit_verification(
        self, report_id: str, clear_values_payload: bytes, proof: bytes
    ) -> TransactionHandle:
        self.calls.append("submit_verification")
        self._check_signature()
        async with self._lock:
            stored = self._reports.get(report_id)
            if stored is None:
                raise LedgerWriteRejectedError(
                    f"Business data does not exist: {report_id}",
                    stage=LedgerWriteStage.VERIFY,
                )
            if stored.is_verified:
                raise AlreadyVerifiedError(report_id)
            if proof != decryption_proof([stored.encrypted_handle], clear_values_payload):
                raise LedgerWriteRejectedError(
                    "Invalid decryption proof",
                    reason=RejectionReason.INVALID_PROOF,
                    stage=LedgerWriteStage.VERIFY,
                )
            (value,) = decode_clear_values(clear_values_payload)
            stored.is_verified = True
            stored.clear_value = value
            return self._mine(f"verify:{report_id}")

    async def wait_for_finality(self, tx: TransactionHandle) -> TransactionReceipt:
        self.calls.append("wait_for_finality")
        receipt = self._receipts.get(tx.tx_hash)
        if receipt is None:
            raise LedgerWriteRejectedError(f"Unknown transaction: {tx.tx_hash}")
        return receipt

    # ------------------------------------------------------------------
    # Test Control Methods
    # ------------------------------------------------------------------

    def mark_verified_externally(self, report_id: str, clear_value: int) -> None:
        """Simulate another party completing verification of a report."""
        stored = self._require(report_id)
        stored.is_verified = True
        stored.clear_value = clear_value

    def report_count(self) -> int:
        return len(self._reports)

    def clear(self) -> None:
        """Clear all stored reports and receipts (for testing)."""
        self._reports.clear()
        self._receipts.clear()
        self.calls.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, report_id: str) -> _StoredReport:
        if report_id in self.failing_report_ids:
            raise LedgerReadFailureError(
                f"Read failed for report {report_id}", report_id=report_id
            )
        stored = self._reports.get(report_id)
        if stored is None:
            raise LedgerReadFailureError(
                f"Business data does not exist: {report_id}", report_id=report_id
            )
        return stored

    def _check_signature(self) -> None:
        if self.decline_signatures:
            raise UserDeclinedSignatureError("user rejected transaction")

    def _mine(self, label: str) -> TransactionHandle:
        self._block_number += 1
        tx_hash = "0x" + hashlib.sha256(f"{label}:{self._block_number}".encode()).hexdigest()
        self._receipts[tx_hash] = TransactionReceipt(
            tx_hash=tx_hash, block_number=self._block_number
        )
        return TransactionHandle(tx_hash=tx_hash)
