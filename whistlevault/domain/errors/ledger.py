"""Ledger-related domain exceptions.

Write rejections carry a typed reason so the "already verified" case can
be recognised without inspecting message text whenever the ledger
reports a coded reason.
"""

from __future__ import annotations

from enum import Enum

from whistlevault.domain.exceptions import WhistleVaultError


class RejectionReason(Enum):
    """Why the ledger refused a write transaction."""

    ALREADY_VERIFIED = "already_verified"
    ALREADY_EXISTS = "already_exists"
    UNAUTHORIZED = "unauthorized"
    INVALID_PROOF = "invalid_proof"
    USER_DECLINED = "user_declined"
    UNKNOWN = "unknown"


class LedgerWriteStage(Enum):
    """Which write operation was rejected."""

    CREATE = "create"
    VERIFY = "verify"


class LedgerWriteRejectedError(WhistleVaultError):
    """Raised when a signed write transaction is rejected or fails finality.

    Attributes:
        reason: Typed rejection reason reported by the ledger.
        stage: The write operation that was rejected, when known.
    """

    code = "LEDGER_WRITE_REJECTED"

    def __init__(
        self,
        message: str = "Ledger rejected the transaction",
        reason: RejectionReason = RejectionReason.UNKNOWN,
        stage: LedgerWriteStage | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.stage = stage


class AlreadyVerifiedError(LedgerWriteRejectedError):
    """Raised when a verification is submitted for an already verified report.

    The orchestrator treats this as the success path: the clear value is
    already public and only needs to be read back.
    """

    def __init__(self, report_id: str = "", message: str = "Data already verified") -> None:
        if report_id:
            message = f"{message}: {report_id}"
        super().__init__(
            message,
            reason=RejectionReason.ALREADY_VERIFIED,
            stage=LedgerWriteStage.VERIFY,
        )
        self.report_id = report_id


class LedgerReadFailureError(WhistleVaultError):
    """Raised when a read-only ledger call fails.

    Attributes:
        report_id: The report being read, empty for listing calls.
    """

    code = "LEDGER_READ_FAILURE"

    def __init__(self, message: str = "Ledger read failed", report_id: str = "") -> None:
        super().__init__(message)
        self.report_id = report_id
