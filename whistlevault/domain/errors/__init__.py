"""Domain errors for WhistleVault.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from WhistleVaultError.
"""

from whistlevault.domain.errors.ledger import (
    AlreadyVerifiedError,
    LedgerReadFailureError,
    LedgerWriteRejectedError,
    LedgerWriteStage,
    RejectionReason,
)
from whistlevault.domain.errors.lifecycle import (
    DecryptionProtocolError,
    EncryptionFailureError,
    GatewayInitFailureError,
    GatewayNotConfiguredError,
    InvalidReportDraftError,
    NotReadyError,
    UserDeclinedSignatureError,
)
from whistlevault.domain.exceptions import WhistleVaultError

__all__: list[str] = [
    "AlreadyVerifiedError",
    "DecryptionProtocolError",
    "EncryptionFailureError",
    "GatewayInitFailureError",
    "GatewayNotConfiguredError",
    "InvalidReportDraftError",
    "LedgerReadFailureError",
    "LedgerWriteRejectedError",
    "LedgerWriteStage",
    "NotReadyError",
    "RejectionReason",
    "UserDeclinedSignatureError",
    "WhistleVaultError",
]
