"""Lifecycle domain exceptions.

These exceptions are raised when a confidential operation cannot start
or when the encryption engine fails while producing or revealing an
encrypted value.
"""

from whistlevault.domain.exceptions import WhistleVaultError


class NotReadyError(WhistleVaultError):
    """Raised when identity, contract target or engine session is missing.

    Raised before any external call is made, so no partial side effects
    exist when this error is observed.
    """

    code = "NOT_READY"

    def __init__(self, message: str = "Session is not ready") -> None:
        """Initialize with default message for a missing session."""
        super().__init__(message)


class GatewayInitFailureError(WhistleVaultError):
    """Raised when the encryption engine handshake failed.

    A failed handshake blocks every confidential operation, not only the
    one that observed it.
    """

    code = "GATEWAY_INIT_FAILURE"

    def __init__(
        self, message: str = "Encryption engine initialization failed"
    ) -> None:
        super().__init__(message)


class GatewayNotConfiguredError(GatewayInitFailureError):
    """Raised when production mode has no encryption gateway wired in."""

    def __init__(
        self, message: str = "Production encryption gateway not configured"
    ) -> None:
        super().__init__(message)


class EncryptionFailureError(WhistleVaultError):
    """Raised when encrypting a value or building its input proof fails."""

    code = "ENCRYPTION_FAILURE"


class DecryptionProtocolError(WhistleVaultError):
    """Raised when the multi-party decryption protocol itself fails.

    Distinct from LedgerWriteRejectedError, which covers the verification
    transaction submitted after the protocol succeeded.
    """

    code = "DECRYPTION_FAILURE"


class UserDeclinedSignatureError(WhistleVaultError):
    """Raised when the signer refused to sign a transaction.

    This is a soft cancellation, not a system failure.
    """

    code = "USER_DECLINED"

    def __init__(self, message: str = "User declined to sign the transaction") -> None:
        super().__init__(message)


class InvalidReportDraftError(WhistleVaultError, ValueError):
    """Raised when a report draft fails validation."""

    code = "INVALID_DRAFT"
