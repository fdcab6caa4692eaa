"""Failure classification for untyped collaborator exceptions.

Adapters raise typed domain errors whenever the ledger or the signer
report a coded reason. Exceptions that reach the orchestrator without a
type are classified here by message inspection, as a last resort.

Message Markers:
- Signer refusal: "user rejected", "user denied", "ACTION_REJECTED"
- Verification race: "already verified"

The decryption stage wraps the verification continuation, so both marker
sets apply to it as well.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from whistlevault.domain.errors import (
    AlreadyVerifiedError,
    DecryptionProtocolError,
    EncryptionFailureError,
    LedgerReadFailureError,
    LedgerWriteRejectedError,
    LedgerWriteStage,
    UserDeclinedSignatureError,
    WhistleVaultError,
)

USER_DECLINED_MARKERS: tuple[str, ...] = (
    "user rejected",
    "user denied",
    "action_rejected",
)
ALREADY_VERIFIED_MARKERS: tuple[str, ...] = ("already verified",)


class FailureStage(Enum):
    """The orchestrator step an exception escaped from."""

    ENCRYPT = "encrypt"
    CREATE = "create"
    VERIFY = "verify"
    DECRYPT = "decrypt"
    READ = "read"


_SIGNED_STAGES = frozenset({FailureStage.CREATE, FailureStage.VERIFY, FailureStage.DECRYPT})
_VERIFICATION_STAGES = frozenset({FailureStage.VERIFY, FailureStage.DECRYPT})


def _has_marker(message: str, markers: tuple[str, ...]) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


def classify_failure(
    exc: Exception, stage: FailureStage, report_id: str = ""
) -> WhistleVaultError:
    """Convert an exception into a domain error.

    Domain errors are returned unchanged.

    Args:
        exc: The exception raised by a collaborator.
        stage: The step that raised it.
        report_id: The report involved, when known.

    Returns:
        The matching WhistleVaultError.
    """
    if isinstance(exc, WhistleVaultError):
        return exc

    message = str(exc) or exc.__class__.__name__

    if stage in _SIGNED_STAGES and _has_marker(message, USER_DECLINED_MARKERS):
        return UserDeclinedSignatureError(message)
    if stage in _VERIFICATION_STAGES and _has_marker(message, ALREADY_VERIFIED_MARKERS):
        return AlreadyVerifiedError(report_id)

    if stage is FailureStage.CREATE:
        return LedgerWriteRejectedError(message, stage=LedgerWriteStage.CREATE)
    if stage is FailureStage.VERIFY:
        return LedgerWriteRejectedError(message, stage=LedgerWriteStage.VERIFY)
    if stage is FailureStage.ENCRYPT:
        return EncryptionFailureError(message)
    if stage is FailureStage.DECRYPT:
        return DecryptionProtocolError(message)
    return LedgerReadFailureError(message, report_id=report_id)


@contextmanager
def translate_failures(stage: FailureStage, report_id: str = "") -> Iterator[None]:
    """Re-raise untyped exceptions from the wrapped block as domain errors.

    Example:
        with translate_failures(FailureStage.READ, report_id):
            record = await ledger.get_report(report_id)
    """
    try:
        yield
    except WhistleVaultError:
        raise
    except Exception as exc:
        raise classify_failure(exc, stage, report_id) from exc
