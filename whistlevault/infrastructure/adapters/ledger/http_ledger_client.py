"""HTTP client for a ledger gateway fronting the report contract.

The gateway holds the signing key session and exposes the contract's
read and write methods as JSON endpoints:

    GET  /v1/reports                               -> {"report_ids": [...]}
    GET  /v1/reports/{id}                          -> report record
    GET  /v1/reports/{id}/encrypted-handle         -> {"handle": "0x..."}
    GET  /v1/health                                -> {"available": bool}
    POST /v1/reports                               -> {"tx_hash": "0x..."}
    POST /v1/reports/{id}/verification             -> {"tx_hash": "0x..."}
    GET  /v1/transactions/{tx_hash}/receipt?wait=1 -> receipt

Failed calls answer with ``{"error": {"code": "...", "message": "..."}}``.
Coded rejections map straight to typed errors; message inspection is the
fallback when the gateway gives no code.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from whistlevault.application.ports.ledger_client import (
    LedgerClientProtocol,
    LedgerReportRecord,
    TransactionHandle,
    TransactionReceipt,
)
from whistlevault.application.services.failure_classifier import (
    FailureStage,
    classify_failure,
)
from whistlevault.config.lifecycle_config import LedgerClientConfig
from whistlevault.domain.errors import (
    AlreadyVerifiedError,
    LedgerReadFailureError,
    LedgerWriteRejectedError,
    LedgerWriteStage,
    RejectionReason,
    UserDeclinedSignatureError,
    WhistleVaultError,
)
from whistlevault.domain.models.report import RISK_LEVEL_MAX, RISK_LEVEL_MIN

# Gateway error codes that map to a typed rejection reason
REJECTION_CODES: dict[str, RejectionReason] = {
    "ALREADY_VERIFIED": RejectionReason.ALREADY_VERIFIED,
    "ALREADY_EXISTS": RejectionReason.ALREADY_EXISTS,
    "UNAUTHORIZED": RejectionReason.UNAUTHORIZED,
    "INVALID_PROOF": RejectionReason.INVALID_PROOF,
    "USER_REJECTED": RejectionReason.USER_DECLINED,
    "ACTION_REJECTED": RejectionReason.USER_DECLINED,
}


class ErrorDetail(BaseModel):
    """Error body returned by the gateway."""

    code: str | None = None
    message: str = ""


class ErrorResponse(BaseModel):
    error: ErrorDetail


class ReportIdsResponse(BaseModel):
    report_ids: list[str]


class ReportRecordResponse(BaseModel):
    """Public report record as served by the gateway."""

    title: str
    public_value1: int = Field(..., ge=RISK_LEVEL_MIN, le=RISK_LEVEL_MAX)
    public_value2: int = Field(0, ge=0)
    description: str = ""
    timestamp: int = Field(..., ge=0)
    creator: str
    is_verified: bool
    clear_value: int = 0
    encrypted_handle: str

    def to_record(self) -> LedgerReportRecord:
        return LedgerReportRecord(**self.model_dump())


class HandleResponse(BaseModel):
    handle: str


class HealthResponse(BaseModel):
    available: bool


class TransactionResponse(BaseModel):
    tx_hash: str


class ReceiptResponse(BaseModel):
    """Transaction receipt after the gateway waited for finality."""

    tx_hash: str
    block_number: int
    status: str = "success"
    revert_code: str | None = None
    revert_reason: str = ""


def _hex(data: bytes) -> str:
    return "0x" + data.hex()


def _rejection_error(
    code: str | None,
    message: str,
    stage: LedgerWriteStage | None,
    report_id: str = "",
) -> WhistleVaultError:
    """Build the typed error for a rejected write."""
    reason = REJECTION_CODES.get(code or "")
    if reason is RejectionReason.ALREADY_VERIFIED:
        return AlreadyVerifiedError(report_id)
    if reason is RejectionReason.USER_DECLINED:
        return UserDeclinedSignatureError(message or "User declined to sign the transaction")
    if reason is not None:
        return LedgerWriteRejectedError(message, reason=reason, stage=stage)

    if stage is LedgerWriteStage.CREATE:
        return classify_failure(RuntimeError(message), FailureStage.CREATE, report_id)
    classified = classify_failure(RuntimeError(message), FailureStage.VERIFY, report_id)
    # Finality failures do not know which write they belong to
    if stage is None and type(classified) is LedgerWriteRejectedError:
        return LedgerWriteRejectedError(message)
    return classified


class HttpLedgerClient(LedgerClientProtocol):
    """Ledger client speaking to a ledger gateway over HTTP.

    Example:
        async with HttpLedgerClient(config) as ledger:
            ids = await ledger.list_report_ids()
    """

    def __init__(
        self,
        config: LedgerClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Gateway base URL and timeouts.
            transport: Optional transport override (e.g. httpx.MockTransport).
        """
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpLedgerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_report_ids(self) -> list[str]:
        data = await self._read("/v1/reports")
        return self._parse_read(ReportIdsResponse, data).report_ids

    async def get_report(self, report_id: str) -> LedgerReportRecord:
        data = await self._read(f"/v1/reports/{report_id}", report_id)
        return self._parse_read(ReportRecordResponse, data, report_id).to_record()

    async def get_encrypted_handle(self, report_id: str) -> str:
        data = await self._read(f"/v1/reports/{report_id}/encrypted-handle", report_id)
        return self._parse_read(HandleResponse, data, report_id).handle

    async def check_liveness(self) -> bool:
        data = await self._read("/v1/health")
        return self._parse_read(HealthResponse, data).available

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
        data = await self._write(
            "/v1/reports",
            {
                "report_id": report_id,
                "title": title,
                "encrypted_payload": _hex(encrypted_payload),
                "proof": _hex(proof),
                "public_value1": risk_level,
                "public_value2": initial_value2,
                "description": description,
            },
            LedgerWriteStage.CREATE,
            report_id,
        )
        return TransactionHandle(tx_hash=self._parse_write(data).tx_hash)

    async def submit_verification(
        self, report_id: str, clear_values_payload: bytes, proof: bytes
    ) -> TransactionHandle:
        data = await self._write(
            f"/v1/reports/{report_id}/verification",
            {
                "clear_values_payload": _hex(clear_values_payload),
                "decryption_proof": _hex(proof),
            },
            LedgerWriteStage.VERIFY,
            report_id,
        )
        return TransactionHandle(tx_hash=self._parse_write(data).tx_hash)

    async def wait_for_finality(self, tx: TransactionHandle) -> TransactionReceipt:
        try:
            response = await self._client.get(
                f"/v1/transactions/{tx.tx_hash}/receipt",
                params={"wait": 1},
                timeout=self._config.finality_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise LedgerWriteRejectedError(
                f"Finality wait failed for {tx.tx_hash}: {exc}"
            ) from exc
        if response.is_error:
            detail = self._error_detail(response)
            raise _rejection_error(detail.code, detail.message, None)

        try:
            receipt = ReceiptResponse.model_validate(response.json())
        except (ValidationError, ValueError) as exc:
            raise LedgerWriteRejectedError(f"Malformed receipt for {tx.tx_hash}") from exc
        if receipt.status != "success":
            message = receipt.revert_reason or f"Transaction {tx.tx_hash} reverted"
            raise _rejection_error(receipt.revert_code, message, None)
        return TransactionReceipt(tx_hash=receipt.tx_hash, block_number=receipt.block_number)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _read(self, path: str, report_id: str = "") -> Any:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            raise LedgerReadFailureError(f"GET {path} failed: {exc}", report_id) from exc
        if response.is_error:
            detail = self._error_detail(response)
            raise LedgerReadFailureError(
                detail.message or f"GET {path} returned {response.status_code}",
                report_id,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise LedgerReadFailureError(f"GET {path} returned invalid JSON", report_id) from exc

    async def _write(
        self,
        path: str,
        body: dict[str, Any],
        stage: LedgerWriteStage,
        report_id: str,
    ) -> Any:
        try:
            response = await self._client.post(path, json=body)
        except httpx.HTTPError as exc:
            raise LedgerWriteRejectedError(
                f"POST {path} failed: {exc}", stage=stage
            ) from exc
        if response.is_error:
            detail = self._error_detail(response)
            raise _rejection_error(
                detail.code,
                detail.message or f"POST {path} returned {response.status_code}",
                stage,
                report_id,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise LedgerWriteRejectedError(
                f"POST {path} returned invalid JSON", stage=stage
            ) from exc

    @staticmethod
    def _error_detail(response: httpx.Response) -> ErrorDetail:
        try:
            return ErrorResponse.model_validate(response.json()).error
        except (ValidationError, ValueError):
            return ErrorDetail(message=response.text)

    @staticmethod
    def _parse_read(model: type[Any], data: Any, report_id: str = "") -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise LedgerReadFailureError(
                f"Malformed ledger response: {exc.error_count()} validation error(s)",
                report_id,
            ) from exc

    @staticmethod
    def _parse_write(data: Any) -> TransactionResponse:
        try:
            return TransactionResponse.model_validate(data)
        except ValidationError as exc:
            raise LedgerWriteRejectedError("Malformed transaction response") from exc
