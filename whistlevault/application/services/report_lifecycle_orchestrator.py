"""Report Lifecycle Orchestrator.

This service sequences the lifecycle of a confidential report:
encrypting a submitted value, submitting it to the ledger with its
correctness proof, revealing it through multi-party decryption, and
reconciling the local Report Store with the ledger after each step.

Operating Constraints:
- The ledger is authoritative for is_verified and clear_value; the store
  flag only flips from a confirmed ledger read
- The decryption protocol is never invoked for an already verified report
- An "already verified" rejection during verification is a success path
- A failed operation leaves the store unchanged and sets exactly one
  terminal status notice

Developer Golden Rules:
1. READY CHECK FIRST - Session and engine checked before any external call
2. NOTHING SPECULATIVE - No store write before ledger finality
3. LOG EVERYTHING - All steps have structured logging
4. NEVER RAISE - Public operations convert failures to status + None
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from datetime import datetime, timezone

import structlog

from whistlevault.application.ports.encryption_gateway import (
    DecryptionResult,
    EncryptedInput,
    EncryptionGatewayProtocol,
)
from whistlevault.application.ports.ledger_client import (
    LedgerClientProtocol,
    LedgerReportRecord,
    TransactionHandle,
    TransactionReceipt,
)
from whistlevault.application.services.base import LoggingMixin
from whistlevault.application.services.encryption_lifecycle_gate import (
    EncryptionLifecycleGate,
)
from whistlevault.application.services.failure_classifier import (
    FailureStage,
    translate_failures,
)
from whistlevault.application.services.history_log import HistoryLog
from whistlevault.application.services.report_id_generator import ReportIdGenerator
from whistlevault.application.services.report_store import ReportStore
from whistlevault.application.services.status_channel import StatusChannel
from whistlevault.domain.errors import (
    AlreadyVerifiedError,
    DecryptionProtocolError,
    LedgerReadFailureError,
    NotReadyError,
    UserDeclinedSignatureError,
    WhistleVaultError,
)
from whistlevault.domain.models.report import DEFAULT_CATEGORY, Report, ReportDraft
from whistlevault.domain.models.session import SessionContext

# Secondary public value written with every new report
INITIAL_PUBLIC_VALUE2 = 0


class ReportLifecycleOrchestrator(LoggingMixin):
    """Coordinator between the UI, the encryption gateway and the ledger.

    Holds no ledger or encryption state of its own. Public operations:
    1. submit_report - encrypt, submit, await finality, upsert, reconcile
    2. verify_and_decrypt - check ledger state, decrypt, verify, reconcile
    3. refresh - rebuild the store from the ledger listing
    4. check_availability - report contract liveness

    Attributes:
        _ledger: Ledger client for reads and signed writes.
        _gateway: Encryption gateway for encrypt and decrypt-and-prove.
        _store: Report store, mutated only here.
        _status: Status channel, written only here.
        _history: History log of completed actions.
        _gate: Encryption engine lifecycle gate.
        _ids: Report id generator.
        _verifications: In-flight verify_and_decrypt runs by report id.
    """

    def __init__(
        self,
        ledger: LedgerClientProtocol,
        gateway: EncryptionGatewayProtocol,
        store: ReportStore,
        status_channel: StatusChannel,
        history: HistoryLog,
        gate: EncryptionLifecycleGate,
        id_generator: ReportIdGenerator,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            ledger: Ledger client adapter.
            gateway: Encryption gateway adapter.
            store: Report store the UI renders from.
            status_channel: Channel for user-visible notices.
            history: Log of completed user actions.
            gate: Gate guarding the encryption engine handshake.
            id_generator: Source of locally assigned report ids.
        """
        self._ledger = ledger
        self._gateway = gateway
        self._store = store
        self._status = status_channel
        self._history = history
        self._gate = gate
        self._ids = id_generator
        self._verifications: dict[str, asyncio.Task[int | None]] = {}
        self._init_logger(component="lifecycle")

    # ------------------------------------------------------------------
    # submitReport
    # ------------------------------------------------------------------

    async def submit_report(
        self, session: SessionContext, draft: ReportDraft
    ) -> Report | None:
        """Encrypt and submit a new confidential report.

        Steps:
        1. Check session and engine readiness (no external call on failure)
        2. Generate the report id locally
        3. Encrypt the value for (contract, submitter)
        4. Submit the create transaction and await finality
        5. Upsert the unverified report, record history, reconcile

        Args:
            session: Connected identity and contract target.
            draft: Validated report draft.

        Returns:
            The stored report, or None if the submission did not complete.
        """
        log = self._begin_operation(
            "submit_report",
            category=draft.category.value,
            risk_level=draft.risk_level,
        )

        try:
            self._check_ready(session)
        except WhistleVaultError as exc:
            log.warning("submission_rejected_not_ready", error=exc.message)
            self._report_failure(log, exc, "Submission failed")
            return None

        report_id = self._ids.next_id()
        log = log.bind(report_id=report_id)
        log.info("submission_started")
        self._status.pending("Encrypting report value...")

        try:
            encrypted = await self._encrypt(
                session.contract_address or "", session.identity or "", draft.value
            )
            log.debug("value_encrypted", payload_size=len(encrypted.encrypted_payload))
            tx = await self._create_on_ledger(report_id, draft, encrypted)
            self._status.pending("Waiting for transaction confirmation...")
            receipt = await self._await_finality(tx, FailureStage.CREATE, report_id)
        except WhistleVaultError as exc:
            self._report_failure(log, exc, "Submission failed")
            return None

        log.info(
            "submission_confirmed",
            tx_hash=receipt.tx_hash,
            block_number=receipt.block_number,
        )
        stored = self._store.upsert(
            Report(
                id=report_id,
                title=draft.title,
                description=draft.description,
                category=draft.category,
                public_risk_level=draft.risk_level,
                public_value2=INITIAL_PUBLIC_VALUE2,
            )
        )
        self._history.append(f"Created report: {draft.title}")

        # A listing failure here is logged only; the submission stands.
        await self._reconcile(log)
        self._status.success("Report submitted")
        return self._store.get(report_id) or stored

    async def _encrypt(
        self, target_contract: str, submitter: str, value: int
    ) -> EncryptedInput:
        with translate_failures(FailureStage.ENCRYPT):
            return await self._gateway.encrypt(target_contract, submitter, value)

    async def _create_on_ledger(
        self, report_id: str, draft: ReportDraft, encrypted: EncryptedInput
    ) -> TransactionHandle:
        with translate_failures(FailureStage.CREATE, report_id):
            return await self._ledger.create_report(
                report_id,
                draft.title,
                encrypted.encrypted_payload,
                encrypted.proof,
                draft.risk_level,
                INITIAL_PUBLIC_VALUE2,
                draft.description,
            )

    # ------------------------------------------------------------------
    # verifyAndDecrypt
    # ------------------------------------------------------------------

    async def verify_and_decrypt(
        self, session: SessionContext, report_id: str
    ) -> int | None:
        """Reveal a report's value through multi-party decryption.

        Decision tree:
        1. Ledger says already verified -> read stored value, upsert, done
        2. Otherwise fetch the encrypted handle
        3. Run decrypt-and-prove; its continuation submits the verification
           transaction and awaits finality
        4. Extract the clear value for the handle
        5. Reconcile, record history, report success

        An "already verified" rejection at step 3 means another party won
        the race; it resolves through the step 1 path.

        Overlapping calls for the same report share one run: a second
        caller awaits the first caller's task and gets the same result.

        Args:
            session: Connected identity and contract target.
            report_id: Report to reveal.

        Returns:
            The clear value, or None if it could not be obtained.
        """
        log = self._begin_operation("verify_and_decrypt", report_id=report_id)

        try:
            self._check_ready(session)
        except WhistleVaultError as exc:
            log.warning("verification_rejected_not_ready", error=exc.message)
            self._report_failure(log, exc, "Decryption failed")
            return None

        in_flight = self._verifications.get(report_id)
        if in_flight is not None:
            log.info("verification_joined")
            return await asyncio.shield(in_flight)

        task = asyncio.ensure_future(self._run_verification(log, session, report_id))
        self._verifications[report_id] = task
        return await asyncio.shield(task)

    async def _run_verification(
        self, log: structlog.BoundLogger, session: SessionContext, report_id: str
    ) -> int | None:
        try:
            return await self._verify(log, session, report_id)
        finally:
            self._verifications.pop(report_id, None)

    async def _verify(
        self, log: structlog.BoundLogger, session: SessionContext, report_id: str
    ) -> int | None:
        log.info("verification_started")
        self._status.pending("Checking verification state on the ledger...")

        try:
            record = await self._read_report(report_id)
            if record.is_verified:
                log.info("already_verified_on_ledger")
                return self._complete_already_verified(report_id, record)

            handle = await self._read_handle(report_id)
            log.debug("encrypted_handle_fetched", handle=handle)
            self._status.pending("Running multi-party decryption...")
            result = await self._decrypt(
                session.contract_address or "", report_id, handle
            )
            clear_value = self._extract_clear_value(result.clear_values, handle)
        except AlreadyVerifiedError:
            log.info("verification_race_detected")
            return await self._recover_already_verified(log, report_id)
        except WhistleVaultError as exc:
            self._report_failure(log, exc, "Decryption failed")
            return None

        await self._reconcile(log)
        await self._confirm_verified(log, report_id)
        self._history.append(f"Decrypted report evidence: {report_id}")
        self._status.success("Evidence decrypted and verified")
        log.info("verification_completed")
        return clear_value

    async def _decrypt(
        self, target_contract: str, report_id: str, handle: str
    ) -> DecryptionResult:
        async def submit_verification(
            clear_values_payload: bytes, decryption_proof: bytes
        ) -> TransactionHandle:
            with translate_failures(FailureStage.VERIFY, report_id):
                tx = await self._ledger.submit_verification(
                    report_id, clear_values_payload, decryption_proof
                )
            self._status.pending("Verifying decryption on the ledger...")
            await self._await_finality(tx, FailureStage.VERIFY, report_id)
            return tx

        with translate_failures(FailureStage.DECRYPT, report_id):
            return await self._gateway.request_multi_party_decryption(
                [handle], target_contract, submit_verification
            )

    @staticmethod
    def _extract_clear_value(clear_values: Mapping[str, int], handle: str) -> int:
        if handle not in clear_values:
            raise DecryptionProtocolError(
                f"Decryption result has no clear value for handle {handle}"
            )
        return int(clear_values[handle])

    def _complete_already_verified(
        self, report_id: str, record: LedgerReportRecord
    ) -> int:
        self._store.upsert(self._to_report(report_id, record))
        self._status.success("Data already verified on the ledger")
        return record.clear_value

    async def _recover_already_verified(
        self, log: structlog.BoundLogger, report_id: str
    ) -> int | None:
        try:
            record = await self._read_report(report_id)
            if not record.is_verified:
                raise LedgerReadFailureError(
                    "Ledger rejected the verification as already verified "
                    "but the report still reads as unverified",
                    report_id=report_id,
                )
            await self._reconcile(log)
            return self._complete_already_verified(report_id, record)
        except WhistleVaultError as exc:
            self._report_failure(log, exc, "Decryption failed")
            return None

    async def _confirm_verified(self, log: structlog.BoundLogger, report_id: str) -> None:
        """Upsert the report from a direct read if reconciliation missed it."""
        current = self._store.get(report_id)
        if current is not None and current.is_verified:
            return
        try:
            record = await self._read_report(report_id)
            if record.is_verified:
                self._store.upsert(self._to_report(report_id, record))
        except WhistleVaultError as exc:
            log.warning("verified_state_read_failed", error=exc.message)

    # ------------------------------------------------------------------
    # refresh
    # ------------------------------------------------------------------

    async def refresh(self, session: SessionContext) -> bool:
        """Rebuild the store from the ledger.

        Args:
            session: Connected session; an identity is required.

        Returns:
            True if the store was rebuilt.
        """
        log = self._begin_operation("refresh")
        if not session.identity:
            self._report_failure(
                log, NotReadyError("Connect an identity first"), "Refresh failed"
            )
            return False
        if not await self._reconcile(log):
            return False
        self._status.success(f"Loaded {len(self._store)} reports")
        return True

    async def _reconcile(self, log: structlog.BoundLogger) -> bool:
        """Replace the store with the ledger's view.

        Per-report read failures skip that report. A listing failure
        leaves the previous snapshot in place.
        """
        try:
            with translate_failures(FailureStage.READ):
                report_ids = await self._ledger.list_report_ids()
        except WhistleVaultError as exc:
            log.error("report_listing_failed", error=exc.message)
            self._status.error(f"Failed to load reports: {exc.message}", code=exc.code)
            return False

        reports: list[Report] = []
        skipped = 0
        for report_id in report_ids:
            try:
                record = await self._read_report(report_id)
                reports.append(self._to_report(report_id, record))
            except WhistleVaultError as exc:
                skipped += 1
                log.warning("report_fetch_failed", report_id=report_id, error=exc.message)

        self._store.replace_all(reports)
        log.info("store_reconciled", report_count=len(reports), skipped=skipped)
        return True

    # ------------------------------------------------------------------
    # availability
    # ------------------------------------------------------------------

    async def check_availability(self) -> bool | None:
        """Report whether the contract is live.

        Returns:
            The liveness flag, or None if the check failed.
        """
        log = self._begin_operation("check_availability")
        try:
            with translate_failures(FailureStage.READ):
                available = await self._ledger.check_liveness()
        except WhistleVaultError as exc:
            log.error("availability_check_failed", error=exc.message)
            self._status.error("System status check failed", code=exc.code)
            return None
        log.info("availability_checked", available=available)
        state = "operational" if available else "under maintenance"
        self._status.success(f"System status: {state}")
        return available

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _check_ready(self, session: SessionContext) -> None:
        if not session.is_resolved:
            raise NotReadyError("Connect an identity and resolve the contract address first")
        self._gate.check_ready()

    async def _read_report(self, report_id: str) -> LedgerReportRecord:
        with translate_failures(FailureStage.READ, report_id):
            return await self._ledger.get_report(report_id)

    async def _read_handle(self, report_id: str) -> str:
        with translate_failures(FailureStage.READ, report_id):
            return await self._ledger.get_encrypted_handle(report_id)

    async def _await_finality(
        self, tx: TransactionHandle, stage: FailureStage, report_id: str
    ) -> TransactionReceipt:
        with translate_failures(stage, report_id):
            return await self._ledger.wait_for_finality(tx)

    def _to_report(self, report_id: str, record: LedgerReportRecord) -> Report:
        known = self._store.get(report_id)
        created_at = (
            datetime.fromtimestamp(record.timestamp, tz=timezone.utc)
            if record.timestamp
            else None
        )
        try:
            return Report(
                id=report_id,
                title=record.title,
                description=record.description,
                category=known.category if known is not None else DEFAULT_CATEGORY,
                public_risk_level=record.public_value1,
                public_value2=record.public_value2,
                is_verified=record.is_verified,
                clear_value=record.clear_value if record.is_verified else None,
                encrypted_handle=record.encrypted_handle or None,
                created_at=created_at,
                creator=record.creator or None,
            )
        except ValueError as exc:
            raise LedgerReadFailureError(
                f"Malformed ledger record: {exc}", report_id=report_id
            ) from exc

    def _report_failure(
        self, log: structlog.BoundLogger, exc: WhistleVaultError, prefix: str
    ) -> None:
        if isinstance(exc, UserDeclinedSignatureError):
            log.info("operation_cancelled_by_user", error=exc.message)
            self._status.cancelled("Transaction cancelled by user", code=exc.code)
            return
        log.error("operation_failed", error_code=exc.code, error=exc.message)
        self._status.error(f"{prefix}: {exc.message}", code=exc.code)
