"""Unit tests for LedgerClientStub contract rules."""

import pytest

from tests.helpers import FakeTimeAuthority
from whistlevault.domain.errors import (
    AlreadyVerifiedError,
    LedgerReadFailureError,
    LedgerWriteRejectedError,
    RejectionReason,
    UserDeclinedSignatureError,
)
from whistlevault.infrastructure.stubs import (
    DEV_CONTRACT_ADDRESS,
    DEV_SIGNER_ADDRESS,
    LedgerClientStub,
)
from whistlevault.infrastructure.stubs.confidential_codec import (
    decryption_proof,
    encode_clear_values,
    handle_from_payload,
    input_proof,
)

PAYLOAD = bytes(range(32))
OTHER_IDENTITY = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"


@pytest.fixture
def ledger(fake_time_authority: FakeTimeAuthority) -> LedgerClientStub:
    return LedgerClientStub(fake_time_authority)


async def _create(ledger: LedgerClientStub, report_id: str = "report-1") -> None:
    tx = await ledger.create_report(
        report_id,
        "Title",
        PAYLOAD,
        input_proof(PAYLOAD, DEV_CONTRACT_ADDRESS, DEV_SIGNER_ADDRESS),
        6,
        0,
        "Description",
    )
    await ledger.wait_for_finality(tx)


async def _verify(ledger: LedgerClientStub, report_id: str = "report-1", value: int = 9):
    payload = encode_clear_values([value])
    proof = decryption_proof([handle_from_payload(PAYLOAD)], payload)
    return await ledger.submit_verification(report_id, payload, proof)


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_and_read_back(
        self, ledger: LedgerClientStub, fake_time_authority: FakeTimeAuthority
    ) -> None:
        await _create(ledger)

        record = await ledger.get_report("report-1")
        assert record.title == "Title"
        assert record.public_value1 == 6
        assert record.is_verified is False
        assert record.creator == DEV_SIGNER_ADDRESS
        assert record.timestamp == int(fake_time_authority.now().timestamp())
        assert await ledger.get_encrypted_handle("report-1") == handle_from_payload(PAYLOAD)
        assert await ledger.list_report_ids() == ["report-1"]

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        with pytest.raises(LedgerWriteRejectedError, match="already exists") as exc_info:
            await _create(ledger)
        assert exc_info.value.reason is RejectionReason.ALREADY_EXISTS

    @pytest.mark.asyncio
    async def test_wrong_input_proof_rejected(self, ledger: LedgerClientStub) -> None:
        with pytest.raises(LedgerWriteRejectedError) as exc_info:
            await ledger.create_report("report-1", "T", PAYLOAD, b"bogus", 1, 0, "D")
        assert exc_info.value.reason is RejectionReason.INVALID_PROOF
        assert ledger.report_count() == 0

    @pytest.mark.asyncio
    async def test_proof_for_other_identity_rejected(self, ledger: LedgerClientStub) -> None:
        proof = input_proof(PAYLOAD, DEV_CONTRACT_ADDRESS, OTHER_IDENTITY)
        with pytest.raises(LedgerWriteRejectedError, match="Invalid input proof"):
            await ledger.create_report("report-1", "T", PAYLOAD, proof, 1, 0, "D")

    @pytest.mark.asyncio
    async def test_signer_override_accepts_other_identity(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        ledger = LedgerClientStub(fake_time_authority, signer=OTHER_IDENTITY)
        proof = input_proof(PAYLOAD, DEV_CONTRACT_ADDRESS, OTHER_IDENTITY)

        tx = await ledger.create_report("report-1", "T", PAYLOAD, proof, 1, 0, "D")
        await ledger.wait_for_finality(tx)

        assert (await ledger.get_report("report-1")).creator == OTHER_IDENTITY

    @pytest.mark.asyncio
    async def test_declined_signature(self, ledger: LedgerClientStub) -> None:
        ledger.decline_signatures = True
        with pytest.raises(UserDeclinedSignatureError):
            await _create(ledger)


class TestVerify:
    @pytest.mark.asyncio
    async def test_verify_reveals_value(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        receipt = await ledger.wait_for_finality(await _verify(ledger, value=9))

        record = await ledger.get_report("report-1")
        assert record.is_verified is True
        assert record.clear_value == 9
        assert receipt.block_number == 2

    @pytest.mark.asyncio
    async def test_second_verification_rejected(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        await _verify(ledger)
        with pytest.raises(AlreadyVerifiedError):
            await _verify(ledger)

    @pytest.mark.asyncio
    async def test_wrong_decryption_proof_rejected(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        with pytest.raises(LedgerWriteRejectedError) as exc_info:
            await ledger.submit_verification("report-1", encode_clear_values([1]), b"x")
        assert exc_info.value.reason is RejectionReason.INVALID_PROOF

    @pytest.mark.asyncio
    async def test_external_verification(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        ledger.mark_verified_externally("report-1", 5)
        assert (await ledger.get_report("report-1")).clear_value == 5


class TestFailureKnobs:
    @pytest.mark.asyncio
    async def test_listing_failure(self, ledger: LedgerClientStub) -> None:
        ledger.fail_listing = True
        with pytest.raises(LedgerReadFailureError):
            await ledger.list_report_ids()

    @pytest.mark.asyncio
    async def test_per_report_failure(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        ledger.failing_report_ids = {"report-1"}
        with pytest.raises(LedgerReadFailureError) as exc_info:
            await ledger.get_report("report-1")
        assert exc_info.value.report_id == "report-1"

    @pytest.mark.asyncio
    async def test_liveness(self, ledger: LedgerClientStub) -> None:
        assert await ledger.check_liveness() is True
        ledger.available = False
        assert await ledger.check_liveness() is False

    @pytest.mark.asyncio
    async def test_unknown_transaction(self, ledger: LedgerClientStub) -> None:
        from whistlevault.application.ports import TransactionHandle

        with pytest.raises(LedgerWriteRejectedError):
            await ledger.wait_for_finality(TransactionHandle(tx_hash="0xdead"))

    @pytest.mark.asyncio
    async def test_clear(self, ledger: LedgerClientStub) -> None:
        await _create(ledger)
        ledger.clear()
        assert ledger.report_count() == 0
        assert ledger.calls == []
