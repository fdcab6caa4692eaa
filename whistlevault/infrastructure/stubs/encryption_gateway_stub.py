"""Encryption gateway stub implementation.

In-memory stand-in for the encryption and proof engine. It keeps the
plaintext behind every handle it produced so the multi-party decryption
protocol can be simulated end to end against LedgerClientStub.

WARNING: This stub is for development/testing only. It provides no
confidentiality whatsoever.
"""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Awaitable, Callable, Sequence

from whistlevault.application.ports.encryption_gateway import (
    DecryptionResult,
    EncryptedInput,
    EncryptionGatewayProtocol,
    ProofReadyCallback,
)
from whistlevault.domain.errors import (
    DecryptionProtocolError,
    EncryptionFailureError,
    GatewayInitFailureError,
    NotReadyError,
)
from whistlevault.infrastructure.stubs.confidential_codec import (
    decryption_proof,
    encode_clear_values,
    handle_from_payload,
    input_proof,
)


class EncryptionGatewayStub(EncryptionGatewayProtocol):
    """Stub implementation of EncryptionGatewayProtocol.

    Attributes:
        fail_initialize: If True, initialize() raises GatewayInitFailureError.
        fail_encrypt: If True, encrypt() raises EncryptionFailureError.
        fail_decryption: If True, the decryption protocol fails before
            the proof-ready continuation is called.
        before_proof_ready: Optional hook awaited after the protocol has
            produced its proof and before the continuation runs.
        initialize_calls: Number of handshakes attempted.
        decryption_requests: Number of decryption protocol runs.
    """

    def __init__(
        self,
        *,
        fail_initialize: bool = False,
        initialize_delay: float = 0.0,
    ) -> None:
        """Initialize the stub.

        Args:
            fail_initialize: If True, the handshake fails.
            initialize_delay: Seconds the handshake takes, for concurrency tests.
        """
        self.fail_initialize = fail_initialize
        self.fail_encrypt = False
        self.fail_decryption = False
        self.before_proof_ready: Callable[[], Awaitable[None]] | None = None
        self.initialize_calls = 0
        self.decryption_requests = 0
        self._initialize_delay = initialize_delay
        self._initialized = False
        self._plaintexts: dict[str, int] = {}
        self._nonce = 0

    async def initialize(self) -> None:
        if self._initialized:
            return
        self.initialize_calls += 1
        if self._initialize_delay:
            await asyncio.sleep(self._initialize_delay)
        if self.fail_initialize:
            raise GatewayInitFailureError("Relayer handshake rejected")
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

    async def encrypt(
        self, target_contract: str, submitter: str, value: int
    ) -> EncryptedInput:
        self._require_initialized()
        if self.fail_encrypt:
            raise EncryptionFailureError("Input proof generation failed")
        self._nonce += 1
        seed = f"{target_contract.lower()}:{submitter.lower()}:{self._nonce}"
        payload = hashlib.sha256(seed.encode("utf-8")).digest()
        self._plaintexts[handle_from_payload(payload)] = value
        return EncryptedInput(
            encrypted_payload=payload,
            proof=input_proof(payload, target_contract, submitter),
        )

    async def request_multi_party_decryption(
        self,
        handles: Sequence[str],
        target_contract: str,
        on_proof_ready: ProofReadyCallback,
    ) -> DecryptionResult:
        self._require_initialized()
        self.decryption_requests += 1
        if self.fail_decryption:
            raise DecryptionProtocolError("Key-share holders did not reach threshold")
        unknown = [handle for handle in handles if handle not in self._plaintexts]
        if unknown:
            raise DecryptionProtocolError(f"Unknown encrypted handles: {', '.join(unknown)}")

        values = [self._plaintexts[handle] for handle in handles]
        payload = encode_clear_values(values)
        proof = decryption_proof(handles, payload)
        if self.before_proof_ready is not None:
            await self.before_proof_ready()
        tx = await on_proof_ready(payload, proof)
        return DecryptionResult(
            clear_values=dict(zip(handles, values)),
            clear_values_payload=payload,
            decryption_proof=proof,
            verification_tx=tx,
        )

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotReadyError("Encryption engine is not initialized")
