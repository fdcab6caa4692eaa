"""Encryption gateway protocol definition.

Defines the abstract interface for the encryption and proof engine:
turning a plaintext integer into an encrypted ledger input with a
correctness proof, and driving the multi-party decrypt-and-prove protocol
for encrypted handles. Infrastructure adapters must implement this
protocol.

Lifecycle:
- initialize() performs a one-time per-session handshake
- initialize() is idempotent once it has succeeded
- encrypt() and request_multi_party_decryption() require a completed handshake
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass

from whistlevault.application.ports.ledger_client import TransactionHandle

# Continuation invoked once the protocol has produced clear values and a
# decryption proof. Receives (clear_values_payload, decryption_proof).
ProofReadyCallback = Callable[[bytes, bytes], Awaitable[TransactionHandle]]


@dataclass(frozen=True)
class EncryptedInput:
    """Result of encrypting a value for a specific contract and submitter.

    Attributes:
        encrypted_payload: Opaque encrypted input accepted by the contract.
        proof: Zero-knowledge proof that the payload is well formed.
    """

    encrypted_payload: bytes
    proof: bytes


@dataclass(frozen=True)
class DecryptionResult:
    """Result of a completed multi-party decryption.

    Attributes:
        clear_values: Mapping from encrypted handle to decoded value.
        clear_values_payload: Encoded clear values as submitted on-ledger.
        decryption_proof: Proof checked by the contract.
        verification_tx: Transaction returned by the proof-ready continuation.
    """

    clear_values: Mapping[str, int]
    clear_values_payload: bytes
    decryption_proof: bytes
    verification_tx: TransactionHandle | None = None


class EncryptionGatewayProtocol(ABC):
    """Abstract protocol for the encryption and proof engine.

    All gateway implementations (development stub, production engine)
    must implement this interface so the orchestrator stays independent
    of the cryptographic library in use.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Run the per-session initialization handshake.

        Idempotent after success.

        Raises:
            GatewayInitFailureError: If the handshake fails.
        """
        ...

    @abstractmethod
    def is_initialized(self) -> bool:
        """Return True once the handshake has completed successfully."""
        ...

    @abstractmethod
    async def encrypt(
        self, target_contract: str, submitter: str, value: int
    ) -> EncryptedInput:
        """Encrypt a value for the given contract and submitter.

        This may take non-trivial wall-clock time (proof generation).

        Args:
            target_contract: Contract the input is bound to.
            submitter: Identity the input is bound to.
            value: The plaintext integer.

        Returns:
            EncryptedInput with payload and proof.

        Raises:
            EncryptionFailureError: If encryption or proof generation fails.
        """
        ...

    @abstractmethod
    async def request_multi_party_decryption(
        self,
        handles: Sequence[str],
        target_contract: str,
        on_proof_ready: ProofReadyCallback,
    ) -> DecryptionResult:
        """Decrypt handles through the multi-party protocol.

        Once the protocol has produced clear values and a proof, awaits
        on_proof_ready with them before returning. Exceptions raised by
        on_proof_ready propagate unchanged.

        Args:
            handles: Encrypted handles to reveal.
            target_contract: Contract the handles belong to.
            on_proof_ready: Continuation that submits the verification.

        Returns:
            DecryptionResult with a clear value per handle.

        Raises:
            DecryptionProtocolError: If the protocol itself fails.
        """
        ...
