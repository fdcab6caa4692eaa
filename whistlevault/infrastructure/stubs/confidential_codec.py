"""Encoding shared by the development ledger and encryption gateway stubs.

The stubs stand in for a real confidential-computing engine, so they
agree on a deliberately simple format:

- Handle: ``0x`` + hex of the 32-byte encrypted payload
- Input proof: SHA-256 over payload, contract and submitter
- Clear values payload: each value as a 32-byte big-endian word
- Decryption proof: SHA-256 over the handles and the clear values payload

None of this is secret; it only lets the ledger stub check that it was
handed the proof that belongs to the payload.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

WORD_SIZE = 32


def handle_from_payload(encrypted_payload: bytes) -> str:
    return "0x" + encrypted_payload.hex()


def input_proof(encrypted_payload: bytes, contract: str, submitter: str) -> bytes:
    digest = hashlib.sha256()
    digest.update(b"input-proof:")
    digest.update(encrypted_payload)
    digest.update(contract.lower().encode("utf-8"))
    digest.update(submitter.lower().encode("utf-8"))
    return digest.digest()


def encode_clear_values(values: Sequence[int]) -> bytes:
    """Encode values as consecutive 32-byte big-endian words.

    Raises:
        OverflowError: If a value is negative or does not fit in a word.
    """
    return b"".join(value.to_bytes(WORD_SIZE, "big") for value in values)


def decode_clear_values(payload: bytes) -> list[int]:
    """Decode a payload produced by encode_clear_values().

    Raises:
        ValueError: If the payload length is not a multiple of the word size.
    """
    if len(payload) % WORD_SIZE:
        raise ValueError(
            f"Clear values payload length {len(payload)} is not a multiple of {WORD_SIZE}"
        )
    return [
        int.from_bytes(payload[offset : offset + WORD_SIZE], "big")
        for offset in range(0, len(payload), WORD_SIZE)
    ]


def decryption_proof(handles: Sequence[str], clear_values_payload: bytes) -> bytes:
    digest = hashlib.sha256()
    digest.update(b"decryption-proof:")
    for handle in handles:
        digest.update(handle.lower().encode("utf-8"))
    digest.update(clear_values_payload)
    return digest.digest()
