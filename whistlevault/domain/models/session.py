"""Session context passed into every orchestrator operation.

Replaces ambient connection globals with an explicit value the caller
owns and can swap when the connected identity changes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Identity and contract target for one connected session.

    Attributes:
        identity: Connected submitter identity (e.g. an account address).
        contract_address: Address of the report contract on the ledger.
    """

    identity: str | None = None
    contract_address: str | None = None

    @property
    def is_resolved(self) -> bool:
        """True when both identity and contract target are known."""
        return bool(self.identity) and bool(self.contract_address)
