"""Exception taxonomy for the attestation ledger."""
from __future__ import annotations


class LedgerError(Exception):
    """Base class for attestation transport failures."""


class OracleNotInitializedError(LedgerError):
    """Raised when a signing operation is attempted without an oracle key."""

    def __init__(self) -> None:
        super().__init__(
            "Oracle key not initialized. Load or generate an oracle key first."
        )


class MemoDecodeError(LedgerError):
    """Raised when a ledger memo does not contain a decodable attestation."""


class AttestationNotFoundError(LedgerError, KeyError):
    """Raised when no published attestation matches an agent_id."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(f"No published attestation found for agent {agent_id!r}.")
        self.agent_id = agent_id

    def __str__(self) -> str:
        return str(self.args[0])
