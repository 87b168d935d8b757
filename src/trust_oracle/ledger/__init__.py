"""Publication of trust attestations as oracle-signed ledger memos."""
from __future__ import annotations

from trust_oracle.ledger.errors import (
    AttestationNotFoundError,
    LedgerError,
    MemoDecodeError,
    OracleNotInitializedError,
)
from trust_oracle.ledger.keys import OracleKey, OracleKeyStore, verify_signature
from trust_oracle.ledger.memo import (
    MEMO_PREFIX,
    attestation_address,
    decode_memo,
    encode_memo,
)
from trust_oracle.ledger.transport import (
    AttestationTransport,
    InMemoryLedger,
    PublishedAttestation,
)

__all__ = [
    "AttestationNotFoundError",
    "AttestationTransport",
    "InMemoryLedger",
    "LedgerError",
    "MEMO_PREFIX",
    "MemoDecodeError",
    "OracleKey",
    "OracleKeyStore",
    "OracleNotInitializedError",
    "PublishedAttestation",
    "attestation_address",
    "decode_memo",
    "encode_memo",
    "verify_signature",
]
