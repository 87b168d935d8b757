"""Attestation transport — publish and retrieve signed attestations.

:class:`AttestationTransport` is the contract the HTTP layer depends on.
:class:`InMemoryLedger` implements it as an append-only, oracle-signed memo
log kept in process memory, mirroring how attestations are written as memo
transactions on a chain and read back from the oracle's history.
"""
from __future__ import annotations

import datetime
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from trust_oracle.ledger.errors import (
    AttestationNotFoundError,
    MemoDecodeError,
    OracleNotInitializedError,
)
from trust_oracle.ledger.keys import OracleKey, b58decode, b58encode, verify_signature
from trust_oracle.ledger.memo import attestation_address, decode_memo, encode_memo
from trust_oracle.scoring.attestation import TrustAttestation
from trust_oracle.scoring.clock import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedAttestation:
    """An attestation as read back from the ledger.

    Parameters
    ----------
    attestation:
        The decoded attestation.
    signature:
        Base58 Ed25519 signature of the memo by the oracle; doubles as the
        transaction id.
    block_time:
        UTC datetime the memo was recorded.
    address:
        Deterministic lookup key derived from the agent id.
    memo:
        The raw memo text that was signed.
    """

    attestation: TrustAttestation
    signature: str
    block_time: datetime.datetime
    address: str
    memo: str

    def to_dict(self) -> dict[str, object]:
        return {
            "attestation": self.attestation.to_dict(),
            "signature": self.signature,
            "blockTime": self.block_time.isoformat(),
            "address": self.address,
        }


class AttestationTransport(Protocol):
    """Durable publication of attestations keyed by agent id."""

    @property
    def oracle_public_key(self) -> str | None: ...

    def publish(self, attestation: TrustAttestation) -> str:
        """Publish *attestation* and return its transaction signature."""
        ...

    def read_attestations(self, limit: int = 20) -> list[PublishedAttestation]:
        """Return up to *limit* most recent attestations, newest first."""
        ...

    def find(self, agent_id: str, limit: int = 50) -> PublishedAttestation:
        """Return the newest attestation for *agent_id* among the last *limit*."""
        ...


@dataclass(frozen=True)
class _LedgerEntry:
    memo: str
    signature: str
    block_time: datetime.datetime
    address: str


class InMemoryLedger:
    """Thread-safe, in-process attestation ledger.

    Parameters
    ----------
    oracle_key:
        Key used to sign published memos. Publishing without one raises
        :class:`OracleNotInitializedError`.
    clock:
        Source of block times. Defaults to the current UTC time.
    network:
        Label reported by the HTTP layer.
    """

    def __init__(
        self,
        oracle_key: OracleKey | None = None,
        clock: Callable[[], datetime.datetime] = utc_now,
        network: str = "in-memory",
    ) -> None:
        self._oracle_key = oracle_key
        self._clock = clock
        self._network = network
        self._entries: list[_LedgerEntry] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Oracle
    # ------------------------------------------------------------------

    def init_oracle(self, key: OracleKey) -> None:
        self._oracle_key = key
        logger.info("Oracle initialized: %s", key.public_key)

    @property
    def oracle_public_key(self) -> str | None:
        return self._oracle_key.public_key if self._oracle_key is not None else None

    @property
    def network(self) -> str:
        return self._network

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def submit_memo(self, memo: str, address: str = "") -> str:
        """Sign and append an arbitrary memo; return its base58 signature."""
        if self._oracle_key is None:
            raise OracleNotInitializedError()
        signature = b58encode(self._oracle_key.sign(memo.encode("utf-8")))
        entry = _LedgerEntry(
            memo=memo, signature=signature, block_time=self._clock(), address=address
        )
        with self._lock:
            self._entries.append(entry)
        return signature

    def publish(self, attestation: TrustAttestation) -> str:
        """Publish *attestation* as a signed memo.

        Raises
        ------
        OracleNotInitializedError
            If no oracle key has been configured.
        """
        signature = self.submit_memo(
            encode_memo(attestation), address=attestation_address(attestation.agent_id)
        )
        logger.info(
            "Trust attestation written for %s: %s", attestation.agent_id, signature
        )
        return signature

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_attestations(self, limit: int = 20) -> list[PublishedAttestation]:
        """Decode the most recent *limit* memos, newest first.

        Memos that do not decode as attestations count against *limit* and
        are skipped.
        """
        if self._oracle_key is None:
            raise OracleNotInitializedError()
        issuer = self._oracle_key.public_key
        with self._lock:
            recent = list(reversed(self._entries))[: max(limit, 0)]

        published: list[PublishedAttestation] = []
        for entry in recent:
            try:
                attestation = decode_memo(entry.memo, issuer=issuer)
            except MemoDecodeError as exc:
                logger.warning("Skipping undecodable memo %s: %s", entry.signature, exc)
                continue
            published.append(
                PublishedAttestation(
                    attestation=attestation,
                    signature=entry.signature,
                    block_time=entry.block_time,
                    address=entry.address,
                    memo=entry.memo,
                )
            )
        return published

    def find(self, agent_id: str, limit: int = 50) -> PublishedAttestation:
        """Return the newest attestation for *agent_id* among the last *limit*.

        Raises
        ------
        AttestationNotFoundError
            If no recent memo carries an attestation for *agent_id*.
        """
        for published in self.read_attestations(limit):
            if published.attestation.agent_id == agent_id:
                return published
        raise AttestationNotFoundError(agent_id)

    def verify(self, published: PublishedAttestation) -> bool:
        """Check that *published* was signed by this ledger's oracle."""
        if self._oracle_key is None:
            raise OracleNotInitializedError()
        return verify_signature(
            self._oracle_key.public_key,
            b58decode(published.signature),
            published.memo.encode("utf-8"),
        )
