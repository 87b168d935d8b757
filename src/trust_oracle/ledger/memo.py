"""Compact memo codec for publishing attestations on a ledger.

A memo is a single log line: the ``TRUST_ATTEST:`` prefix followed by compact
JSON. Keys are abbreviated so the payload fits a ledger memo (~566 bytes)::

    {"v":1,"id":...,"n":...,"w":...,"ts":812,
     "c":{"pa":..,"sv":..,"en":..,"rv":..,"dm":..,"or":..,"sa":..,"aa":..},
     "vt":2,"at":1760000000,"la":1759990000,"ver":1,"dr":5.0}

Timestamps are whole Unix seconds.
"""
from __future__ import annotations

import hashlib
import json

from trust_oracle.ledger.errors import MemoDecodeError
from trust_oracle.scoring.attestation import TrustAttestation
from trust_oracle.scoring.clock import from_unix_seconds, to_unix_seconds
from trust_oracle.scoring.components import ScoreComponent
from trust_oracle.scoring.tier import VerificationTier

MEMO_PREFIX: str = "TRUST_ATTEST:"
MEMO_PROTOCOL_VERSION: int = 1
MAX_MEMO_BYTES: int = 566

_COMPONENT_KEYS: dict[ScoreComponent, str] = {
    ScoreComponent.PLATFORM_ACTIVITY: "pa",
    ScoreComponent.SKILL_VERIFICATIONS: "sv",
    ScoreComponent.ENDORSEMENTS: "en",
    ScoreComponent.REVIEWS: "rv",
    ScoreComponent.DEPLOYMENT_METRICS: "dm",
    ScoreComponent.ONCHAIN_REPUTATION: "or",
    ScoreComponent.SECURITY_AUDIT: "sa",
    ScoreComponent.ACCOUNT_AGE: "aa",
}


def attestation_address(agent_id: str) -> str:
    """Deterministic 32-character lookup key for an agent's attestations."""
    digest = hashlib.sha256(f"trust-oracle:{agent_id}".encode("utf-8")).hexdigest()
    return digest[:32]


def to_compact(attestation: TrustAttestation) -> dict[str, object]:
    """Return the abbreviated dictionary form of *attestation*."""
    components = attestation.components
    return {
        "v": MEMO_PROTOCOL_VERSION,
        "id": attestation.agent_id,
        "n": attestation.agent_name,
        "w": attestation.wallet_address,
        "ts": attestation.trust_score,
        "c": {key: components[c] for c, key in _COMPONENT_KEYS.items()},
        "vt": int(attestation.verification_tier),
        "at": to_unix_seconds(attestation.attested_at),
        "la": to_unix_seconds(attestation.last_activity_at),
        "ver": attestation.version,
        "dr": attestation.decay_rate,
    }


def from_compact(data: dict[str, object], issuer: str) -> TrustAttestation:
    """Rebuild a TrustAttestation from its abbreviated form.

    The issuer is not carried in the memo; it is the signer of the memo.

    Raises
    ------
    MemoDecodeError
        If a key is missing or a value has the wrong type.
    """
    try:
        raw_components = data["c"]
        if not isinstance(raw_components, dict):
            raise TypeError("component block must be an object")
        c = {comp: int(raw_components[key]) for comp, key in _COMPONENT_KEYS.items()}
        return TrustAttestation(
            agent_id=str(data["id"]),
            agent_name=str(data["n"]),
            wallet_address=str(data["w"]),
            trust_score=int(data["ts"]),  # type: ignore[arg-type]
            platform_activity=c[ScoreComponent.PLATFORM_ACTIVITY],
            skill_verifications=c[ScoreComponent.SKILL_VERIFICATIONS],
            endorsements=c[ScoreComponent.ENDORSEMENTS],
            reviews=c[ScoreComponent.REVIEWS],
            deployment_metrics=c[ScoreComponent.DEPLOYMENT_METRICS],
            onchain_reputation=c[ScoreComponent.ONCHAIN_REPUTATION],
            security_audit=c[ScoreComponent.SECURITY_AUDIT],
            account_age=c[ScoreComponent.ACCOUNT_AGE],
            verification_tier=VerificationTier.from_value(data["vt"]),
            attested_at=from_unix_seconds(float(data["at"])),  # type: ignore[arg-type]
            attested_by=issuer,
            version=int(data.get("ver", 1)),  # type: ignore[arg-type]
            last_activity_at=from_unix_seconds(float(data["la"])),  # type: ignore[arg-type]
            decay_rate=float(data["dr"]),  # type: ignore[arg-type]
        )
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
        raise MemoDecodeError(f"Malformed attestation memo: {exc}") from exc


def encode_memo(attestation: TrustAttestation) -> str:
    """Serialize *attestation* to a prefixed compact memo string."""
    payload = json.dumps(to_compact(attestation), separators=(",", ":"), ensure_ascii=False)
    return f"{MEMO_PREFIX}{payload}"


def decode_memo(text: str, issuer: str) -> TrustAttestation:
    """Parse a memo or a log line containing one.

    Raises
    ------
    MemoDecodeError
        If the prefix is absent or the payload is not a valid attestation.
    """
    _, sep, payload = text.partition(MEMO_PREFIX)
    if not sep or not payload:
        raise MemoDecodeError(f"No {MEMO_PREFIX!r} payload in memo")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MemoDecodeError(f"Memo payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MemoDecodeError("Memo payload must be a JSON object")
    return from_compact(data, issuer=issuer)
