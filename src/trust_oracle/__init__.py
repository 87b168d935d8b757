"""trust-oracle — auditable reputation scores for autonomous agents.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import trust_oracle
>>> trust_oracle.__version__
'0.1.0'

Quick start
-----------
::

    import datetime
    from trust_oracle import AgentPlatformData, compute_attestation, current_score

    data = AgentPlatformData(
        agent_id="agent-001",
        agent_name="Agent One",
        wallet_address="FxfNUY8kahJsnWwKnUJv4r8feJNqvLbvVenQCqGHnjyh",
        last_activity_at=datetime.datetime.now(datetime.timezone.utc),
        messages=150,
        total_skills=6,
        verified_skills=6,
    )
    attestation = compute_attestation(data)
    print(attestation.trust_score, current_score(attestation).current_score)
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ------------------------------------------------------------------
# Scoring core
# ------------------------------------------------------------------
from trust_oracle.scoring.attestation import CurrentScore, TrustAttestation
from trust_oracle.scoring.components import (
    ACTIVITY_COMPONENTS,
    DURABLE_COMPONENTS,
    MAX_TRUST_SCORE,
    ScoreComponent,
)
from trust_oracle.scoring.decay import DecayModel
from trust_oracle.scoring.engine import (
    AttestationAssembler,
    TrustEngine,
    compute_attestation,
    current_score,
)
from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.policy import LinearTerm, SaturatingTerm, ScoringPolicy
from trust_oracle.scoring.scorer import ComponentScorer
from trust_oracle.scoring.tier import VerificationTier

# ------------------------------------------------------------------
# Ledger collaborator
# ------------------------------------------------------------------
from trust_oracle.ledger.errors import (
    AttestationNotFoundError,
    LedgerError,
    MemoDecodeError,
    OracleNotInitializedError,
)
from trust_oracle.ledger.keys import OracleKey, OracleKeyStore
from trust_oracle.ledger.memo import decode_memo, encode_memo
from trust_oracle.ledger.transport import (
    AttestationTransport,
    InMemoryLedger,
    PublishedAttestation,
)

__all__ = [
    # version
    "__version__",
    # scoring
    "ACTIVITY_COMPONENTS",
    "AgentPlatformData",
    "AttestationAssembler",
    "ComponentScorer",
    "CurrentScore",
    "DURABLE_COMPONENTS",
    "DecayModel",
    "LinearTerm",
    "MAX_TRUST_SCORE",
    "SaturatingTerm",
    "ScoreComponent",
    "ScoringPolicy",
    "TrustAttestation",
    "TrustEngine",
    "VerificationTier",
    "compute_attestation",
    "current_score",
    # ledger
    "AttestationNotFoundError",
    "AttestationTransport",
    "InMemoryLedger",
    "LedgerError",
    "MemoDecodeError",
    "OracleKey",
    "OracleKeyStore",
    "OracleNotInitializedError",
    "PublishedAttestation",
    "decode_memo",
    "encode_memo",
]
