"""Reputation scoring for autonomous agents.

Raw platform metrics are mapped onto eight bounded sub-scores, activity-based
sub-scores decay with inactivity, and the result is summed into a 0 - 1000
composite carried by an immutable TrustAttestation.
"""
from __future__ import annotations

from trust_oracle.scoring.attestation import CurrentScore, TrustAttestation
from trust_oracle.scoring.components import (
    ACTIVITY_COMPONENTS,
    DEFAULT_CAPS,
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

__all__ = [
    "ACTIVITY_COMPONENTS",
    "AgentPlatformData",
    "AttestationAssembler",
    "ComponentScorer",
    "CurrentScore",
    "DEFAULT_CAPS",
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
]
