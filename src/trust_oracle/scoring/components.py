"""ScoreComponent enum and the default per-dimension ceilings.

Eight dimensions contribute to the composite trust score. Four of them
measure recent activity and decay with inactivity; the other four record
durable facts and never decay.
"""
from __future__ import annotations

from enum import Enum


class ScoreComponent(str, Enum):
    """The eight sub-scores that make up a trust attestation."""

    PLATFORM_ACTIVITY = "platformActivity"
    SKILL_VERIFICATIONS = "skillVerifications"
    ENDORSEMENTS = "endorsements"
    REVIEWS = "reviews"
    DEPLOYMENT_METRICS = "deploymentMetrics"
    ONCHAIN_REPUTATION = "onchainReputation"
    SECURITY_AUDIT = "securityAudit"
    ACCOUNT_AGE = "accountAge"


# Maximum points per dimension. Sums to MAX_TRUST_SCORE.
DEFAULT_CAPS: dict[ScoreComponent, int] = {
    ScoreComponent.PLATFORM_ACTIVITY: 150,
    ScoreComponent.SKILL_VERIFICATIONS: 150,
    ScoreComponent.ENDORSEMENTS: 150,
    ScoreComponent.REVIEWS: 150,
    ScoreComponent.DEPLOYMENT_METRICS: 150,
    ScoreComponent.ONCHAIN_REPUTATION: 100,
    ScoreComponent.SECURITY_AUDIT: 100,
    ScoreComponent.ACCOUNT_AGE: 50,
}

MAX_TRUST_SCORE: int = 1000

ACTIVITY_COMPONENTS: tuple[ScoreComponent, ...] = (
    ScoreComponent.PLATFORM_ACTIVITY,
    ScoreComponent.ENDORSEMENTS,
    ScoreComponent.REVIEWS,
    ScoreComponent.DEPLOYMENT_METRICS,
)

DURABLE_COMPONENTS: tuple[ScoreComponent, ...] = (
    ScoreComponent.SKILL_VERIFICATIONS,
    ScoreComponent.ONCHAIN_REPUTATION,
    ScoreComponent.SECURITY_AUDIT,
    ScoreComponent.ACCOUNT_AGE,
)
