"""ScoringPolicy — immutable weights, ceilings, and decay configuration.

Every constant the scoring engine uses lives here so that alternate weight
tables can be injected for testing or tuning without touching shared state.
Sensible defaults are provided for all parameters.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from trust_oracle.scoring.components import DEFAULT_CAPS, MAX_TRUST_SCORE, ScoreComponent


class SaturatingTerm(BaseModel):
    """A ``min(value / target, 1) * weight`` formula term.

    The ratio saturates once *value* reaches *target*, so the term never
    contributes more than *weight* points.
    """

    model_config = ConfigDict(frozen=True)

    target: float = Field(gt=0.0)
    weight: float = Field(ge=0.0)

    def points(self, value: float) -> float:
        return min(value / self.target, 1.0) * self.weight


class LinearTerm(BaseModel):
    """A ``value / scale * weight`` formula term with no inner saturation."""

    model_config = ConfigDict(frozen=True)

    scale: float = Field(gt=0.0)
    weight: float = Field(ge=0.0)

    def points(self, value: float) -> float:
        return (value / self.scale) * self.weight


class ScoringPolicy(BaseModel):
    """Configurable trust scoring policy.

    Parameters
    ----------
    caps:
        Ceiling for each sub-score. Must sum to 1000.
    messages, direct_messages, prompt_responses:
        Platform-activity terms.
    skill_ratio_weight:
        Points awarded for a 100% verified-to-total skill ratio.
    verified_skills:
        Bonus term on the absolute number of verified skills.
    endorsement_count, endorser_trust:
        Endorsement terms. Endorser trust is on the 0-1000 composite scale.
    review_count, review_rating:
        Review terms. Ratings are on a 0-5 scale.
    uptime, response_quality:
        Deployment terms, both percentages.
    wallet_age, transaction_count:
        On-chain reputation terms. Wallet age is in days.
    account_age:
        Account-age term in days.
    decay_rate_monthly:
        Fraction of activity-based points lost per month of inactivity.
    decay_month_days:
        Length of a decay month in days.
    issuer:
        Identifier stamped into every attestation as its issuer.
    """

    model_config = ConfigDict(frozen=True)

    caps: dict[ScoreComponent, int] = Field(default_factory=lambda: dict(DEFAULT_CAPS))

    messages: SaturatingTerm = SaturatingTerm(target=100, weight=60)
    direct_messages: SaturatingTerm = SaturatingTerm(target=50, weight=40)
    prompt_responses: SaturatingTerm = SaturatingTerm(target=10, weight=50)

    skill_ratio_weight: float = Field(default=100.0, ge=0.0)
    verified_skills: SaturatingTerm = SaturatingTerm(target=10, weight=50)

    endorsement_count: SaturatingTerm = SaturatingTerm(target=20, weight=75)
    endorser_trust: LinearTerm = LinearTerm(scale=1000, weight=75)

    review_count: SaturatingTerm = SaturatingTerm(target=15, weight=75)
    review_rating: LinearTerm = LinearTerm(scale=5, weight=75)

    uptime: LinearTerm = LinearTerm(scale=100, weight=75)
    response_quality: LinearTerm = LinearTerm(scale=100, weight=75)

    wallet_age: SaturatingTerm = SaturatingTerm(target=365, weight=50)
    transaction_count: SaturatingTerm = SaturatingTerm(target=100, weight=50)

    account_age: SaturatingTerm = SaturatingTerm(target=180, weight=50)

    decay_rate_monthly: float = Field(default=0.05, ge=0.0, lt=1.0)
    decay_month_days: float = Field(default=30.0, gt=0.0)

    issuer: str = "trust-oracle"

    @property
    def decay_rate_percent(self) -> float:
        """Monthly decay rate expressed as a percentage (5.0 for 5%)."""
        return self.decay_rate_monthly * 100

    def cap(self, component: ScoreComponent) -> int:
        return self.caps[component]

    def validate_caps(self) -> None:
        """Raise ValueError if the ceilings are incomplete or do not sum to 1000."""
        missing = [c.value for c in ScoreComponent if c not in self.caps]
        if missing:
            raise ValueError(f"Missing ceilings for components: {missing}")
        total = sum(self.caps[c] for c in ScoreComponent)
        if total != MAX_TRUST_SCORE:
            raise ValueError(
                f"Component ceilings must sum to {MAX_TRUST_SCORE}, got {total}"
            )
