"""ComponentScorer — raw platform metrics to eight bounded sub-scores.

Each sub-score is a sum of saturating or linear terms, rounded half away
from zero, then clamped to the dimension's ceiling. Inner terms and the
total are both bounded, so no combination of inputs can push a sub-score
past its ceiling. Infinite terms saturate at the ceiling and NaN scores 0.
"""
from __future__ import annotations

import math

from trust_oracle.scoring.components import ScoreComponent
from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.policy import ScoringPolicy
from trust_oracle.scoring.rounding import clamp, round_half_away


class ComponentScorer:
    """Stateless calculator for the eight trust sub-scores.

    Parameters
    ----------
    policy:
        Scoring policy defining term weights and ceilings.
        Defaults to the standard policy.
    """

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self._policy: ScoringPolicy = policy if policy is not None else ScoringPolicy()

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    def score(self, data: AgentPlatformData) -> dict[ScoreComponent, int]:
        """Compute all eight undecayed sub-scores for *data*.

        Returns
        -------
        dict[ScoreComponent, int]
            Sub-scores keyed by component, in ScoreComponent order.
        """
        return {
            ScoreComponent.PLATFORM_ACTIVITY: self.platform_activity(data),
            ScoreComponent.SKILL_VERIFICATIONS: self.skill_verifications(data),
            ScoreComponent.ENDORSEMENTS: self.endorsements(data),
            ScoreComponent.REVIEWS: self.reviews(data),
            ScoreComponent.DEPLOYMENT_METRICS: self.deployment_metrics(data),
            ScoreComponent.ONCHAIN_REPUTATION: self.onchain_reputation(data),
            ScoreComponent.SECURITY_AUDIT: self.security_audit(data),
            ScoreComponent.ACCOUNT_AGE: self.account_age(data),
        }

    # ------------------------------------------------------------------
    # Per-dimension formulas
    # ------------------------------------------------------------------

    def platform_activity(self, data: AgentPlatformData) -> int:
        p = self._policy
        raw = (
            p.messages.points(data.messages)
            + p.direct_messages.points(data.direct_messages)
            + p.prompt_responses.points(data.prompt_responses)
        )
        return self._bounded(ScoreComponent.PLATFORM_ACTIVITY, raw)

    def skill_verifications(self, data: AgentPlatformData) -> int:
        """Ratio of verified skills plus a bonus on the verified count.

        Agents that declare no skills score 0 regardless of
        ``verified_skills``.
        """
        if data.total_skills == 0:
            return 0
        p = self._policy
        ratio = data.verified_skills / max(data.total_skills, 1)
        raw = ratio * p.skill_ratio_weight + p.verified_skills.points(data.verified_skills)
        return self._bounded(ScoreComponent.SKILL_VERIFICATIONS, raw)

    def endorsements(self, data: AgentPlatformData) -> int:
        p = self._policy
        raw = p.endorsement_count.points(
            data.endorsements_received
        ) + p.endorser_trust.points(data.endorser_avg_trust)
        return self._bounded(ScoreComponent.ENDORSEMENTS, raw)

    def reviews(self, data: AgentPlatformData) -> int:
        p = self._policy
        raw = p.review_count.points(data.review_count) + p.review_rating.points(
            data.avg_review_score
        )
        return self._bounded(ScoreComponent.REVIEWS, raw)

    def deployment_metrics(self, data: AgentPlatformData) -> int:
        p = self._policy
        raw = p.uptime.points(data.uptime_percent) + p.response_quality.points(
            data.response_quality
        )
        return self._bounded(ScoreComponent.DEPLOYMENT_METRICS, raw)

    def onchain_reputation(self, data: AgentPlatformData) -> int:
        p = self._policy
        raw = p.wallet_age.points(data.wallet_age_days) + p.transaction_count.points(
            data.tx_count
        )
        return self._bounded(ScoreComponent.ONCHAIN_REPUTATION, raw)

    def security_audit(self, data: AgentPlatformData) -> int:
        """The audit score itself, or 0 when the audit was not passed."""
        if not data.security_audit_passed:
            return 0
        return self._bounded(ScoreComponent.SECURITY_AUDIT, data.audit_score)

    def account_age(self, data: AgentPlatformData) -> int:
        raw = self._policy.account_age.points(data.account_age_days)
        return self._bounded(ScoreComponent.ACCOUNT_AGE, raw)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _bounded(self, component: ScoreComponent, raw: float) -> int:
        cap = self._policy.cap(component)
        if math.isnan(raw):
            return 0
        if math.isinf(raw):
            return cap if raw > 0 else 0
        return clamp(round_half_away(raw), cap)
