"""Exponential inactivity decay for activity-based sub-scores.

Two strategies share one formula, ``score * (1 - rate) ** months``:

* :meth:`DecayModel.decay_component` decays one sub-score and rounds it.
  The engine uses it at issuance, once per activity dimension.
* :meth:`DecayModel.decay_pooled` decays the stored activity subtotal of an
  existing attestation as a single number and rounds once. It is used at
  query time, when the raw per-dimension inputs are no longer available.

The pooled strategy rounds once instead of four times, so its result can
differ by a point or two from re-decaying each dimension. Query results
must use the pooled figure.

Both are pure functions of their arguments. Decay never increases a score
and never applies when the elapsed time is zero or negative.
"""
from __future__ import annotations

import datetime

from trust_oracle.scoring.attestation import CurrentScore, TrustAttestation
from trust_oracle.scoring.clock import ensure_utc
from trust_oracle.scoring.policy import ScoringPolicy
from trust_oracle.scoring.rounding import round_half_away

_SECONDS_PER_DAY = 24 * 60 * 60


class DecayModel:
    """Stateless decay calculator.

    Parameters
    ----------
    policy:
        Scoring policy supplying the monthly decay rate and month length.
        Defaults to the standard policy (5% per 30-day month).
    """

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self._policy: ScoringPolicy = policy if policy is not None else ScoringPolicy()

    def months_inactive(
        self, last_activity_at: datetime.datetime, now: datetime.datetime
    ) -> float:
        """Fractional months elapsed between *last_activity_at* and *now*.

        Negative when the last activity lies in the future.
        """
        elapsed = ensure_utc(now) - ensure_utc(last_activity_at)
        month_seconds = self._policy.decay_month_days * _SECONDS_PER_DAY
        return elapsed.total_seconds() / month_seconds

    def decay_factor(self, months: float) -> float:
        """Multiplier applied after *months* of inactivity (1.0 when months <= 0)."""
        if months <= 0:
            return 1.0
        return (1 - self._policy.decay_rate_monthly) ** months

    def decay_component(
        self,
        score: int,
        last_activity_at: datetime.datetime,
        now: datetime.datetime,
    ) -> int:
        """Decay a single sub-score for the time elapsed since last activity.

        Parameters
        ----------
        score:
            Undecayed integer sub-score.
        last_activity_at:
            UTC datetime of the agent's last observed activity.
        now:
            Reference time.

        Returns
        -------
        int
            The decayed sub-score, or *score* unchanged when no time has
            elapsed.
        """
        months = self.months_inactive(last_activity_at, now)
        if months <= 0:
            return score
        return round_half_away(score * self.decay_factor(months))

    def decay_pooled(
        self, attestation: TrustAttestation, now: datetime.datetime
    ) -> CurrentScore:
        """Re-derive the current score of an issued attestation.

        The stored activity sub-scores are summed, decayed as one pool with
        a single rounding, and added back to the durable remainder of the
        trust score.

        Parameters
        ----------
        attestation:
            A previously issued attestation.
        now:
            Reference time.

        Returns
        -------
        CurrentScore
            Current score and the points lost to decay.
        """
        months = self.months_inactive(attestation.last_activity_at, now)
        if months <= 0:
            return CurrentScore(current_score=attestation.trust_score, decay_applied=0)

        activity = attestation.activity_subtotal
        durable = attestation.trust_score - activity
        decayed_activity = round_half_away(activity * self.decay_factor(months))
        current = durable + decayed_activity
        return CurrentScore(
            current_score=current,
            decay_applied=attestation.trust_score - current,
        )
