"""TrustEngine — assemble trust attestations and answer current-score queries.

The engine composes :class:`ComponentScorer` and :class:`DecayModel`. It holds
only its immutable policy, so one instance may be shared across threads.
"""
from __future__ import annotations

import datetime
import logging

from trust_oracle.scoring.attestation import CurrentScore, TrustAttestation
from trust_oracle.scoring.clock import ensure_utc, utc_now
from trust_oracle.scoring.components import ACTIVITY_COMPONENTS, ScoreComponent
from trust_oracle.scoring.decay import DecayModel
from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.policy import ScoringPolicy
from trust_oracle.scoring.scorer import ComponentScorer

logger = logging.getLogger(__name__)


class AttestationAssembler:
    """Build a TrustAttestation from raw metrics at a fixed reference time.

    Parameters
    ----------
    scorer:
        Component scorer producing the eight undecayed sub-scores.
    decay:
        Decay model applied to the activity-based sub-scores.
    policy:
        Policy supplying the issuer identifier and decay percentage.
    """

    def __init__(
        self,
        scorer: ComponentScorer,
        decay: DecayModel,
        policy: ScoringPolicy,
    ) -> None:
        self._scorer = scorer
        self._decay = decay
        self._policy = policy

    def assemble(self, data: AgentPlatformData, now: datetime.datetime) -> TrustAttestation:
        """Score, decay, and sum *data* into a new attestation stamped *now*."""
        components = self._scorer.score(data)
        decayed: dict[ScoreComponent, int] = dict(components)
        for component in ACTIVITY_COMPONENTS:
            decayed[component] = self._decay.decay_component(
                components[component], data.last_activity_at, now
            )

        trust_score = sum(decayed.values())
        logger.debug("Scored agent %s: trust_score=%d", data.agent_id, trust_score)

        return TrustAttestation(
            agent_id=data.agent_id,
            agent_name=data.agent_name,
            wallet_address=data.wallet_address,
            trust_score=trust_score,
            platform_activity=decayed[ScoreComponent.PLATFORM_ACTIVITY],
            skill_verifications=decayed[ScoreComponent.SKILL_VERIFICATIONS],
            endorsements=decayed[ScoreComponent.ENDORSEMENTS],
            reviews=decayed[ScoreComponent.REVIEWS],
            deployment_metrics=decayed[ScoreComponent.DEPLOYMENT_METRICS],
            onchain_reputation=decayed[ScoreComponent.ONCHAIN_REPUTATION],
            security_audit=decayed[ScoreComponent.SECURITY_AUDIT],
            account_age=decayed[ScoreComponent.ACCOUNT_AGE],
            verification_tier=data.verification_tier,
            attested_at=now,
            attested_by=self._policy.issuer,
            version=1,
            last_activity_at=ensure_utc(data.last_activity_at),
            decay_rate=self._policy.decay_rate_percent,
        )


class TrustEngine:
    """Trust scoring engine.

    Parameters
    ----------
    policy:
        Scoring policy defining weights, ceilings, and decay. Defaults to
        the standard policy.

    Raises
    ------
    ValueError
        If the policy's ceilings do not sum to 1000.
    """

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self._policy: ScoringPolicy = policy if policy is not None else ScoringPolicy()
        self._policy.validate_caps()
        self._scorer = ComponentScorer(self._policy)
        self._decay = DecayModel(self._policy)
        self._assembler = AttestationAssembler(self._scorer, self._decay, self._policy)

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    @property
    def scorer(self) -> ComponentScorer:
        return self._scorer

    @property
    def decay(self) -> DecayModel:
        return self._decay

    def compute_attestation(
        self,
        data: AgentPlatformData,
        now: datetime.datetime | None = None,
    ) -> TrustAttestation:
        """Compute a fresh attestation for *data*.

        Parameters
        ----------
        data:
            Raw platform metrics for one agent.
        now:
            Reference time for decay and the issuance stamp. Captured once
            when omitted.

        Returns
        -------
        TrustAttestation
            New attestation with version 1.
        """
        reference = ensure_utc(now) if now is not None else utc_now()
        return self._assembler.assemble(data, reference)

    def current_score(
        self,
        attestation: TrustAttestation,
        now: datetime.datetime | None = None,
    ) -> CurrentScore:
        """Return the decayed current score of a previously issued attestation."""
        reference = ensure_utc(now) if now is not None else utc_now()
        return self._decay.decay_pooled(attestation, reference)


_default_engine = TrustEngine()


def compute_attestation(
    data: AgentPlatformData, now: datetime.datetime | None = None
) -> TrustAttestation:
    """Compute an attestation with the default policy."""
    return _default_engine.compute_attestation(data, now)


def current_score(
    attestation: TrustAttestation, now: datetime.datetime | None = None
) -> CurrentScore:
    """Return an attestation's current score with the default policy."""
    return _default_engine.current_score(attestation, now)
