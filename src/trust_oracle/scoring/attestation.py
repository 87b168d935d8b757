"""TrustAttestation — the immutable output record of the scoring engine.

An attestation is created once by :class:`~trust_oracle.scoring.engine.TrustEngine`
and never mutated afterwards. Re-scoring an agent produces a brand-new
attestation with a new issuance timestamp.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass

from trust_oracle.scoring.clock import coerce_datetime
from trust_oracle.scoring.components import ACTIVITY_COMPONENTS, ScoreComponent
from trust_oracle.scoring.tier import VerificationTier


@dataclass(frozen=True)
class TrustAttestation:
    """Computed composite trust score for a single agent.

    Parameters
    ----------
    agent_id, agent_name, wallet_address:
        Identity fields copied from the input metrics.
    trust_score:
        Composite score (0 - 1000); the exact sum of the eight sub-scores.
    platform_activity, endorsements, reviews, deployment_metrics:
        Activity-based sub-scores (0 - 150 each), decayed at issuance.
    skill_verifications:
        Durable sub-score (0 - 150).
    onchain_reputation, security_audit:
        Durable sub-scores (0 - 100 each).
    account_age:
        Durable sub-score (0 - 50).
    verification_tier:
        Tier copied from the input.
    attested_at:
        UTC datetime the attestation was computed.
    attested_by:
        Issuer identifier.
    version:
        Attestation version. Always 1 at issuance.
    last_activity_at:
        Last-activity timestamp copied from the input, used for decay.
    decay_rate:
        Monthly decay rate as a percentage.
    """

    agent_id: str
    agent_name: str
    wallet_address: str
    trust_score: int
    platform_activity: int
    skill_verifications: int
    endorsements: int
    reviews: int
    deployment_metrics: int
    onchain_reputation: int
    security_audit: int
    account_age: int
    verification_tier: VerificationTier
    attested_at: datetime.datetime
    attested_by: str
    version: int
    last_activity_at: datetime.datetime
    decay_rate: float

    @property
    def components(self) -> dict[ScoreComponent, int]:
        """The eight sub-scores keyed by ScoreComponent."""
        return {
            ScoreComponent.PLATFORM_ACTIVITY: self.platform_activity,
            ScoreComponent.SKILL_VERIFICATIONS: self.skill_verifications,
            ScoreComponent.ENDORSEMENTS: self.endorsements,
            ScoreComponent.REVIEWS: self.reviews,
            ScoreComponent.DEPLOYMENT_METRICS: self.deployment_metrics,
            ScoreComponent.ONCHAIN_REPUTATION: self.onchain_reputation,
            ScoreComponent.SECURITY_AUDIT: self.security_audit,
            ScoreComponent.ACCOUNT_AGE: self.account_age,
        }

    @property
    def activity_subtotal(self) -> int:
        """Sum of the four activity-based sub-scores as stored."""
        components = self.components
        return sum(components[c] for c in ACTIVITY_COMPONENTS)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary with camelCase keys."""
        data: dict[str, object] = {
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "walletAddress": self.wallet_address,
            "trustScore": self.trust_score,
        }
        data.update({c.value: score for c, score in self.components.items()})
        data.update(
            {
                "verificationTier": int(self.verification_tier),
                "attestedAt": self.attested_at.isoformat(),
                "attestedBy": self.attested_by,
                "version": self.version,
                "lastActivityAt": self.last_activity_at.isoformat(),
                "decayRate": self.decay_rate,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> TrustAttestation:
        """Rebuild an attestation from :meth:`to_dict` output.

        Timestamps may be ISO-8601 strings or Unix milliseconds.

        Raises
        ------
        KeyError
            If a required key is missing.
        ValueError
            If a timestamp or tier cannot be parsed.
        """
        return cls(
            agent_id=str(data["agentId"]),
            agent_name=str(data["agentName"]),
            wallet_address=str(data["walletAddress"]),
            trust_score=int(data["trustScore"]),  # type: ignore[arg-type]
            platform_activity=int(data["platformActivity"]),  # type: ignore[arg-type]
            skill_verifications=int(data["skillVerifications"]),  # type: ignore[arg-type]
            endorsements=int(data["endorsements"]),  # type: ignore[arg-type]
            reviews=int(data["reviews"]),  # type: ignore[arg-type]
            deployment_metrics=int(data["deploymentMetrics"]),  # type: ignore[arg-type]
            onchain_reputation=int(data["onchainReputation"]),  # type: ignore[arg-type]
            security_audit=int(data["securityAudit"]),  # type: ignore[arg-type]
            account_age=int(data["accountAge"]),  # type: ignore[arg-type]
            verification_tier=VerificationTier.from_value(data["verificationTier"]),
            attested_at=coerce_datetime(data["attestedAt"]),
            attested_by=str(data["attestedBy"]),
            version=int(data.get("version", 1)),  # type: ignore[arg-type]
            last_activity_at=coerce_datetime(data["lastActivityAt"]),
            decay_rate=float(data["decayRate"]),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class CurrentScore:
    """Query-time view of an attestation after decay.

    Parameters
    ----------
    current_score:
        The attestation's trust score with fresh decay applied (0 - 1000).
    decay_applied:
        Points lost to decay since issuance (``trust_score - current_score``).
    """

    current_score: int
    decay_applied: int

    def to_dict(self) -> dict[str, int]:
        return {"currentScore": self.current_score, "decayApplied": self.decay_applied}
