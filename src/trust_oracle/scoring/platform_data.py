"""AgentPlatformData — raw platform metrics for one agent.

Every field participates in exactly one scoring formula. The scoring engine
accepts values as-is: negative counts or out-of-range ratios are absorbed by
the saturating formulas and final clamps rather than rejected. Shape
validation is the job of whoever builds the object (see
:mod:`trust_oracle.server.models`).
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass

from trust_oracle.scoring.tier import VerificationTier


@dataclass(frozen=True)
class AgentPlatformData:
    """Raw metrics for a single agent at a point in time.

    Parameters
    ----------
    agent_id:
        Opaque platform identifier for the agent.
    agent_name:
        Human-readable display name.
    wallet_address:
        Address of the agent on the destination chain.
    last_activity_at:
        UTC datetime of the agent's most recent observed activity.
    messages:
        Public messages posted on the platform.
    direct_messages:
        Direct messages sent.
    prompt_responses:
        Responses to platform prompts.
    verified_skills, total_skills:
        Verified and declared skill counts.
    endorsements_received:
        Number of peer endorsements.
    endorser_avg_trust:
        Average composite trust of the endorsers (0 - 1000).
    review_count:
        Number of reviews received.
    avg_review_score:
        Average review rating (0 - 5).
    uptime_percent:
        Deployment uptime (0 - 100).
    response_quality:
        Measured response quality (0 - 100).
    wallet_age_days:
        Age of the on-chain wallet in days.
    tx_count:
        On-chain transaction count.
    security_audit_passed:
        Whether the agent passed a security audit.
    audit_score:
        Score from that audit (0 - 100).
    account_age_days:
        Age of the platform account in days.
    verification_tier:
        Assurance tier, carried through unchanged.
    """

    agent_id: str
    agent_name: str
    wallet_address: str
    last_activity_at: datetime.datetime
    messages: float = 0
    direct_messages: float = 0
    prompt_responses: float = 0
    verified_skills: float = 0
    total_skills: float = 0
    endorsements_received: float = 0
    endorser_avg_trust: float = 0
    review_count: float = 0
    avg_review_score: float = 0
    uptime_percent: float = 0
    response_quality: float = 0
    wallet_age_days: float = 0
    tx_count: float = 0
    security_audit_passed: bool = False
    audit_score: float = 0
    account_age_days: float = 0
    verification_tier: VerificationTier = VerificationTier.UNVERIFIED
