"""Unit tests for trust_oracle.scoring.engine — TrustEngine and AttestationAssembler."""
from __future__ import annotations

import dataclasses
import datetime
from collections.abc import Callable

import pytest

from trust_oracle.scoring.attestation import TrustAttestation
from trust_oracle.scoring.components import ACTIVITY_COMPONENTS, DEFAULT_CAPS, ScoreComponent
from trust_oracle.scoring.engine import TrustEngine, compute_attestation, current_score
from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.policy import ScoringPolicy
from trust_oracle.scoring.tier import VerificationTier

MakeData = Callable[..., AgentPlatformData]


@pytest.fixture()
def engine() -> TrustEngine:
    return TrustEngine()


@pytest.fixture()
def active_agent(make_data: MakeData) -> AgentPlatformData:
    return make_data(
        agent_id="optimus",
        agent_name="Optimus",
        messages=150,
        direct_messages=80,
        prompt_responses=12,
        verified_skills=6,
        total_skills=6,
        endorsements_received=5,
        endorser_avg_trust=600,
        review_count=3,
        avg_review_score=4.5,
        uptime_percent=99,
        response_quality=90,
        wallet_age_days=30,
        tx_count=50,
        security_audit_passed=False,
        audit_score=0,
        account_age_days=15,
        verification_tier=VerificationTier.VERIFIED,
    )


# ---------------------------------------------------------------------------
# compute_attestation
# ---------------------------------------------------------------------------


class TestComputeAttestation:
    def test_component_breakdown(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(active_agent, now)
        assert attestation.components == {
            ScoreComponent.PLATFORM_ACTIVITY: 150,
            ScoreComponent.SKILL_VERIFICATIONS: 130,
            ScoreComponent.ENDORSEMENTS: 64,
            ScoreComponent.REVIEWS: 83,
            ScoreComponent.DEPLOYMENT_METRICS: 142,
            ScoreComponent.ONCHAIN_REPUTATION: 29,
            ScoreComponent.SECURITY_AUDIT: 0,
            ScoreComponent.ACCOUNT_AGE: 4,
        }
        assert attestation.trust_score == 602

    def test_trust_score_is_exact_sum(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        stale = dataclasses.replace(
            active_agent, last_activity_at=now - datetime.timedelta(days=97)
        )
        attestation = engine.compute_attestation(stale, now)
        assert attestation.trust_score == sum(attestation.components.values())

    def test_identity_and_metadata_copied(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(active_agent, now)
        assert attestation.agent_id == "optimus"
        assert attestation.agent_name == "Optimus"
        assert attestation.wallet_address == active_agent.wallet_address
        assert attestation.verification_tier is VerificationTier.VERIFIED
        assert attestation.last_activity_at == active_agent.last_activity_at
        assert attestation.attested_at == now
        assert attestation.attested_by == "trust-oracle"
        assert attestation.version == 1
        assert attestation.decay_rate == pytest.approx(5.0)

    def test_tier_is_never_derived_from_score(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        data = dataclasses.replace(maxed_data, verification_tier=VerificationTier.UNVERIFIED)
        attestation = engine.compute_attestation(data, now)
        assert attestation.trust_score == 1000
        assert attestation.verification_tier is VerificationTier.UNVERIFIED

    def test_maxed_agent_scores_1000(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        assert engine.compute_attestation(maxed_data, now).trust_score == 1000

    def test_activity_components_decay_at_issuance(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        stale = dataclasses.replace(
            maxed_data, last_activity_at=now - datetime.timedelta(days=60)
        )
        attestation = engine.compute_attestation(stale, now)
        components = attestation.components
        for component in ACTIVITY_COMPONENTS:
            assert components[component] == 135
        assert components[ScoreComponent.SKILL_VERIFICATIONS] == 150
        assert components[ScoreComponent.ONCHAIN_REPUTATION] == 100
        assert components[ScoreComponent.SECURITY_AUDIT] == 100
        assert components[ScoreComponent.ACCOUNT_AGE] == 50
        assert attestation.trust_score == 940

    def test_zero_metrics_do_not_raise(
        self, engine: TrustEngine, make_data: MakeData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(make_data(), now)
        assert attestation.trust_score == 0

    def test_idempotent_for_same_input_and_now(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        first = engine.compute_attestation(active_agent, now)
        second = engine.compute_attestation(active_agent, now)
        assert first == second

    def test_default_now_is_utc_aware(
        self, engine: TrustEngine, active_agent: AgentPlatformData
    ) -> None:
        attestation = engine.compute_attestation(active_agent)
        assert attestation.attested_at.tzinfo is not None

    def test_attestation_is_immutable(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(active_agent, now)
        with pytest.raises(dataclasses.FrozenInstanceError):
            attestation.trust_score = 1  # type: ignore[misc]

    def test_scores_within_bounds_across_inputs(
        self, engine: TrustEngine, make_data: MakeData, now: datetime.datetime
    ) -> None:
        for scale in (0, 0.3, 1, 2.7, 50):
            data = make_data(
                messages=100 * scale,
                direct_messages=50 * scale,
                prompt_responses=10 * scale,
                verified_skills=4 * scale,
                total_skills=8 * scale,
                endorsements_received=20 * scale,
                endorser_avg_trust=300 * scale,
                review_count=15 * scale,
                avg_review_score=2 * scale,
                uptime_percent=40 * scale,
                response_quality=30 * scale,
                wallet_age_days=365 * scale,
                tx_count=100 * scale,
                security_audit_passed=True,
                audit_score=60 * scale,
                account_age_days=180 * scale,
                last_activity_at=now - datetime.timedelta(days=20 * scale),
            )
            attestation = engine.compute_attestation(data, now)
            for component, score in attestation.components.items():
                assert 0 <= score <= DEFAULT_CAPS[component]
            assert 0 <= attestation.trust_score <= 1000
            assert attestation.trust_score == sum(attestation.components.values())


# ---------------------------------------------------------------------------
# current_score
# ---------------------------------------------------------------------------


class TestCurrentScore:
    def test_fresh_activity_has_no_decay(
        self, engine: TrustEngine, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(active_agent, now)
        result = engine.current_score(attestation, now)
        assert result.current_score == attestation.trust_score
        assert result.decay_applied == 0

    def test_decay_counts_from_last_activity(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        stale = dataclasses.replace(
            maxed_data, last_activity_at=now - datetime.timedelta(days=60)
        )
        attestation = engine.compute_attestation(stale, now)
        # Pooled 540 * 0.9025 = 487.35 on top of 400 durable points
        result = engine.current_score(attestation, now)
        assert result.current_score == 887
        assert result.decay_applied == 53

    def test_later_query_decays_further(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(maxed_data, now)
        one_month = engine.current_score(attestation, now + datetime.timedelta(days=30))
        six_months = engine.current_score(attestation, now + datetime.timedelta(days=180))
        assert attestation.trust_score > one_month.current_score > six_months.current_score

    def test_current_score_within_bounds(
        self, engine: TrustEngine, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(maxed_data, now)
        result = engine.current_score(attestation, now + datetime.timedelta(days=36500))
        assert 400 <= result.current_score <= 1000
        assert result.decay_applied >= 0


# ---------------------------------------------------------------------------
# Policy injection and module-level helpers
# ---------------------------------------------------------------------------


class TestPolicyInjection:
    def test_invalid_caps_rejected(self) -> None:
        caps = dict(DEFAULT_CAPS)
        caps[ScoreComponent.ACCOUNT_AGE] = 75
        with pytest.raises(ValueError, match="sum to 1000"):
            TrustEngine(ScoringPolicy(caps=caps))

    def test_zero_decay_rate_disables_decay(
        self, maxed_data: AgentPlatformData, now: datetime.datetime
    ) -> None:
        engine = TrustEngine(ScoringPolicy(decay_rate_monthly=0.0))
        stale = dataclasses.replace(
            maxed_data, last_activity_at=now - datetime.timedelta(days=365)
        )
        attestation = engine.compute_attestation(stale, now)
        assert attestation.trust_score == 1000
        assert attestation.decay_rate == 0.0

    def test_custom_issuer(self, maxed_data: AgentPlatformData, now: datetime.datetime) -> None:
        engine = TrustEngine(ScoringPolicy(issuer="staging-oracle"))
        assert engine.compute_attestation(maxed_data, now).attested_by == "staging-oracle"


class TestModuleHelpers:
    def test_compute_attestation_uses_default_engine(
        self, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = compute_attestation(active_agent, now)
        assert isinstance(attestation, TrustAttestation)
        assert attestation.trust_score == 602

    def test_current_score_uses_default_engine(
        self, active_agent: AgentPlatformData, now: datetime.datetime
    ) -> None:
        attestation = compute_attestation(active_agent, now)
        assert current_score(attestation, now).decay_applied == 0


class TestOutOfDomainInputs:
    def test_infinite_metrics_are_absorbed(
        self, engine: TrustEngine, make_data: MakeData, now: datetime.datetime
    ) -> None:
        data = make_data(
            endorser_avg_trust=float("inf"),
            verified_skills=float("inf"),
            total_skills=1,
        )
        attestation = engine.compute_attestation(data, now)
        assert attestation.endorsements == 150
        assert attestation.skill_verifications == 150
        assert attestation.trust_score == sum(attestation.components.values())

    def test_nan_metrics_score_zero(
        self, engine: TrustEngine, make_data: MakeData, now: datetime.datetime
    ) -> None:
        attestation = engine.compute_attestation(make_data(messages=float("nan")), now)
        assert attestation.platform_activity == 0
        assert attestation.trust_score == 0
