"""Shared fixtures for trust-oracle tests."""
from __future__ import annotations

import datetime
from collections.abc import Callable

import pytest

from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.tier import VerificationTier

NOW = datetime.datetime(2026, 3, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture()
def now() -> datetime.datetime:
    return NOW


@pytest.fixture()
def make_data() -> Callable[..., AgentPlatformData]:
    """Factory for AgentPlatformData with zeroed metrics and activity at NOW."""

    def _make(**overrides: object) -> AgentPlatformData:
        fields: dict[str, object] = {
            "agent_id": "agent-001",
            "agent_name": "Agent One",
            "wallet_address": "FxfNUY8kahJsnWwKnUJv4r8feJNqvLbvVenQCqGHnjyh",
            "last_activity_at": NOW,
        }
        fields.update(overrides)
        return AgentPlatformData(**fields)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def maxed_data(make_data: Callable[..., AgentPlatformData]) -> AgentPlatformData:
    """Metrics that saturate every dimension."""
    return make_data(
        messages=100,
        direct_messages=50,
        prompt_responses=10,
        verified_skills=10,
        total_skills=10,
        endorsements_received=20,
        endorser_avg_trust=1000,
        review_count=15,
        avg_review_score=5,
        uptime_percent=100,
        response_quality=100,
        wallet_age_days=365,
        tx_count=100,
        security_audit_passed=True,
        audit_score=100,
        account_age_days=180,
        verification_tier=VerificationTier.ENTERPRISE,
    )
