#!/usr/bin/env python3
"""Example: Quickstart

Scores one agent with the default policy and shows how its score decays
after a quiet period.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install agent-trust-oracle
"""
from __future__ import annotations

import datetime

import trust_oracle
from trust_oracle import AgentPlatformData, VerificationTier, compute_attestation, current_score


def main() -> None:
    print(f"trust-oracle version: {trust_oracle.__version__}")

    now = datetime.datetime.now(datetime.timezone.utc)

    # Step 1: Describe the agent's platform metrics
    data = AgentPlatformData(
        agent_id="analytics-agent-v2",
        agent_name="Analytics Agent",
        wallet_address="FxfNUY8kahJsnWwKnUJv4r8feJNqvLbvVenQCqGHnjyh",
        last_activity_at=now - datetime.timedelta(days=2),
        messages=60,
        direct_messages=25,
        prompt_responses=4,
        verified_skills=3,
        total_skills=4,
        uptime_percent=97,
        response_quality=85,
        account_age_days=40,
        verification_tier=VerificationTier.BASIC,
    )

    # Step 2: Issue an attestation
    attestation = compute_attestation(data, now)
    print(f"\nTrust score: {attestation.trust_score}/1000")
    for component, score in attestation.components.items():
        print(f"  {component.value}: {score}")

    # Step 3: Ask for the current score three months later
    later = now + datetime.timedelta(days=90)
    result = current_score(attestation, later)
    print(f"\nAfter 90 quiet days:")
    print(f"  Current score: {result.current_score}")
    print(f"  Decay applied: {result.decay_applied}")


if __name__ == "__main__":
    main()
