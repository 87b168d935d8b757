#!/usr/bin/env python3
"""Example: Attest and Query

Publishes signed attestations for two agents to an in-memory ledger, then
reads them back and verifies the oracle signatures.

Usage:
    python examples/02_attest_and_query.py

Requirements:
    pip install agent-trust-oracle
"""
from __future__ import annotations

import datetime

from trust_oracle import (
    AgentPlatformData,
    InMemoryLedger,
    OracleKey,
    TrustEngine,
    VerificationTier,
)


def main() -> None:
    now = datetime.datetime.now(datetime.timezone.utc)

    # Step 1: Create an oracle key and a ledger signed by it
    ledger = InMemoryLedger(OracleKey.generate())
    print(f"Oracle: {ledger.oracle_public_key}")

    agents = [
        AgentPlatformData(
            agent_id="optimus-will",
            agent_name="OptimusWill",
            wallet_address="FxfNUY8kahJsnWwKnUJv4r8feJNqvLbvVenQCqGHnjyh",
            last_activity_at=now - datetime.timedelta(minutes=30),
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
            account_age_days=15,
            verification_tier=VerificationTier.VERIFIED,
        ),
        AgentPlatformData(
            agent_id="mr-fox",
            agent_name="Mr. Fox",
            wallet_address="11111111111111111111111111111111",
            last_activity_at=now - datetime.timedelta(hours=2),
            messages=45,
            direct_messages=20,
            prompt_responses=5,
            verified_skills=3,
            total_skills=5,
            endorsements_received=2,
            endorser_avg_trust=500,
            review_count=1,
            avg_review_score=4.0,
            uptime_percent=95,
            response_quality=80,
            wallet_age_days=10,
            tx_count=15,
            account_age_days=12,
            verification_tier=VerificationTier.BASIC,
        ),
    ]

    # Step 2: Score and publish each agent
    engine = TrustEngine()
    for data in agents:
        attestation = engine.compute_attestation(data, now)
        signature = ledger.publish(attestation)
        print(f"\n--- {data.agent_name} ---")
        print(f"  Trust score: {attestation.trust_score}/1000")
        print(f"  Signature:   {signature[:20]}...")

    # Step 3: Read back and verify
    print("\n--- Reading attestations from the ledger ---")
    for published in ledger.read_attestations(10):
        attestation = published.attestation
        current = engine.current_score(attestation)
        print(
            f"  {attestation.agent_name}: score={attestation.trust_score}"
            f" current={current.current_score} verified={ledger.verify(published)}"
        )


if __name__ == "__main__":
    main()
