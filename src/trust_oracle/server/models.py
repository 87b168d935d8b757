"""Pydantic request/response models for the trust-oracle HTTP server."""
from __future__ import annotations

import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from trust_oracle.scoring.clock import coerce_datetime
from trust_oracle.scoring.platform_data import AgentPlatformData
from trust_oracle.scoring.tier import VerificationTier


class AgentMetricsRequest(BaseModel):
    """Request body for POST /trust/calculate and POST /trust/attest.

    Keys are camelCase on the wire (``agentId``, ``dmsSent`` ...); snake_case
    names are accepted too, as are the platform export names ``solanaWallet``,
    ``denMessages`` and ``walletAge``. Counts must be non-negative; values past
    a dimension's saturation point are absorbed by its ceiling.
    ``lastActivityAt`` may be Unix milliseconds or an ISO-8601 string;
    ``verificationTier`` may be 0-4 or a tier name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    agent_id: str = Field(min_length=1)
    agent_name: str
    wallet_address: str = Field(
        validation_alias=AliasChoices("walletAddress", "solanaWallet", "wallet_address")
    )
    last_activity_at: datetime.datetime
    messages: float = Field(
        default=0, ge=0, validation_alias=AliasChoices("messages", "denMessages")
    )
    direct_messages: float = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("dmsSent", "directMessages", "direct_messages"),
    )
    prompt_responses: float = Field(default=0, ge=0)
    verified_skills: float = Field(default=0, ge=0)
    total_skills: float = Field(default=0, ge=0)
    endorsements_received: float = Field(default=0, ge=0)
    endorser_avg_trust: float = Field(default=0, ge=0)
    review_count: float = Field(default=0, ge=0)
    avg_review_score: float = Field(default=0, ge=0)
    uptime_percent: float = Field(default=0, ge=0)
    response_quality: float = Field(default=0, ge=0)
    wallet_age_days: float = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("walletAgeDays", "walletAge", "wallet_age_days"),
    )
    tx_count: float = Field(default=0, ge=0)
    security_audit_passed: bool = False
    audit_score: float = Field(default=0, ge=0)
    account_age_days: float = Field(default=0, ge=0)
    verification_tier: VerificationTier = VerificationTier.UNVERIFIED

    @field_validator("last_activity_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: object) -> datetime.datetime:
        return coerce_datetime(value)

    @field_validator("verification_tier", mode="before")
    @classmethod
    def _parse_tier(cls, value: object) -> VerificationTier:
        return VerificationTier.from_value(value)

    @field_validator("agent_id")
    @classmethod
    def _strip_agent_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("agentId must not be empty")
        return value

    def to_platform_data(self) -> AgentPlatformData:
        """Map the request onto the engine's input structure."""
        return AgentPlatformData(
            agent_id=self.agent_id,
            agent_name=self.agent_name,
            wallet_address=self.wallet_address,
            last_activity_at=self.last_activity_at,
            messages=self.messages,
            direct_messages=self.direct_messages,
            prompt_responses=self.prompt_responses,
            verified_skills=self.verified_skills,
            total_skills=self.total_skills,
            endorsements_received=self.endorsements_received,
            endorser_avg_trust=self.endorser_avg_trust,
            review_count=self.review_count,
            avg_review_score=self.avg_review_score,
            uptime_percent=self.uptime_percent,
            response_quality=self.response_quality,
            wallet_age_days=self.wallet_age_days,
            tx_count=self.tx_count,
            security_audit_passed=self.security_audit_passed,
            audit_score=self.audit_score,
            account_age_days=self.account_age_days,
            verification_tier=self.verification_tier,
        )


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalculateResponse(_CamelModel):
    """Response body for POST /trust/calculate."""

    attestation: dict[str, object]
    onchain: bool = False


class AttestResponse(_CamelModel):
    """Response body for POST /trust/attest."""

    attestation: dict[str, object]
    onchain: bool = True
    signature: str
    address: str


class QueryResponse(_CamelModel):
    """Response body for GET /trust/query/{agentId}."""

    found: bool
    agent_id: str
    attestation: Optional[dict[str, object]] = None
    signature: Optional[str] = None
    block_time: Optional[str] = None
    current_score: Optional[int] = None
    decay_applied: Optional[int] = None
    query_timestamp: str


class AttestationListResponse(_CamelModel):
    """Response body for GET /trust/attestations."""

    attestations: list[dict[str, object]] = Field(default_factory=list)
    count: int = 0


class OracleResponse(_CamelModel):
    """Response body for GET /oracle."""

    public_key: Optional[str] = None
    network: str
    attestation_count: int = 0


class HealthResponse(_CamelModel):
    """Response body for GET /health."""

    status: str = "ok"
    service: str = "trust-oracle"
    version: str = "0.1.0"
    oracle: Optional[str] = None
    network: str = "in-memory"


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str = ""
    endpoints: list[str] = Field(default_factory=list)


__all__ = [
    "AgentMetricsRequest",
    "AttestResponse",
    "AttestationListResponse",
    "CalculateResponse",
    "ErrorResponse",
    "HealthResponse",
    "OracleResponse",
    "QueryResponse",
]
