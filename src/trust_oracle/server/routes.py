"""Route handler functions for the trust-oracle HTTP server.

Each function accepts parsed request data and returns a tuple of
(status_code, response_dict). The HTTP handler in app.py calls these
functions and serializes the results to JSON.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from trust_oracle import __version__
from trust_oracle.ledger.errors import AttestationNotFoundError, LedgerError
from trust_oracle.ledger.keys import OracleKey
from trust_oracle.ledger.memo import attestation_address
from trust_oracle.ledger.transport import InMemoryLedger
from trust_oracle.scoring.clock import utc_now
from trust_oracle.scoring.engine import TrustEngine
from trust_oracle.server.models import (
    AgentMetricsRequest,
    AttestationListResponse,
    AttestResponse,
    CalculateResponse,
    ErrorResponse,
    HealthResponse,
    OracleResponse,
    QueryResponse,
)

logger = logging.getLogger(__name__)

ENDPOINTS: list[str] = [
    "GET  /health",
    "GET  /oracle",
    "POST /trust/calculate",
    "POST /trust/attest",
    "GET  /trust/query/:agentId",
    "GET  /trust/attestations",
]

DEFAULT_LIST_LIMIT = 20
QUERY_SCAN_LIMIT = 50

_Response = tuple[int, dict[str, object]]

# Module-level shared state
_engine: TrustEngine = TrustEngine()
_ledger: InMemoryLedger | None = None


def configure(
    ledger: InMemoryLedger | None = None, engine: TrustEngine | None = None
) -> None:
    """Install the ledger and engine used by the route handlers."""
    global _engine, _ledger
    if ledger is not None:
        _ledger = ledger
    if engine is not None:
        _engine = engine


def reset_state() -> None:
    """Reset all shared state; a fresh ledger is created on next use."""
    global _engine, _ledger
    _engine = TrustEngine()
    _ledger = None


def get_ledger() -> InMemoryLedger:
    """Return the installed ledger, creating one with an ephemeral key if unset."""
    global _ledger
    if _ledger is None:
        _ledger = InMemoryLedger(OracleKey.generate())
    return _ledger


def _error(
    status: int, error: str, detail: str = "", endpoints: list[str] | None = None
) -> _Response:
    response = ErrorResponse(error=error, detail=detail, endpoints=endpoints or [])
    return status, response.model_dump()


def _parse_metrics(body: dict[str, object]) -> AgentMetricsRequest | _Response:
    try:
        return AgentMetricsRequest.model_validate(body)
    except ValidationError as exc:
        return _error(422, "Validation error", str(exc))


def handle_health() -> _Response:
    """Handle GET /health."""
    ledger = get_ledger()
    response = HealthResponse(
        version=__version__,
        oracle=ledger.oracle_public_key,
        network=ledger.network,
    )
    return 200, response.model_dump(by_alias=True)


def handle_oracle() -> _Response:
    """Handle GET /oracle."""
    ledger = get_ledger()
    response = OracleResponse(
        public_key=ledger.oracle_public_key,
        network=ledger.network,
        attestation_count=len(ledger),
    )
    return 200, response.model_dump(by_alias=True)


def handle_calculate(body: dict[str, object]) -> _Response:
    """Handle POST /trust/calculate — score without publishing.

    Parameters
    ----------
    body:
        Parsed JSON request body of agent metrics.

    Returns
    -------
    tuple[int, dict[str, object]]
        HTTP status code and response dictionary.
    """
    parsed = _parse_metrics(body)
    if isinstance(parsed, tuple):
        return parsed
    attestation = _engine.compute_attestation(parsed.to_platform_data())
    response = CalculateResponse(attestation=attestation.to_dict(), onchain=False)
    return 200, response.model_dump(by_alias=True)


def handle_attest(body: dict[str, object]) -> _Response:
    """Handle POST /trust/attest — score and publish to the ledger.

    Parameters
    ----------
    body:
        Parsed JSON request body of agent metrics.

    Returns
    -------
    tuple[int, dict[str, object]]
        HTTP status code and response dictionary.
    """
    parsed = _parse_metrics(body)
    if isinstance(parsed, tuple):
        return parsed
    attestation = _engine.compute_attestation(parsed.to_platform_data())
    try:
        signature = get_ledger().publish(attestation)
    except LedgerError as exc:
        logger.error("Publishing attestation for %s failed: %s", attestation.agent_id, exc)
        return _error(500, "Ledger error", str(exc))

    response = AttestResponse(
        attestation=attestation.to_dict(),
        onchain=True,
        signature=signature,
        address=attestation_address(attestation.agent_id),
    )
    return 201, response.model_dump(by_alias=True)


def handle_query(agent_id: str) -> _Response:
    """Handle GET /trust/query/{agentId}.

    Looks up the newest published attestation for the agent among recent
    ledger entries and reports its decayed current score.
    """
    now = utc_now()
    try:
        published = get_ledger().find(agent_id, limit=QUERY_SCAN_LIMIT)
    except AttestationNotFoundError:
        response = QueryResponse(
            found=False, agent_id=agent_id, query_timestamp=now.isoformat()
        )
        return 404, response.model_dump(by_alias=True, exclude_none=True)
    except LedgerError as exc:
        return _error(500, "Ledger error", str(exc))

    current = _engine.current_score(published.attestation, now)
    response = QueryResponse(
        found=True,
        agent_id=agent_id,
        attestation=published.attestation.to_dict(),
        signature=published.signature,
        block_time=published.block_time.isoformat(),
        current_score=current.current_score,
        decay_applied=current.decay_applied,
        query_timestamp=now.isoformat(),
    )
    return 200, response.model_dump(by_alias=True)


def handle_list(limit: str | None = None) -> _Response:
    """Handle GET /trust/attestations?limit=N."""
    if limit is None:
        count = DEFAULT_LIST_LIMIT
    else:
        try:
            count = int(limit)
        except ValueError:
            return _error(422, "Validation error", f"limit must be an integer, got {limit!r}")
        if count < 1:
            return _error(422, "Validation error", "limit must be at least 1")

    try:
        published = get_ledger().read_attestations(count)
    except LedgerError as exc:
        return _error(500, "Ledger error", str(exc))

    response = AttestationListResponse(
        attestations=[p.to_dict() for p in published], count=len(published)
    )
    return 200, response.model_dump(by_alias=True)


def handle_not_found(method: str, path: str) -> _Response:
    return _error(404, "Not found", f"No route for {method} {path}", endpoints=ENDPOINTS)


__all__ = [
    "ENDPOINTS",
    "configure",
    "get_ledger",
    "handle_attest",
    "handle_calculate",
    "handle_health",
    "handle_list",
    "handle_not_found",
    "handle_oracle",
    "handle_query",
    "reset_state",
]
