"""HTTP server mode for trust-oracle.

Provides a lightweight stdlib-based JSON API for scoring agents, publishing
attestations, and querying current scores without requiring any additional
web framework dependencies.
"""
from __future__ import annotations

from trust_oracle.server.app import TrustOracleHandler, create_server, run_server

__all__ = ["TrustOracleHandler", "create_server", "run_server"]
