"""Tests for trust_oracle.server.app — HTTP handler integration."""
from __future__ import annotations

import json
import threading
import urllib.error
import urllib.request
from collections.abc import Iterator
from http.server import HTTPServer
from pathlib import Path

import pytest

from trust_oracle.server import routes
from trust_oracle.server.app import (
    KEY_PATH_ENV,
    TrustOracleHandler,
    create_server,
    resolve_key_path,
)


@pytest.fixture(autouse=True)
def reset_server_state() -> None:
    """Reset module-level state before each test."""
    routes.reset_state()


@pytest.fixture()
def base_url(tmp_path: Path) -> Iterator[str]:
    server = create_server(host="127.0.0.1", port=0, key_file=str(tmp_path / "oracle.json"))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def _request(
    url: str, method: str = "GET", body: bytes | None = None
) -> tuple[int, dict[str, str], dict[str, object]]:
    req = urllib.request.Request(url, data=body, method=method)
    if body is not None:
        req.add_header("Content-Type", "application/json")
    try:
        with urllib.request.urlopen(req) as resp:
            raw = resp.read()
            return resp.status, dict(resp.headers), json.loads(raw) if raw else {}
    except urllib.error.HTTPError as exc:
        raw = exc.read()
        return exc.code, dict(exc.headers), json.loads(raw) if raw else {}


class TestCreateServer:
    def test_create_server_returns_http_server(self, tmp_path: Path) -> None:
        server = create_server(host="127.0.0.1", port=0, key_file=str(tmp_path / "k.json"))
        try:
            assert isinstance(server, HTTPServer)
        finally:
            server.server_close()

    def test_create_server_uses_correct_handler(self, tmp_path: Path) -> None:
        server = create_server(host="127.0.0.1", port=0, key_file=str(tmp_path / "k.json"))
        try:
            assert server.RequestHandlerClass is TrustOracleHandler
        finally:
            server.server_close()

    def test_create_server_persists_oracle_key(self, tmp_path: Path) -> None:
        key_file = tmp_path / "k.json"
        server = create_server(host="127.0.0.1", port=0, key_file=str(key_file))
        server.server_close()
        stored = json.loads(key_file.read_text(encoding="utf-8"))
        assert stored["publicKey"] == routes.get_ledger().oracle_public_key


class TestResolveKeyPath:
    def test_explicit_path_wins(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(KEY_PATH_ENV, str(tmp_path / "env.json"))
        assert resolve_key_path(str(tmp_path / "cli.json")) == tmp_path / "cli.json"

    def test_environment_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(KEY_PATH_ENV, str(tmp_path / "env.json"))
        assert resolve_key_path() == tmp_path / "env.json"

    def test_default_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(KEY_PATH_ENV, raising=False)
        assert resolve_key_path().name == "oracle.json"


class TestLiveServer:
    def test_health(self, base_url: str) -> None:
        status, headers, data = _request(f"{base_url}/health")
        assert status == 200
        assert data["status"] == "ok"
        assert headers["Access-Control-Allow-Origin"] == "*"

    def test_options_preflight(self, base_url: str) -> None:
        status, headers, _ = _request(f"{base_url}/trust/attest", method="OPTIONS")
        assert status == 204
        assert "POST" in headers["Access-Control-Allow-Methods"]

    def test_attest_then_query(self, base_url: str) -> None:
        body = json.dumps(
            {
                "agentId": "mr-fox",
                "agentName": "Mr. Fox",
                "walletAddress": "11111111111111111111111111111111",
                "messages": 45,
                "dmsSent": 20,
                "promptResponses": 5,
                "lastActivityAt": "2999-01-01T00:00:00Z",
            }
        ).encode("utf-8")
        status, _, data = _request(f"{base_url}/trust/attest", method="POST", body=body)
        assert status == 201

        status, _, data = _request(f"{base_url}/trust/query/mr-fox")
        assert status == 200
        assert data["currentScore"] == 68
        assert data["decayApplied"] == 0

        status, _, data = _request(f"{base_url}/trust/attestations?limit=5")
        assert status == 200
        assert data["count"] == 1

    def test_invalid_json_returns_400(self, base_url: str) -> None:
        status, _, data = _request(f"{base_url}/trust/calculate", method="POST", body=b"{nope")
        assert status == 400
        assert data["error"] == "Invalid JSON"

    def test_non_object_body_returns_400(self, base_url: str) -> None:
        status, _, _ = _request(f"{base_url}/trust/calculate", method="POST", body=b"[1]")
        assert status == 400

    def test_unknown_route_returns_404(self, base_url: str) -> None:
        status, _, data = _request(f"{base_url}/nope")
        assert status == 404
        assert data["endpoints"] == routes.ENDPOINTS

    def test_non_finite_json_literal_is_absorbed(self, base_url: str) -> None:
        body = (
            b'{"agentId": "inf-agent", "agentName": "Inf", "walletAddress": "w",'
            b' "lastActivityAt": "2999-01-01T00:00:00Z",'
            b' "verifiedSkills": Infinity, "totalSkills": 1}'
        )
        status, _, data = _request(f"{base_url}/trust/calculate", method="POST", body=body)
        assert status == 200
        assert data["attestation"]["skillVerifications"] == 150  # type: ignore[index]

    def test_out_of_range_timestamp_returns_422(self, base_url: str) -> None:
        body = json.dumps(
            {"agentId": "a", "agentName": "A", "walletAddress": "w", "lastActivityAt": 1e22}
        ).encode("utf-8")
        status, _, data = _request(f"{base_url}/trust/calculate", method="POST", body=body)
        assert status == 422
