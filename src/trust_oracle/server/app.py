"""HTTP server for trust-oracle using stdlib http.server.

Routes:
    GET    /health                  — health check
    GET    /oracle                  — oracle public key and ledger size
    POST   /trust/calculate         — score agent metrics (dry run)
    POST   /trust/attest            — score and publish an attestation
    GET    /trust/query/{agentId}   — latest attestation with current score
    GET    /trust/attestations      — recent attestations (?limit=N)

Usage:
    python -m trust_oracle.server.app --port 3410
    python -m trust_oracle.server.app --host 127.0.0.1 --key-file ./oracle.json
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import re
import urllib.parse
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from trust_oracle.ledger.keys import OracleKeyStore
from trust_oracle.ledger.transport import InMemoryLedger
from trust_oracle.server import routes

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3410
DEFAULT_KEY_PATH = Path("~/.config/trust-oracle/oracle.json")
KEY_PATH_ENV = "TRUST_ORACLE_KEY_PATH"

# URL pattern for /trust/query/{agentId}
_QUERY_ID_PATTERN = re.compile(r"^/trust/query/([^/]+)$")

_CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class TrustOracleHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the trust-oracle server.

    All request bodies and responses use JSON. Every response carries a
    permissive CORS origin header.
    """

    def log_message(self, format: str, *args: object) -> None:
        """Override to route access logs through the Python logging system."""
        logger.debug(format, *args)

    # ── OPTIONS ───────────────────────────────────────────────────────────────

    def do_OPTIONS(self) -> None:
        """Answer CORS preflight requests."""
        self.send_response(204)
        for name, value in _CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header("Content-Length", "0")
        self.end_headers()

    # ── GET ───────────────────────────────────────────────────────────────────

    def do_GET(self) -> None:
        """Handle all GET requests by routing on the URL path."""
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path.rstrip("/")
        params = urllib.parse.parse_qs(parsed.query)

        if path == "/health":
            status, data = routes.handle_health()
        elif path == "/oracle":
            status, data = routes.handle_oracle()
        elif path == "/trust/attestations":
            status, data = routes.handle_list(self._first_param(params, "limit"))
        else:
            match = _QUERY_ID_PATTERN.match(path)
            if match:
                agent_id = urllib.parse.unquote(match.group(1))
                status, data = routes.handle_query(agent_id)
            else:
                status, data = routes.handle_not_found("GET", path)
        self._send_json(status, data)

    # ── POST ──────────────────────────────────────────────────────────────────

    def do_POST(self) -> None:
        """Handle all POST requests by routing on the URL path."""
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path.rstrip("/")

        body = self._read_json_body()
        if body is None:
            return

        if path == "/trust/calculate":
            status, data = routes.handle_calculate(body)
        elif path == "/trust/attest":
            status, data = routes.handle_attest(body)
        else:
            status, data = routes.handle_not_found("POST", path)
        self._send_json(status, data)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _send_json(self, status: int, data: dict[str, object]) -> None:
        """Serialize *data* to JSON and send an HTTP response with *status*."""
        body = json.dumps(data, default=str).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        for name, value in _CORS_HEADERS.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def _read_json_body(self) -> dict[str, object] | None:
        """Read and parse the JSON request body.

        Returns None (and sends a 400 error response) if parsing fails or
        the body is not a JSON object.
        """
        content_length = int(self.headers.get("Content-Length", 0))
        if content_length == 0:
            return {}

        raw = self.rfile.read(content_length)
        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self._send_json(400, {"error": "Invalid JSON", "detail": str(exc)})
            return None
        if not isinstance(parsed, dict):
            self._send_json(
                400, {"error": "Invalid JSON", "detail": "Request body must be an object."}
            )
            return None
        return parsed

    @staticmethod
    def _first_param(params: dict[str, list[str]], key: str) -> str | None:
        """Return the first value for *key* from query parameters, or None."""
        values = params.get(key)
        return values[0] if values else None


def resolve_key_path(key_file: str | None = None) -> Path:
    """Return the oracle key path from an explicit option, the environment, or the default."""
    if key_file:
        return Path(key_file).expanduser()
    env_path = os.environ.get(KEY_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_KEY_PATH.expanduser()


def create_server(
    host: str = "0.0.0.0",
    port: int = DEFAULT_PORT,
    key_file: str | None = None,
) -> ThreadingHTTPServer:
    """Create (but do not start) the trust-oracle HTTP server.

    Loads the oracle key from *key_file* (generating one if absent) and
    installs a fresh ledger signed by it.

    Parameters
    ----------
    host:
        Bind address (default ``"0.0.0.0"``, all interfaces).
    port:
        TCP port to listen on (default 3410).
    key_file:
        Oracle key file. Falls back to ``$TRUST_ORACLE_KEY_PATH`` and then
        ``~/.config/trust-oracle/oracle.json``.

    Returns
    -------
    ThreadingHTTPServer
        A configured server instance ready to call ``serve_forever()`` on.
    """
    key = OracleKeyStore(resolve_key_path(key_file)).load_or_create()
    routes.configure(ledger=InMemoryLedger(key))
    server = ThreadingHTTPServer((host, port), TrustOracleHandler)
    logger.info("trust-oracle server created at http://%s:%d", host, port)
    return server


def run_server(
    host: str = "0.0.0.0",
    port: int = DEFAULT_PORT,
    key_file: str | None = None,
) -> None:
    """Create and run the trust-oracle HTTP server (blocking)."""
    server = create_server(host=host, port=port, key_file=key_file)
    logger.info("Oracle: %s", routes.get_ledger().oracle_public_key)
    logger.info("Serving trust-oracle on http://%s:%d (Ctrl-C to stop)", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down trust-oracle server.")
    finally:
        server.server_close()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="trust-oracle HTTP server",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port")
    parser.add_argument("--key-file", default=None, help="Oracle key file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


if __name__ == "__main__":
    args = _build_arg_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))
    run_server(host=args.host, port=args.port, key_file=args.key_file)
