"""CLI entry point for trust-oracle.

Invoked as::

    trust-oracle [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m trust_oracle.cli.main

Commands
--------
score     Compute a trust attestation from a JSON metrics file
current   Show the decayed current score of an attestation file
oracle    Create or inspect the oracle signing key
serve     Run the HTTP API
"""
from __future__ import annotations

import datetime
import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console()


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="agent-trust-oracle")
def cli() -> None:
    """Auditable reputation scores for autonomous agents"""


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from trust_oracle import __version__

    console.print(f"[bold]trust-oracle[/bold] v{__version__}")


# ------------------------------------------------------------------
# score
# ------------------------------------------------------------------


@cli.command(name="score")
@click.argument("metrics_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--now",
    default=None,
    help="Reference time as ISO-8601 (defaults to the current time).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the attestation JSON to this file path.",
)
def score_command(metrics_file: str, now: str | None, output: str | None) -> None:
    """Compute a trust attestation from METRICS_FILE (JSON agent metrics)."""
    from pydantic import ValidationError

    from trust_oracle.scoring.engine import TrustEngine
    from trust_oracle.server.models import AgentMetricsRequest

    body = _read_json(metrics_file)
    try:
        request = AgentMetricsRequest.model_validate(body)
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] invalid metrics file: {exc}")
        sys.exit(1)

    engine = TrustEngine()
    attestation = engine.compute_attestation(request.to_platform_data(), _parse_now(now))

    table = Table(title=f"Trust Score — {attestation.agent_id}", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Max", justify="right")
    for component, score in attestation.components.items():
        table.add_row(component.value, str(score), str(engine.policy.cap(component)))

    console.print(table)
    console.print(f"\n  Trust score: [bold]{attestation.trust_score}[/bold]/1000")
    console.print(f"  Tier:        [bold]{attestation.verification_tier.name}[/bold]")
    console.print(f"  Attested:    {attestation.attested_at.isoformat()}")

    if output:
        Path(output).write_text(json.dumps(attestation.to_dict(), indent=2), encoding="utf-8")
        console.print(f"[green]Attestation written to[/green] {output}")


# ------------------------------------------------------------------
# current
# ------------------------------------------------------------------


@cli.command(name="current")
@click.argument("attestation_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--now",
    default=None,
    help="Reference time as ISO-8601 (defaults to the current time).",
)
def current_command(attestation_file: str, now: str | None) -> None:
    """Show the decayed current score of ATTESTATION_FILE."""
    from trust_oracle.scoring.attestation import TrustAttestation
    from trust_oracle.scoring.engine import TrustEngine

    body = _read_json(attestation_file)
    try:
        attestation = TrustAttestation.from_dict(body)
    except (KeyError, TypeError, ValueError) as exc:
        console.print(f"[red]Error:[/red] invalid attestation file: {exc}")
        sys.exit(1)

    result = TrustEngine().current_score(attestation, _parse_now(now))
    console.print(f"  Agent:         [bold]{attestation.agent_id}[/bold]")
    console.print(f"  Issued score:  {attestation.trust_score}")
    console.print(f"  Current score: [bold]{result.current_score}[/bold]")
    console.print(f"  Decay applied: {result.decay_applied}")


# ------------------------------------------------------------------
# oracle command group
# ------------------------------------------------------------------


@cli.group(name="oracle")
def oracle_group() -> None:
    """Manage the oracle signing key."""


@oracle_group.command(name="init")
@click.option("--key-file", type=click.Path(dir_okay=False), default=None, help="Oracle key file.")
def oracle_init_command(key_file: str | None) -> None:
    """Generate an oracle key unless one already exists."""
    from trust_oracle.ledger.keys import OracleKeyStore
    from trust_oracle.server.app import resolve_key_path

    store = OracleKeyStore(resolve_key_path(key_file))
    existed = store.exists()
    try:
        key = store.load_or_create()
    except ValueError as exc:
        console.print(f"[red]Error:[/red] could not load oracle key: {exc}")
        sys.exit(1)

    if existed:
        console.print(f"[yellow]Oracle key already exists at[/yellow] {store.path}")
    else:
        console.print(f"[green]Generated oracle key at[/green] {store.path}")
    console.print(f"  Public key: [bold]{key.public_key}[/bold]")


@oracle_group.command(name="show")
@click.option("--key-file", type=click.Path(dir_okay=False), default=None, help="Oracle key file.")
def oracle_show_command(key_file: str | None) -> None:
    """Print the oracle public key."""
    from trust_oracle.ledger.keys import OracleKeyStore
    from trust_oracle.server.app import resolve_key_path

    store = OracleKeyStore(resolve_key_path(key_file))
    if not store.exists():
        console.print(f"[red]Error:[/red] no oracle key at {store.path}. Run 'oracle init'.")
        sys.exit(1)
    try:
        key = store.load()
    except ValueError as exc:
        console.print(f"[red]Error:[/red] could not load oracle key: {exc}")
        sys.exit(1)
    console.print(f"  Key file:   {store.path}")
    console.print(f"  Public key: [bold]{key.public_key}[/bold]")


# ------------------------------------------------------------------
# serve
# ------------------------------------------------------------------


@cli.command(name="serve")
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address.")
@click.option("--port", type=int, default=3410, show_default=True, help="TCP port.")
@click.option("--key-file", type=click.Path(dir_okay=False), default=None, help="Oracle key file.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    show_default=True,
)
def serve_command(host: str, port: int, key_file: str | None, log_level: str) -> None:
    """Run the trust-oracle HTTP API (blocking)."""
    from trust_oracle.server.app import run_server

    logging.basicConfig(level=getattr(logging, log_level))
    run_server(host=host, port=port, key_file=key_file)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _read_json(path: str) -> dict[str, object]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error:[/red] {path} is not valid JSON: {exc}")
        sys.exit(1)
    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] {path} must contain a JSON object.")
        sys.exit(1)
    return data


def _parse_now(now: str | None) -> datetime.datetime | None:
    if now is None:
        return None
    from trust_oracle.scoring.clock import coerce_datetime

    try:
        return coerce_datetime(now)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] --now: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
