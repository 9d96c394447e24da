#!/usr/bin/env python3
"""Meme Prophet CLI - run flows and inspect tier gating from the terminal.

Usage:
    # List the flow catalog
    python main.py flows

    # Show what a tier unlocks
    python main.py features --tier Pro

    # Run a flow
    python main.py run getCoinTradingSignal --input '{"coinName": "Dogecoin"}' --tier Premium
    python main.py run detectMarketAnomalies --input @anomaly_request.json --tier Pro
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import configure_logging, settings
from contracts import Tier
from engine import FlowError, FlowExecutor, UpstreamFailure
from flows import build_registry
from gating import TierGate
from providers import get_invoker, list_providers


console = Console()

TIER_CHOICES = [tier.value for tier in Tier.ordered()]


def read_input_payload(raw: Optional[str]) -> Dict[str, Any]:
    """Parse --input: literal JSON, or @path to a JSON file."""
    if not raw:
        return {}
    if raw.startswith("@"):
        raw = Path(raw[1:]).read_text(encoding="utf-8")
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise click.BadParameter("input must be a JSON object", param_hint="--input")
    return payload


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output"
)
def cli(verbose: bool):
    """Meme Prophet: schema-validated AI flows with tier gating."""
    configure_logging(level="DEBUG" if verbose else None)


@cli.command("flows")
def list_flows():
    """List registered flows and the tier each needs."""
    registry = build_registry()
    gate = TierGate()

    table = Table(title="Flows")
    table.add_column("Flow", style="bold")
    table.add_column("Feature")
    table.add_column("Minimum tier")
    table.add_column("Description", style="dim")
    for definition in registry:
        feature = definition.feature or "-"
        minimum = gate.required_tier(definition.feature).value if definition.feature else "-"
        table.add_row(definition.name, feature, minimum, definition.description)
    console.print(table)


@cli.command("features")
@click.option(
    "--tier", "-t",
    type=click.Choice(TIER_CHOICES),
    default=Tier.FREE.value,
    help="Subscription tier (default: Free)"
)
def list_features(tier: str):
    """Show which features a tier unlocks."""
    gate = TierGate()
    current = Tier(tier)
    locked = gate.locked_features(current)

    table = Table(title=f"Features for {current.value}")
    table.add_column("Feature", style="bold")
    table.add_column("Status")
    table.add_column("Unlock with")
    for feature_id in gate.feature_ids:
        rule = gate.rule(feature_id)
        if feature_id in locked:
            status = "[red]✗ Locked[/red]"
            unlock = gate.required_tier(feature_id).value
        else:
            status = "[green]✓ Unlocked[/green]"
            unlock = ""
        table.add_row(rule.label or feature_id, status, unlock)
    console.print(table)

    quota = gate.signal_quota(current)
    console.print(f"\n[dim]Live signals shown:[/dim] {'all' if quota is None else quota}")


@cli.command("run")
@click.argument("flow_name")
@click.option(
    "--input", "-i", "input_payload",
    default=None,
    help="Flow input as a JSON object, or @path to a JSON file"
)
@click.option(
    "--tier", "-t",
    type=click.Choice(TIER_CHOICES),
    default=None,
    help="Caller's subscription tier (default: Free)"
)
@click.option(
    "--provider", "-p",
    type=click.Choice(sorted(list_providers())),
    default=None,
    help=f"LLM provider (default model: {settings.default_model})"
)
@click.option(
    "--model",
    default=None,
    help="Model name (e.g., gpt-4o, gemini-2.5-flash, claude-sonnet)"
)
def run_flow(
    flow_name: str,
    input_payload: Optional[str],
    tier: Optional[str],
    provider: Optional[str],
    model: Optional[str],
):
    """Execute FLOW_NAME and print its normalized output."""
    try:
        raw_input = read_input_payload(input_payload)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: could not read input: {e}[/red]")
        sys.exit(1)

    executor = FlowExecutor(
        registry=build_registry(),
        invoker=get_invoker(provider_name=provider, model=model),
        gate=TierGate(),
    )

    console.print(Panel.fit(
        f"[bold blue]{flow_name}[/bold blue]\n"
        f"[dim]Tier: {tier or Tier.FREE.value}[/dim]",
        border_style="blue"
    ))

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Running flow...", total=None)
            output = executor.execute(
                flow_name,
                raw_input,
                tier=Tier(tier) if tier else None,
            )
            progress.update(task, completed=True)
    except UpstreamFailure as e:
        console.print(f"[yellow]Model call failed ({e.kind.value}), try again:[/yellow] {e}")
        sys.exit(1)
    except FlowError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        sys.exit(1)

    console.print_json(json.dumps(output))


if __name__ == "__main__":
    cli()
