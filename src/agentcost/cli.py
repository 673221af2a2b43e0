"""CLI entry point for agentcost."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from agentcost import __version__
from agentcost.config.loader import (
    PRESET_MODELS,
    configuration_to_dict,
    default_configuration,
    load_configuration,
)
from agentcost.config.models import AgentMode, ComplexityClass
from agentcost.errors import ConfigurationError
from agentcost.session import EstimatorSession

console = Console()

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON configuration file (defaults to ~/.agentcost/config.json if present)",
)


@click.group()
@click.version_option(version=__version__, prog_name="agentcost")
@click.option("--verbose", "-v", is_flag=True, help="Log engine intermediates")
def main(verbose: bool) -> None:
    """agentcost: compare LLM-agent and human development cost."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load_session(config_path: Path | None) -> EstimatorSession:
    return EstimatorSession(load_configuration(config_path))


def _fail(error: ConfigurationError) -> None:
    console.print(f"[red]{error}[/red]")
    for violation in error.violations:
        console.print(f"  - {violation}")
    raise SystemExit(1)


@main.command()
@_config_option
@click.option("--loc", type=int, help="Total lines of code")
@click.option(
    "--complexity",
    type=click.Choice([c.value for c in ComplexityClass]),
    help="Language/domain complexity",
)
@click.option("--mode", type=click.Choice([m.value for m in AgentMode]), help="Agent mode")
@click.option("--agents", type=int, help="Number of agents")
@click.option("--tasks", type=int, help="Maximum parallel tasks")
@click.option("--developers", type=int, help="Number of human developers")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def estimate(
    config_path: Path | None,
    loc: int | None,
    complexity: str | None,
    mode: str | None,
    agents: int | None,
    tasks: int | None,
    developers: int | None,
    as_json: bool,
) -> None:
    """Estimate cost and duration for agents vs. a human team."""
    from agentcost.report import render_report

    overrides: dict[str, dict[str, Any]] = {"project": {}, "agent": {}, "human": {}}
    if loc is not None:
        overrides["project"]["total_lines_of_code"] = loc
    if complexity is not None:
        overrides["project"]["complexity_class"] = complexity
    if mode is not None:
        overrides["agent"]["mode"] = mode
    if agents is not None:
        overrides["agent"]["agent_count"] = agents
    if tasks is not None:
        overrides["agent"]["parallel_tasks"] = tasks
    if developers is not None:
        overrides["human"]["developers"] = developers

    try:
        session = _load_session(config_path)
        session.apply({k: v for k, v in overrides.items() if v})
        results = session.estimate()
    except ConfigurationError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(results.to_dict(), indent=2))
        return

    render_report(results, session.configuration, console)
    for issue in session.issues:
        console.print(f"[yellow]Warning:[/yellow] {issue.violation}")


@main.command()
@_config_option
def validate(config_path: Path | None) -> None:
    """Check a configuration and list violations and warnings."""
    try:
        session = _load_session(config_path)
    except ConfigurationError as e:
        _fail(e)
        return

    issues = session.issues
    if not issues:
        console.print("[green]Configuration is valid.[/green]")
        return

    table = Table(title="Validation")
    table.add_column("Field", style="cyan")
    table.add_column("Action")
    table.add_column("Message")
    for issue in issues:
        color = "red" if issue.action == "reject" else "yellow"
        table.add_row(issue.field or "", f"[{color}]{issue.action}[/{color}]", issue.violation or "")
    console.print(table)

    if not session.is_valid:
        raise SystemExit(1)


@main.command()
def defaults() -> None:
    """Print the default configuration as JSON."""
    click.echo(json.dumps(configuration_to_dict(default_configuration()), indent=2))


@main.command()
@_config_option
def overhead(config_path: Path | None) -> None:
    """Show how the overhead factors compose."""
    from agentcost.engine.overhead import compose_overhead
    from agentcost.report import build_overhead_table

    try:
        config = load_configuration(config_path)
    except ConfigurationError as e:
        _fail(e)
        return

    console.print(build_overhead_table(compose_overhead(config.overheads)))


@main.command()
def presets() -> None:
    """List the preset models."""
    table = Table(title="Preset Models")
    table.add_column("Model", style="cyan")
    table.add_column("In $/1K", justify="right")
    table.add_column("Out $/1K", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Reasoning", justify="right")
    table.add_column("Cache hit", justify="right")

    for model in PRESET_MODELS:
        perf = model.performance
        table.add_row(
            model.name,
            f"{model.input_cost_per_k_tokens:g}",
            f"{model.output_cost_per_k_tokens:g}",
            f"{model.usage_share_percent:g}%",
            f"{perf.accuracy:g}%" if perf else "-",
            f"{perf.reasoning_score:g}" if perf else "-",
            f"{perf.cache_hit_rate:g}%" if perf else "-",
        )

    console.print(table)
