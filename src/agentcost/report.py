"""Comparison report: formatting helpers and rich rendering of Results."""

from __future__ import annotations

import math
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from agentcost.config.models import Configuration, Results
from agentcost.engine.overhead import OverheadBreakdown


@dataclass(frozen=True)
class Savings:
    """Headline comparison between the agent and human estimates."""

    cost_savings: float  # human cost - total agent cost
    time_savings_hours: float
    cost_reduction: float | None  # fraction; None when human cost is zero


def summarize(results: Results) -> Savings:
    cost_reduction = (
        1 - results.total_agent_cost / results.human_cost if results.human_cost else None
    )
    return Savings(
        cost_savings=results.human_cost - results.total_agent_cost,
        time_savings_hours=results.human_duration_hours - results.llm_duration_hours,
        cost_reduction=cost_reduction,
    )


# ═══════════════════════════════════════════════════════════════════════════
# FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


def format_currency(amount: float) -> str:
    """USD with two decimals and thousands separators, e.g. ``-$1,234.50``."""
    if not math.isfinite(amount):
        return "n/a"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_number(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    return f"{round(value):,}"


def format_percent(fraction: float | None) -> str:
    if fraction is None or not math.isfinite(fraction):
        return "n/a"
    return f"{round(fraction * 100)}%"


def format_duration(hours: float) -> str:
    """Human-friendly duration.

    Under an hour is shown in minutes, under a day in hours, otherwise in
    days plus remaining hours. Negative durations keep a leading minus.
    """
    if not math.isfinite(hours):
        return "n/a"
    if hours < 0:
        return f"-{format_duration(-hours)}"
    if hours < 1:
        return f"{round(hours * 60)} minutes"
    if hours < 24:
        return f"{round(hours)} hours"
    days = math.floor(hours / 24)
    remaining = round(hours % 24)
    return f"{days} days" + (f" {remaining} hours" if remaining > 0 else "")


# ═══════════════════════════════════════════════════════════════════════════
# RENDERING
# ═══════════════════════════════════════════════════════════════════════════


def build_comparison_table(results: Results, config: Configuration) -> Table:
    table = Table(title=f"Cost Analysis: {config.project.name}")
    table.add_column("", style="bold")
    table.add_column("LLM Agents", style="cyan", justify="right")
    table.add_column("Human Team", style="green", justify="right")

    developers = config.human.developers
    table.add_row("LLM cost", format_currency(results.llm_cost), "")
    table.add_row("Operational cost", format_currency(results.operational_cost), "")
    table.add_row(
        "Total cost",
        format_currency(results.total_agent_cost),
        format_currency(results.human_cost),
    )
    table.add_row(
        "Duration",
        format_duration(results.llm_duration_hours),
        format_duration(results.human_duration_hours),
    )
    table.add_row(
        "Team",
        f"{results.agent_metrics.total_agents} agent"
        f"{'s' if results.agent_metrics.total_agents > 1 else ''} ({config.agent.mode})",
        f"{developers} developer{'s' if developers > 1 else ''}",
    )
    table.add_row("Input tokens", format_number(results.token_usage.input), "")
    table.add_row("Output tokens", format_number(results.token_usage.output), "")
    return table


def build_model_table(results: Results, config: Configuration) -> Table:
    table = Table(title="Models")
    table.add_column("Model", style="cyan")
    table.add_column("Share", justify="right")
    table.add_column("In $/1K", justify="right")
    table.add_column("Out $/1K", justify="right")
    table.add_column("Base cost", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Error rate", justify="right")

    for model, cost in zip(config.models, results.model_costs):
        perf = model.performance
        table.add_row(
            model.name,
            f"{model.usage_share_percent:g}%",
            f"{model.input_cost_per_k_tokens:g}",
            f"{model.output_cost_per_k_tokens:g}",
            format_currency(cost.cost),
            f"{perf.accuracy:g}%" if perf else "-",
            f"{perf.error_rate:g}%" if perf else "-",
        )
    return table


def build_overhead_table(breakdown: OverheadBreakdown) -> Table:
    table = Table(title="Overhead")
    table.add_column("Stage", style="bold")
    table.add_column("Multiplier", justify="right", style="yellow")
    table.add_row("Primary composite (Ω)", f"{breakdown.primary_composite:,.2f}x")
    table.add_row("All factors", f"{breakdown.composite:,.2f}x")
    table.add_row("Quality adjusted", f"{breakdown.quality_adjusted:,.2f}x")
    table.add_row("Optimization scalar", f"{breakdown.optimization_scalar:.2f}")
    table.add_row("Final", f"{breakdown.final:,.2f}x")
    return table


def render_report(results: Results, config: Configuration, console: Console) -> None:
    """Print the full comparison report."""
    console.print(build_comparison_table(results, config))
    console.print(build_model_table(results, config))

    metrics = results.agent_metrics
    savings = summarize(results)
    opex = results.opex_metrics

    console.print(
        Panel(
            f"Effective parallelism: [bold]{metrics.effective_parallelism:.1f}x[/bold]\n"
            f"Coordination overhead: {metrics.coordination_cost:.2f}x  "
            f"Error multiplier: {metrics.error_rate:.2f}x\n"
            f"Time reduction: [bold]{format_percent(metrics.time_reduction)}[/bold]  "
            f"Cost impact: [bold]{format_percent(metrics.cost_increase)}[/bold]",
            title="Agent Configuration Impact",
        )
    )
    console.print(
        Panel(
            f"Monthly OPEX: {format_currency(opex.monthly_opex)}  "
            f"Pro-rated: {opex.pro_rated_factor:.3f} of a month "
            f"({opex.project_duration_days:.1f} days)",
            title="Operational Expenses",
        )
    )

    color = "green" if savings.cost_savings >= 0 else "red"
    console.print(
        Panel(
            f"Cost savings: [{color}]{format_currency(savings.cost_savings)}[/{color}]\n"
            f"Time savings: {format_duration(savings.time_savings_hours)}\n"
            f"Cost reduction: {format_percent(savings.cost_reduction)}",
            title="Cost Analysis",
        )
    )
