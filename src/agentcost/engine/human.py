"""Human team cost and duration.

Productivity is reduced by the share of working time spent on meetings,
review, documentation, QA and technical debt, and by a logarithmic
coordination penalty for larger teams.

The overhead fraction is deliberately not clamped: a configuration whose
fractions add up to more than 1 yields negative productivity and therefore
negative duration and cost. Callers must also ensure ``loc_per_day > 0`` and
``developers >= 1``; zero productivity divides by zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from agentcost.config.models import HumanMetrics


@dataclass(frozen=True)
class HumanEstimate:
    overhead_fraction: float
    team_overhead: float
    effective_lines_per_day: float
    working_days: float
    duration_hours: float
    cost: float


def overhead_fraction(metrics: HumanMetrics, work_week_hours: float = 40.0) -> float:
    """Fraction of working time not spent writing code (unclamped)."""
    return (
        (metrics.meetings_per_week or 0.0) / work_week_hours
        + (metrics.code_review_time or 0.0)
        + (metrics.documentation_time or 0.0)
        + (metrics.qa_time or 0.0)
        + (metrics.technical_debt_time or 0.0)
    )


def team_overhead(developers: int) -> float:
    """Coordination penalty; exactly 1 for a single developer."""
    if developers > 1:
        return 1 + math.log2(developers) * 0.1
    return 1.0


def estimate_human(
    metrics: HumanMetrics,
    total_lines_of_code: int,
    hours_per_day: float = 8.0,
    work_week_hours: float = 40.0,
) -> HumanEstimate:
    """Duration and cost for the human team to write the project."""
    fraction = overhead_fraction(metrics, work_week_hours)
    team = team_overhead(metrics.developers)

    effective_lines = (metrics.loc_per_day * metrics.developers * (1 - fraction)) / team
    working_days = total_lines_of_code / effective_lines
    hours = working_days * hours_per_day

    return HumanEstimate(
        overhead_fraction=fraction,
        team_overhead=team,
        effective_lines_per_day=effective_lines,
        working_days=working_days,
        duration_hours=hours,
        cost=hours * metrics.hourly_rate * metrics.developers * team,
    )
