"""Overhead composition.

All rewrite, retry, bug-fix, testing and process factors multiply into a
single scalar that inflates both token volume and LLM cost. A quality term
and an optimization scalar are applied last; they are the only terms that can
pull the result below the primary composite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from agentcost.config.models import OptimizationLevel, OverheadFactors

# Used when an advanced factor is missing
ADVANCED_DEFAULTS: Final[dict[str, float]] = {
    "context_switch_overhead": 1.8,
    "tooling_overhead": 2.2,
    "documentation_overhead": 1.6,
    "review_overhead": 1.9,
    "complexity_factor": 2.4,
}

DEFAULT_QUALITY_THRESHOLD: Final[float] = 0.85
DEBUGGING_MULTIPLIER: Final[float] = 1.5

OPTIMIZATION_SCALARS: Final[dict[str, float]] = {
    OptimizationLevel.MINIMAL: 1.0,
    OptimizationLevel.BALANCED: 0.9,
    OptimizationLevel.AGGRESSIVE: 0.8,
}
DEFAULT_OPTIMIZATION_LEVEL: Final[str] = OptimizationLevel.BALANCED


@dataclass(frozen=True)
class OverheadBreakdown:
    """Intermediate values of the overhead composition."""

    primary_composite: float  # iteration x retry x bug-fix x testing
    composite: float  # all factors, including debugging mode
    quality_adjusted: float
    optimization_scalar: float
    final: float


def primary_composite(overheads: OverheadFactors) -> float:
    """Product of the four primary factors (the overhead step's preview value)."""
    return (
        overheads.iteration_overhead
        * overheads.retry_factor
        * overheads.bug_fix_overhead
        * overheads.testing_overhead
    )


def _advanced(overheads: OverheadFactors, name: str) -> float:
    value = getattr(overheads, name)
    return ADVANCED_DEFAULTS[name] if value is None else value


def optimization_scalar(level: str | None) -> float:
    """Scalar for an optimization level; unknown or missing levels use the default."""
    if level is None:
        level = DEFAULT_OPTIMIZATION_LEVEL
    return OPTIMIZATION_SCALARS.get(str(level), OPTIMIZATION_SCALARS[DEFAULT_OPTIMIZATION_LEVEL])


def compose_overhead(overheads: OverheadFactors) -> OverheadBreakdown:
    """Combine every overhead factor into the final multiplier.

    Args:
        overheads: Overhead factors (advanced fields may be None)

    Returns:
        OverheadBreakdown whose ``final`` field is the multiplier the rest of
        the engine uses
    """
    primary = primary_composite(overheads)

    composite = primary
    for name in ADVANCED_DEFAULTS:
        composite *= _advanced(overheads, name)
    if overheads.debugging_mode:
        composite *= DEBUGGING_MULTIPLIER

    quality = (
        DEFAULT_QUALITY_THRESHOLD
        if overheads.quality_threshold is None
        else overheads.quality_threshold
    )
    quality_adjusted = composite * (1 + (1 - quality))

    scalar = optimization_scalar(overheads.optimization_level)

    return OverheadBreakdown(
        primary_composite=primary,
        composite=composite,
        quality_adjusted=quality_adjusted,
        optimization_scalar=scalar,
        final=quality_adjusted * scalar,
    )
