"""Cost/duration computation engine."""

from agentcost.engine.calculator import compute
from agentcost.engine.costs import (
    LLMCostResult,
    OpexResult,
    effective_coordination,
    error_multiplier,
    llm_cost,
    model_cost,
    monthly_opex,
    pro_rate_opex,
)
from agentcost.engine.duration import (
    DurationResult,
    estimate_duration,
    request_bound_hours,
    request_count,
    token_bound_hours,
)
from agentcost.engine.human import HumanEstimate, estimate_human, overhead_fraction, team_overhead
from agentcost.engine.overhead import (
    OverheadBreakdown,
    compose_overhead,
    optimization_scalar,
    primary_composite,
)
from agentcost.engine.parallelism import (
    ParallelismResult,
    base_factor,
    communication_efficiency,
    diminishing_factor,
    effective_parallelism,
    memory_efficiency,
    resource_efficiency,
)
from agentcost.engine.tokens import estimate_total_tokens, tokens_per_line

__all__ = [
    "DurationResult",
    "HumanEstimate",
    "LLMCostResult",
    "OpexResult",
    "OverheadBreakdown",
    "ParallelismResult",
    "base_factor",
    "communication_efficiency",
    "compose_overhead",
    "compute",
    "diminishing_factor",
    "effective_coordination",
    "effective_parallelism",
    "error_multiplier",
    "estimate_duration",
    "estimate_human",
    "estimate_total_tokens",
    "llm_cost",
    "memory_efficiency",
    "model_cost",
    "monthly_opex",
    "optimization_scalar",
    "overhead_fraction",
    "primary_composite",
    "pro_rate_opex",
    "request_bound_hours",
    "request_count",
    "resource_efficiency",
    "team_overhead",
    "token_bound_hours",
    "tokens_per_line",
]
