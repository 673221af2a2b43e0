"""LLM cost accumulation and OPEX pro-rating."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, fields

from agentcost.config.models import AgentConfig, AgentMode, ModelCost, ModelPricing, OpexCosts


@dataclass(frozen=True)
class LLMCostResult:
    """LLM cost with the multipliers applied to the base."""

    base_cost: float
    model_costs: tuple[ModelCost, ...]
    effective_coordination: float
    error_multiplier: float
    llm_cost: float


@dataclass(frozen=True)
class OpexResult:
    monthly_opex: float
    project_duration_days: float
    pro_rated_factor: float
    operational_cost: float


# ═══════════════════════════════════════════════════════════════════════════
# LLM COSTS
# ═══════════════════════════════════════════════════════════════════════════


def model_cost(model: ModelPricing, total_tokens: float, input_ratio: float = 0.3) -> ModelCost:
    """Cost of one model's share of the tokens. Prices are per 1K tokens."""
    model_tokens = total_tokens * (model.usage_share_percent / 100)
    input_tokens = model_tokens * input_ratio
    output_tokens = model_tokens * (1 - input_ratio)

    cost = (input_tokens * model.input_cost_per_k_tokens / 1000) + (
        output_tokens * model.output_cost_per_k_tokens / 1000
    )
    return ModelCost(
        name=model.name,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cost=cost,
    )


def error_multiplier(error_propagation: float, agent_count: int, learning_rate: float) -> float:
    """How errors compound across agents, offset by learning. Never below 1."""
    spread = math.log2(agent_count) if agent_count > 1 else 0.0
    compounded = 1 + (error_propagation - 1) * spread
    return max(1.0, compounded * (1 - learning_rate * 0.3))


def effective_coordination(agent: AgentConfig) -> float:
    """Coordination overhead; a single agent has nobody to coordinate with."""
    return 1.0 if agent.mode == AgentMode.SINGLE else agent.coordination_overhead


def llm_cost(
    models: Sequence[ModelPricing],
    total_tokens: float,
    final_overhead: float,
    agent: AgentConfig,
    input_ratio: float = 0.3,
) -> LLMCostResult:
    """Weighted LLM cost across all models.

    Args:
        models: Priced models whose usage shares sum to 100
        total_tokens: Tokens before overhead
        final_overhead: Output of the overhead composer
        agent: Agent configuration
        input_ratio: Fraction of tokens billed at the input price

    Returns:
        LLMCostResult
    """
    per_model = tuple(model_cost(m, total_tokens, input_ratio) for m in models)
    base = sum(m.cost for m in per_model)
    coordination = effective_coordination(agent)
    errors = error_multiplier(agent.error_propagation, agent.agent_count, agent.learning_rate)

    return LLMCostResult(
        base_cost=base,
        model_costs=per_model,
        effective_coordination=coordination,
        error_multiplier=errors,
        llm_cost=base * final_overhead * coordination * errors,
    )


# ═══════════════════════════════════════════════════════════════════════════
# OPEX
# ═══════════════════════════════════════════════════════════════════════════


def monthly_opex(opex: OpexCosts) -> float:
    """Sum of the monthly line items; missing items count as zero."""
    return sum(getattr(opex, f.name) or 0.0 for f in fields(opex))


def pro_rate_opex(
    opex: OpexCosts,
    llm_duration_hours: float,
    hours_per_day: float = 24.0,
    days_per_month: float = 30.0,
) -> OpexResult:
    """Charge the monthly OPEX for the fraction of a month the agents run."""
    monthly = monthly_opex(opex)
    days = llm_duration_hours / hours_per_day
    factor = days / days_per_month
    return OpexResult(
        monthly_opex=monthly,
        project_duration_days=days,
        pro_rated_factor=factor,
        operational_cost=monthly * factor,
    )
