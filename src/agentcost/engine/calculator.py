"""Results assembly: the single entry point of the engine.

``compute`` is a pure function of the Configuration. It performs no
validation; see ``agentcost.validation`` for the checks a caller is expected
to run first (usage shares summing to 100, positive counts and rates).
"""

from __future__ import annotations

import logging

from agentcost.config.models import (
    AgentMetrics,
    Configuration,
    OpexMetrics,
    Results,
    TokenUsage,
)

from .costs import llm_cost, pro_rate_opex
from .duration import estimate_duration
from .human import estimate_human
from .overhead import compose_overhead
from .parallelism import effective_parallelism
from .tokens import estimate_total_tokens

logger = logging.getLogger(__name__)


def compute(config: Configuration) -> Results:
    """Estimate LLM-agent and human cost/duration for a configuration.

    Division edge cases (zero human cost or duration, zero productivity) are
    not guarded and surface as ``ZeroDivisionError``; negative results from
    out-of-range overhead fractions are returned as-is.

    Args:
        config: Fully populated configuration

    Returns:
        Results
    """
    project = config.project
    constants = config.engine

    total_tokens = estimate_total_tokens(project.total_lines_of_code, project.complexity_class)
    overhead = compose_overhead(config.overheads)
    parallelism = effective_parallelism(config.agent)

    cost = llm_cost(
        config.models,
        total_tokens,
        overhead.final,
        config.agent,
        input_ratio=constants.input_token_ratio,
    )

    duration = estimate_duration(
        total_tokens,
        project.total_lines_of_code,
        overhead.final,
        cost.effective_coordination,
        parallelism.effective_parallelism,
        tokens_per_hour=constants.tokens_per_hour,
        lines_per_request=constants.lines_per_request,
        minutes_per_request=constants.minutes_per_request,
    )

    human = estimate_human(
        config.human,
        project.total_lines_of_code,
        hours_per_day=constants.working_hours_per_day,
        work_week_hours=constants.work_week_hours,
    )

    opex = pro_rate_opex(
        config.overheads.opex,
        duration.llm_duration_hours,
        hours_per_day=constants.processing_hours_per_day,
        days_per_month=constants.days_per_month,
    )

    total_agent_cost = cost.llm_cost + opex.operational_cost

    logger.debug(
        "tokens=%d overhead=%.3f parallelism=%.3f token_h=%.2f request_h=%.2f",
        total_tokens,
        overhead.final,
        parallelism.effective_parallelism,
        duration.token_hours,
        duration.request_hours,
    )

    return Results(
        llm_cost=cost.llm_cost,
        operational_cost=opex.operational_cost,
        total_agent_cost=total_agent_cost,
        human_cost=human.cost,
        llm_duration_hours=duration.llm_duration_hours,
        human_duration_hours=human.duration_hours,
        token_usage=TokenUsage(
            input=duration.effective_tokens * constants.input_token_ratio,
            output=duration.effective_tokens * constants.output_token_ratio,
        ),
        agent_metrics=AgentMetrics(
            total_agents=config.agent.agent_count,
            effective_parallelism=parallelism.effective_parallelism,
            coordination_cost=cost.effective_coordination,
            error_rate=cost.error_multiplier,
            time_reduction=(
                (human.duration_hours - duration.llm_duration_hours) / human.duration_hours
            ),
            cost_increase=total_agent_cost / human.cost - 1,
        ),
        opex_metrics=OpexMetrics(
            monthly_opex=opex.monthly_opex,
            pro_rated_factor=opex.pro_rated_factor,
            project_duration_days=opex.project_duration_days,
        ),
        total_tokens=total_tokens,
        final_overhead=overhead.final,
        model_costs=cost.model_costs,
    )
