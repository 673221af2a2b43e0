"""Tests for the cost/duration engine components."""

from __future__ import annotations

import pytest

from agentcost.config.models import (
    AgentConfig,
    HumanMetrics,
    ModelPricing,
    OpexCosts,
    OverheadFactors,
)
from agentcost.engine import (
    base_factor,
    communication_efficiency,
    compose_overhead,
    diminishing_factor,
    effective_coordination,
    effective_parallelism,
    error_multiplier,
    estimate_duration,
    estimate_human,
    estimate_total_tokens,
    llm_cost,
    memory_efficiency,
    monthly_opex,
    optimization_scalar,
    overhead_fraction,
    primary_composite,
    pro_rate_opex,
    request_bound_hours,
    request_count,
    resource_efficiency,
    team_overhead,
    token_bound_hours,
    tokens_per_line,
)


class TestTokenEstimator:
    """Test tokens-per-line lookup and token totals."""

    @pytest.mark.parametrize(
        ("complexity", "expected"),
        [("simple", 3), ("moderate", 5), ("complex", 8), ("high-verbosity", 12)],
    )
    def test_known_classes(self, complexity: str, expected: int) -> None:
        assert tokens_per_line(complexity) == expected

    @pytest.mark.parametrize("complexity", ["", "cobol", "MODERATE", None])
    def test_unknown_class_defaults_to_five(self, complexity: str | None) -> None:
        assert tokens_per_line(complexity) == 5

    def test_moderate_project_tokens(self) -> None:
        """10,000 moderate lines produce 50,000 tokens."""
        assert estimate_total_tokens(10000, "moderate") == 50000

    def test_zero_lines(self) -> None:
        assert estimate_total_tokens(0, "complex") == 0


class TestOverheadComposer:
    """Test overhead composition."""

    def test_default_factors(self) -> None:
        """Defaults multiply all nine factors, then quality and optimization terms."""
        breakdown = compose_overhead(OverheadFactors())

        primary = 3.5 * 3.2 * 3.8 * 3.4
        composite = primary * 1.8 * 2.2 * 1.6 * 1.9 * 2.4
        assert breakdown.primary_composite == pytest.approx(primary)
        assert breakdown.composite == pytest.approx(composite)
        assert breakdown.quality_adjusted == pytest.approx(composite * 1.15)
        assert breakdown.optimization_scalar == 0.9
        assert breakdown.final == pytest.approx(composite * 1.15 * 0.9)

    def test_primary_composite_preview(self) -> None:
        overheads = OverheadFactors(
            iteration_overhead=1.5, retry_factor=1.1, bug_fix_overhead=1.2, testing_overhead=1.3
        )
        assert primary_composite(overheads) == pytest.approx(1.5 * 1.1 * 1.2 * 1.3)

    def test_missing_advanced_factors_use_defaults(self) -> None:
        explicit = compose_overhead(OverheadFactors())
        missing = compose_overhead(
            OverheadFactors(
                context_switch_overhead=None,
                tooling_overhead=None,
                documentation_overhead=None,
                review_overhead=None,
                complexity_factor=None,
                quality_threshold=None,
                optimization_level=None,
            )
        )
        assert missing.final == pytest.approx(explicit.final)

    def test_debugging_mode(self) -> None:
        base = compose_overhead(OverheadFactors())
        debug = compose_overhead(OverheadFactors(debugging_mode=True))
        assert debug.composite == pytest.approx(base.composite * 1.5)

    def test_quality_threshold(self) -> None:
        """Lower quality thresholds add overhead: 0.5 -> x1.5."""
        breakdown = compose_overhead(OverheadFactors(quality_threshold=0.5))
        assert breakdown.quality_adjusted == pytest.approx(breakdown.composite * 1.5)

    def test_perfect_quality_adds_nothing(self) -> None:
        breakdown = compose_overhead(OverheadFactors(quality_threshold=1.0))
        assert breakdown.quality_adjusted == pytest.approx(breakdown.composite)

    @pytest.mark.parametrize(
        ("level", "scalar"),
        [("minimal", 1.0), ("balanced", 0.9), ("aggressive", 0.8), ("turbo", 0.9), (None, 0.9)],
    )
    def test_optimization_scalar(self, level: str | None, scalar: float) -> None:
        assert optimization_scalar(level) == scalar

    def test_optimization_can_reduce_below_primary(self) -> None:
        """Quality and optimization terms are the only ones that shrink overhead."""
        overheads = OverheadFactors(
            iteration_overhead=1.0,
            retry_factor=1.0,
            bug_fix_overhead=1.0,
            testing_overhead=1.0,
            context_switch_overhead=1.0,
            tooling_overhead=1.0,
            documentation_overhead=1.0,
            review_overhead=1.0,
            complexity_factor=1.0,
            quality_threshold=1.0,
            optimization_level="aggressive",
        )
        assert compose_overhead(overheads).final == pytest.approx(0.8)


class TestAgentParallelization:
    """Test the agent parallelization model."""

    def test_single_base_factor(self) -> None:
        assert base_factor("single", 10, 10, 2.0) == 1.0

    def test_parallel_base_factor(self) -> None:
        """min(4, 2) * 0.8"""
        assert base_factor("parallel", 4, 2, 1.0) == pytest.approx(1.6)

    def test_swarm_base_factor(self) -> None:
        """Swarms take up to 1.5x the task limit: min(10, 6) * 1.2"""
        assert base_factor("swarm", 10, 4, 1.2) == pytest.approx(7.2)

    def test_swarm_limited_by_agents(self) -> None:
        assert base_factor("swarm", 3, 4, 1.0) == pytest.approx(3.0)

    def test_concurrent_base_factor(self) -> None:
        """min(5, 3.6) * 0.9"""
        assert base_factor("concurrent", 5, 3, 1.0) == pytest.approx(3.24)

    def test_unknown_mode_acts_as_single(self) -> None:
        assert base_factor("hive-mind", 8, 8, 1.0) == 1.0

    def test_memory_efficiency(self) -> None:
        """1 + log2(2) * 0.1 + 2 * 0.05 + 0.1"""
        assert memory_efficiency(2048, 7200, "adaptive") == pytest.approx(1.3)

    def test_memory_retention_is_capped(self) -> None:
        assert memory_efficiency(1024, 36000, "lru") == memory_efficiency(1024, 7200, "lru")

    def test_memory_small_cache_penalty(self) -> None:
        assert memory_efficiency(512, 0, "lru") == pytest.approx(0.9)

    def test_memory_pruning_bonus(self) -> None:
        assert memory_efficiency(1024, 0, "priority") == pytest.approx(1.05)
        assert memory_efficiency(1024, 0, "unknown") == pytest.approx(1.0)

    def test_communication_efficiency(self) -> None:
        assert communication_efficiency("p2p", 0.5) == pytest.approx(1.1 * 1.1)
        assert communication_efficiency("hierarchical", 0.0) == pytest.approx(1.15)
        assert communication_efficiency("carrier-pigeon", 0.0) == pytest.approx(1.0)

    def test_resource_efficiency(self) -> None:
        assert resource_efficiency("predictive", 1.0) == pytest.approx(1.2 * 1.15)
        assert resource_efficiency("dynamic", 0.0) == pytest.approx(1.1)
        assert resource_efficiency("static", 0.0) == pytest.approx(1.0)

    def test_diminishing_factor(self) -> None:
        assert diminishing_factor(1) == 1.0
        assert diminishing_factor(10) == pytest.approx(0.5)
        assert diminishing_factor(100) == pytest.approx(1 / 3)
        assert diminishing_factor(0) == 1.0

    def test_single_mode_is_product_of_efficiencies(self) -> None:
        """With one agent the diminishing term is exactly 1."""
        agent = AgentConfig()
        result = effective_parallelism(agent)

        expected = (
            result.memory_efficiency * result.communication_efficiency * result.resource_efficiency
        )
        assert result.base_factor == 1.0
        assert result.diminishing_factor == 1.0
        assert result.effective_parallelism == pytest.approx(expected)
        # Defaults: 1.05 * 1.02 * 1.075
        assert result.effective_parallelism == pytest.approx(1.05 * 1.02 * 1.075)

    def test_large_pool_diminishing_returns(self) -> None:
        """Ten parallel agents on ten tasks: 8 * (0.5 + 0.5 * 0.5)."""
        agent = AgentConfig(
            mode="parallel",
            agent_count=10,
            parallel_tasks=10,
            learning_rate=0.0,
            specialization=0.0,
        )
        result = effective_parallelism(agent)

        assert result.base_factor == pytest.approx(8.0)
        memory = result.memory_efficiency
        assert result.effective_parallelism == pytest.approx(8.0 * 0.75 * memory)

    def test_more_agents_never_hurts_below_task_limit(self) -> None:
        two = effective_parallelism(AgentConfig(mode="parallel", agent_count=2, parallel_tasks=8))
        eight = effective_parallelism(AgentConfig(mode="parallel", agent_count=8, parallel_tasks=8))
        assert eight.effective_parallelism > two.effective_parallelism > 0


class TestLLMCost:
    """Test LLM cost accumulation."""

    def test_single_model_cost(self) -> None:
        """0.3 * 50000 * 0.005/1000 + 0.7 * 50000 * 0.015/1000 = 0.075 + 0.525"""
        model = ModelPricing("m", 0.005, 0.015, 100.0)
        agent = AgentConfig(mode="single", error_propagation=1.0, learning_rate=0.0)

        result = llm_cost([model], 50000, 1.0, agent)

        assert result.model_costs[0].input_tokens == pytest.approx(15000)
        assert result.model_costs[0].output_tokens == pytest.approx(35000)
        assert result.base_cost == pytest.approx(0.6)
        assert result.llm_cost == pytest.approx(0.6)

    def test_weighted_by_usage_share(self) -> None:
        expensive = ModelPricing("a", 0.03, 0.06, 60.0)
        cheap = ModelPricing("b", 0.001, 0.002, 40.0)
        agent = AgentConfig(error_propagation=1.0, learning_rate=0.0)

        result = llm_cost([expensive, cheap], 100000, 1.0, agent)

        expected_a = 60000 * 0.3 * 0.03 / 1000 + 60000 * 0.7 * 0.06 / 1000
        expected_b = 40000 * 0.3 * 0.001 / 1000 + 40000 * 0.7 * 0.002 / 1000
        assert result.model_costs[0].cost == pytest.approx(expected_a)
        assert result.model_costs[1].cost == pytest.approx(expected_b)
        assert result.base_cost == pytest.approx(expected_a + expected_b)

    def test_multipliers_applied(self) -> None:
        model = ModelPricing("m", 0.005, 0.015, 100.0)
        agent = AgentConfig(
            mode="parallel",
            agent_count=4,
            parallel_tasks=4,
            coordination_overhead=1.25,
            error_propagation=1.2,
            learning_rate=0.1,
        )

        result = llm_cost([model], 50000, 2.0, agent)

        assert result.effective_coordination == 1.25
        assert result.error_multiplier == pytest.approx(1.4 * 0.97)
        assert result.llm_cost == pytest.approx(0.6 * 2.0 * 1.25 * 1.4 * 0.97)

    def test_single_mode_ignores_coordination(self) -> None:
        """Configured coordination overhead does not apply to a single agent."""
        for count in (1, 5):
            agent = AgentConfig(mode="single", agent_count=count, coordination_overhead=3.0)
            assert effective_coordination(agent) == 1.0

    def test_error_multiplier_floor(self) -> None:
        """Learning can offset compounding errors but never below 1."""
        assert error_multiplier(1.0, 8, 0.5) == 1.0
        assert error_multiplier(1.0, 1, 0.1) == 1.0

    def test_error_multiplier_single_agent(self) -> None:
        assert error_multiplier(2.0, 1, 0.0) == 1.0

    def test_error_multiplier_compounds_with_agents(self) -> None:
        assert error_multiplier(1.5, 8, 0.0) == pytest.approx(1 + 0.5 * 3)


class TestDuration:
    """Test token-bound and request-bound duration estimates."""

    def test_request_count_rounds_up(self) -> None:
        assert request_count(101) == 3
        assert request_count(100) == 2
        assert request_count(0) == 0

    def test_request_bound_hours(self) -> None:
        """200 requests at 5 minutes each."""
        assert request_bound_hours(10000) == pytest.approx(200 * 5 / 60)

    def test_token_bound_hours(self) -> None:
        assert token_bound_hours(50000, 1.0, 1.0, 1.0) == pytest.approx(50000 / 30000)
        assert token_bound_hours(50000, 2.0, 1.5, 3.0) == pytest.approx(150000 / 90000)

    def test_request_bound_wins_for_small_token_volume(self) -> None:
        result = estimate_duration(50000, 10000, 1.0, 1.0, 1.0)
        assert result.llm_duration_hours == pytest.approx(result.request_hours)
        assert result.request_hours > result.token_hours

    def test_token_bound_wins_with_heavy_overhead(self) -> None:
        result = estimate_duration(50000, 10000, 100.0, 1.0, 1.0)
        assert result.llm_duration_hours == pytest.approx(5_000_000 / 30000)
        assert result.effective_tokens == pytest.approx(5_000_000)

    def test_tunable_throughput(self) -> None:
        result = estimate_duration(
            60000, 0, 1.0, 1.0, 1.0, tokens_per_hour=60000, lines_per_request=10
        )
        assert result.token_hours == pytest.approx(1.0)
        assert result.request_hours == 0


class TestHumanEstimator:
    """Test human cost and duration."""

    def test_single_developer_has_no_team_overhead(self) -> None:
        assert team_overhead(1) == 1.0

    def test_team_overhead(self) -> None:
        assert team_overhead(4) == pytest.approx(1.2)
        assert team_overhead(8) == pytest.approx(1.3)

    def test_overhead_fraction(self) -> None:
        """Defaults: 5/40 + 0.2 + 0.1 + 0.15 + 0.1"""
        assert overhead_fraction(HumanMetrics()) == pytest.approx(0.675)

    def test_missing_fractions_count_as_zero(self) -> None:
        metrics = HumanMetrics(
            meetings_per_week=None,
            code_review_time=None,
            documentation_time=None,
            qa_time=None,
            technical_debt_time=None,
        )
        assert overhead_fraction(metrics) == 0.0

    def test_team_estimate(self) -> None:
        metrics = HumanMetrics(
            hourly_rate=80,
            loc_per_day=50,
            developers=4,
            meetings_per_week=0,
            code_review_time=0,
            documentation_time=0,
            qa_time=0,
            technical_debt_time=0,
        )
        estimate = estimate_human(metrics, 10000)

        assert estimate.effective_lines_per_day == pytest.approx(200 / 1.2)
        assert estimate.working_days == pytest.approx(60)
        assert estimate.duration_hours == pytest.approx(480)
        assert estimate.cost == pytest.approx(480 * 80 * 4 * 1.2)

    def test_default_estimate(self) -> None:
        estimate = estimate_human(HumanMetrics(), 10000)
        lines = 50 * (1 - 0.675)
        assert estimate.duration_hours == pytest.approx(10000 / lines * 8)
        assert estimate.cost == pytest.approx(10000 / lines * 8 * 80)

    def test_overhead_fraction_above_one_is_not_clamped(self) -> None:
        """Heavy meeting load yields negative productivity, duration and cost."""
        metrics = HumanMetrics(meetings_per_week=20)  # 0.5 + 0.55 = 1.05
        estimate = estimate_human(metrics, 10000)

        assert estimate.overhead_fraction == pytest.approx(1.05)
        assert estimate.effective_lines_per_day == pytest.approx(-2.5)
        assert estimate.duration_hours == pytest.approx(-32000)
        assert estimate.cost < 0

    def test_zero_productivity_divides_by_zero(self) -> None:
        """Exactly 100% overhead is a precondition violation, not clamped."""
        metrics = HumanMetrics(
            meetings_per_week=0,
            code_review_time=0.5,
            documentation_time=0.5,
            qa_time=0,
            technical_debt_time=0,
        )
        with pytest.raises(ZeroDivisionError):
            estimate_human(metrics, 10000)


class TestOpex:
    """Test OPEX pro-rating."""

    def test_monthly_total(self) -> None:
        assert monthly_opex(OpexCosts()) == pytest.approx(510)

    def test_missing_items_count_as_zero(self) -> None:
        opex = OpexCosts(infrastructure=None, api_services=None)
        assert monthly_opex(opex) == pytest.approx(260)

    def test_pro_rating(self) -> None:
        """72 hours = 3 days = 0.1 month."""
        result = pro_rate_opex(OpexCosts(), 72)

        assert result.project_duration_days == pytest.approx(3)
        assert result.pro_rated_factor == pytest.approx(0.1)
        assert result.operational_cost == pytest.approx(51)

    def test_zero_opex(self) -> None:
        result = pro_rate_opex(OpexCosts(*([0.0] * 8)), 1000)
        assert result.monthly_opex == 0
        assert result.operational_cost == 0
