"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from agentcost.config.models import (
    AgentConfig,
    Configuration,
    HumanMetrics,
    MemoryManagement,
    ModelPricing,
    OpexCosts,
    OverheadFactors,
    ProjectSpec,
)


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a real ~/.agentcost/config.json out of the tests."""
    monkeypatch.setattr(
        "agentcost.config.loader.DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.json"
    )


@pytest.fixture
def neutral_config() -> Configuration:
    """Configuration whose multipliers are all 1.

    10,000 moderate lines -> 50,000 tokens; one model at 0.005/0.015 per 1K.
    """
    return Configuration(
        project=ProjectSpec(
            name="Neutral", total_lines_of_code=10000, complexity_class="moderate"
        ),
        models=(
            ModelPricing(
                name="model-a",
                input_cost_per_k_tokens=0.005,
                output_cost_per_k_tokens=0.015,
                usage_share_percent=100.0,
            ),
        ),
        overheads=OverheadFactors(
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
            debugging_mode=False,
            optimization_level="minimal",
            opex=OpexCosts(*([0.0] * 8)),
        ),
        agent=AgentConfig(
            mode="single",
            agent_count=1,
            coordination_overhead=1.5,
            error_propagation=1.0,
            learning_rate=0.0,
            specialization=0.0,
            memory_management=MemoryManagement(cache_size=1024, retention_period=0),
        ),
        human=HumanMetrics(
            hourly_rate=80.0,
            loc_per_day=50.0,
            developers=1,
            meetings_per_week=0.0,
            code_review_time=0.0,
            documentation_time=0.0,
            qa_time=0.0,
            technical_debt_time=0.0,
        ),
    )
