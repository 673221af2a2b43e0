"""Configuration and Results aggregates.

Every record is a frozen dataclass. Session updates build new records with
``dataclasses.replace`` instead of patching nested fields, so a Configuration
is hashable and can key a results cache.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

# ═══════════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════════


class ComplexityClass(StrEnum):
    """Language/domain complexity of the project."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    HIGH_VERBOSITY = "high-verbosity"


class OptimizationLevel(StrEnum):
    """Optimization strategy applied on top of the overhead composite."""

    MINIMAL = "minimal"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class AgentMode(StrEnum):
    """Agent topology."""

    SINGLE = "single"
    PARALLEL = "parallel"
    SWARM = "swarm"
    CONCURRENT = "concurrent"


class PruningStrategy(StrEnum):
    LRU = "lru"
    PRIORITY = "priority"
    ADAPTIVE = "adaptive"


class CommunicationProtocol(StrEnum):
    BROADCAST = "broadcast"
    P2P = "p2p"
    HIERARCHICAL = "hierarchical"


class ResourceAllocation(StrEnum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    PREDICTIVE = "predictive"


class TaskDistribution(StrEnum):
    ROUND_ROBIN = "round-robin"
    LOAD_BALANCED = "load-balanced"
    PRIORITY_BASED = "priority-based"
    ADAPTIVE = "adaptive"


class FailureRecovery(StrEnum):
    RESTART = "restart"
    CHECKPOINT = "checkpoint"
    ADAPTIVE = "adaptive"


class ExperienceLevel(StrEnum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"


# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURATION AGGREGATE
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ProjectSpec:
    """Project size and domain."""

    name: str = "My Awesome Project"
    total_lines_of_code: int = 10000
    complexity_class: str = ComplexityClass.MODERATE  # unknown values are tolerated
    timeline_days: int = 30


@dataclass(frozen=True)
class ModelPerformance:
    """Benchmark figures shown next to a model's pricing. Not used by the engine."""

    execution_time: float = 2.1  # seconds
    accuracy: float = 85.0  # %
    token_efficiency: float = 78.0  # %
    reasoning_score: float = 72.0
    memory_usage: float = 512.0  # MB
    error_rate: float = 15.0  # %
    api_calls_per_task: float = 12.0
    cache_hit_rate: float = 60.0  # %
    pattern_recognition: float = 70.0
    context_understanding: float = 72.0
    algorithm_optimization: float = 65.0
    schema_handling: float = 70.0


@dataclass(frozen=True)
class ModelPricing:
    """Pricing and workload share of one LLM."""

    name: str
    input_cost_per_k_tokens: float
    output_cost_per_k_tokens: float
    usage_share_percent: float
    performance: ModelPerformance | None = None


@dataclass(frozen=True)
class OpexCosts:
    """Monthly operating expenses. ``None`` counts as zero."""

    infrastructure: float | None = 200.0
    api_services: float | None = 50.0
    monitoring: float | None = 30.0
    security: float | None = 40.0
    backup: float | None = 20.0
    networking: float | None = 30.0
    licensing: float | None = 60.0
    maintenance: float | None = 80.0


@dataclass(frozen=True)
class OverheadFactors:
    """Multiplicative overheads applied to token counts and LLM cost.

    Advanced factors may be ``None``; the composer substitutes the defaults.
    """

    # Primary
    iteration_overhead: float = 3.5
    retry_factor: float = 3.2
    bug_fix_overhead: float = 3.8
    testing_overhead: float = 3.4

    # Advanced
    context_switch_overhead: float | None = 1.8
    tooling_overhead: float | None = 2.2
    documentation_overhead: float | None = 1.6
    review_overhead: float | None = 1.9
    complexity_factor: float | None = 2.4

    # Quality
    quality_threshold: float | None = 0.85
    debugging_mode: bool = False
    optimization_level: str | None = OptimizationLevel.BALANCED

    opex: OpexCosts = field(default_factory=OpexCosts)


@dataclass(frozen=True)
class MemoryManagement:
    cache_size: float = 1024
    retention_period: float = 3600  # seconds
    pruning_strategy: str = PruningStrategy.LRU


@dataclass(frozen=True)
class AgentConfig:
    """Agent topology and behaviour."""

    mode: str = AgentMode.SINGLE
    agent_count: int = 1
    parallel_tasks: int = 1
    coordination_overhead: float = 1.1
    error_propagation: float = 1.0
    swarm_efficiency: float = 1.0
    batch_size: int = 1
    max_concurrent_tokens: int = 4096

    # Advanced
    task_distribution: str = TaskDistribution.ROUND_ROBIN
    resource_allocation: str = ResourceAllocation.STATIC
    communication_protocol: str = CommunicationProtocol.BROADCAST
    learning_rate: float = 0.1
    specialization: float = 0.5
    consensus_threshold: float = 0.8
    failure_recovery: str = FailureRecovery.RESTART
    debug_mode: bool = False
    memory_management: MemoryManagement = field(default_factory=MemoryManagement)


@dataclass(frozen=True)
class HumanMetrics:
    """Human team productivity. Time fractions of ``None`` count as zero."""

    hourly_rate: float = 80.0
    loc_per_day: float = 50.0
    developers: int = 1
    experience_level: str = ExperienceLevel.MID
    onboarding_weeks: float = 2.0
    meetings_per_week: float | None = 5.0  # hours
    code_review_time: float | None = 0.2
    documentation_time: float | None = 0.1
    qa_time: float | None = 0.15
    technical_debt_time: float | None = 0.1


@dataclass(frozen=True)
class EngineConstants:
    """Numeric constants of the model, exposed so they can be tuned."""

    input_token_ratio: float = 0.3
    tokens_per_minute: float = 500.0
    lines_per_request: int = 50
    minutes_per_request: float = 5.0
    working_hours_per_day: float = 8.0
    work_week_hours: float = 40.0
    days_per_month: float = 30.0
    processing_hours_per_day: float = 24.0

    @property
    def output_token_ratio(self) -> float:
        return 1.0 - self.input_token_ratio

    @property
    def tokens_per_hour(self) -> float:
        return self.tokens_per_minute * 60


@dataclass(frozen=True)
class Configuration:
    """Everything the engine needs for one estimate."""

    project: ProjectSpec = field(default_factory=ProjectSpec)
    models: tuple[ModelPricing, ...] = ()
    overheads: OverheadFactors = field(default_factory=OverheadFactors)
    agent: AgentConfig = field(default_factory=AgentConfig)
    human: HumanMetrics = field(default_factory=HumanMetrics)
    engine: EngineConstants = field(default_factory=EngineConstants)


# ═══════════════════════════════════════════════════════════════════════════
# RESULTS AGGREGATE
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TokenUsage:
    input: float
    output: float

    @property
    def total(self) -> float:
        return self.input + self.output


@dataclass(frozen=True)
class AgentMetrics:
    total_agents: int
    effective_parallelism: float
    coordination_cost: float  # effective coordination multiplier
    error_rate: float  # error multiplier
    time_reduction: float  # fraction of human duration saved
    cost_increase: float  # total agent cost relative to human cost, minus one


@dataclass(frozen=True)
class OpexMetrics:
    monthly_opex: float
    pro_rated_factor: float
    project_duration_days: float


@dataclass(frozen=True)
class ModelCost:
    """Unscaled cost contribution of one model."""

    name: str
    input_tokens: float
    output_tokens: float
    cost: float


@dataclass(frozen=True)
class Results:
    """Derived comparison report. Always recomputed as a whole."""

    llm_cost: float
    operational_cost: float
    total_agent_cost: float
    human_cost: float
    llm_duration_hours: float
    human_duration_hours: float
    token_usage: TokenUsage
    agent_metrics: AgentMetrics
    opex_metrics: OpexMetrics
    total_tokens: float = 0.0
    final_overhead: float = 1.0
    model_costs: tuple[ModelCost, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        data = asdict(self)
        data["model_costs"] = [asdict(m) for m in self.model_costs]
        return data
