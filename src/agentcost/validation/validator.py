"""Input validation for configurations before they reach the engine."""

from __future__ import annotations

from dataclasses import dataclass, fields

from agentcost.config.models import AgentMode, Configuration
from agentcost.engine.human import overhead_fraction
from agentcost.engine.parallelism import memory_efficiency
from agentcost.errors import ConfigurationError


@dataclass
class ValidationResult:
    """Result of a validation check."""

    passed: bool
    field: str | None = None
    violation: str | None = None
    action: str = "continue"  # continue/warn/reject


def _ok() -> ValidationResult:
    return ValidationResult(passed=True)


def _reject(field: str, violation: str) -> ValidationResult:
    return ValidationResult(passed=False, field=field, violation=violation, action="reject")


def _at_least(field: str, value: float, minimum: float) -> ValidationResult:
    if value < minimum:
        return _reject(field, f"{field} must be >= {minimum:g}, got {value:g}")
    return _ok()


def _in_unit_range(field: str, value: float | None) -> ValidationResult:
    if value is not None and not 0.0 <= value <= 1.0:
        return _reject(field, f"{field} must be in [0, 1], got {value:g}")
    return _ok()


class Validator:
    """Checks that a configuration is fit for the engine."""

    def __init__(self, share_tolerance: float = 0.01) -> None:
        """Initialize the validator.

        Args:
            share_tolerance: Allowed deviation of the usage-share total from 100
        """
        self.share_tolerance = share_tolerance

    def check_project(self, config: Configuration) -> list[ValidationResult]:
        """Project name, size and timeline."""
        project = config.project
        results = []
        if not project.name.strip():
            results.append(_reject("project.name", "Project name is required"))
        if project.total_lines_of_code <= 0:
            results.append(
                _reject(
                    "project.total_lines_of_code",
                    f"Total lines of code must be positive, got {project.total_lines_of_code}",
                )
            )
        results.append(_at_least("project.timeline_days", project.timeline_days, 1))
        return results

    def check_usage_shares(self, config: Configuration) -> ValidationResult:
        """Usage shares must total 100% within tolerance.

        Args:
            config: Configuration to check

        Returns:
            Validation result
        """
        total = sum(m.usage_share_percent for m in config.models)
        if abs(total - 100) > self.share_tolerance:
            return _reject("models", f"Usage share must total 100%, got {total:g}%")
        return _ok()

    def check_models(self, config: Configuration) -> list[ValidationResult]:
        """Model list, prices and shares."""
        if not config.models:
            return [_reject("models", "At least one model is required")]

        results = []
        for i, model in enumerate(config.models):
            prefix = f"models[{i}]"
            results.append(
                _at_least(f"{prefix}.input_cost_per_k_tokens", model.input_cost_per_k_tokens, 0)
            )
            results.append(
                _at_least(f"{prefix}.output_cost_per_k_tokens", model.output_cost_per_k_tokens, 0)
            )
            if not 0 <= model.usage_share_percent <= 100:
                results.append(
                    _reject(
                        f"{prefix}.usage_share_percent",
                        f"Usage share must be in [0, 100], got {model.usage_share_percent:g}",
                    )
                )
        results.append(self.check_usage_shares(config))
        return results

    def check_overheads(self, config: Configuration) -> list[ValidationResult]:
        """Overhead multipliers, quality threshold and OPEX."""
        overheads = config.overheads
        results = []
        for name in (
            "iteration_overhead",
            "retry_factor",
            "bug_fix_overhead",
            "testing_overhead",
            "context_switch_overhead",
            "tooling_overhead",
            "documentation_overhead",
            "review_overhead",
            "complexity_factor",
        ):
            value = getattr(overheads, name)
            if value is not None:
                results.append(_at_least(f"overheads.{name}", value, 1))

        results.append(_in_unit_range("overheads.quality_threshold", overheads.quality_threshold))

        for f in fields(overheads.opex):
            value = getattr(overheads.opex, f.name)
            if value is not None:
                results.append(_at_least(f"overheads.opex.{f.name}", value, 0))
        return results

    def check_agent(self, config: Configuration) -> list[ValidationResult]:
        """Agent topology and advanced settings."""
        agent = config.agent
        results = [
            _at_least("agent.agent_count", agent.agent_count, 1),
            _at_least("agent.parallel_tasks", agent.parallel_tasks, 1),
            _at_least("agent.coordination_overhead", agent.coordination_overhead, 1),
            _at_least("agent.error_propagation", agent.error_propagation, 1),
            _in_unit_range("agent.learning_rate", agent.learning_rate),
            _in_unit_range("agent.specialization", agent.specialization),
            _in_unit_range("agent.consensus_threshold", agent.consensus_threshold),
        ]

        if agent.mode == AgentMode.SWARM and agent.swarm_efficiency <= 0:
            # Zero swarm efficiency means zero throughput
            results.append(
                _reject("agent.swarm_efficiency", "Swarm efficiency must be positive in swarm mode")
            )
        else:
            results.append(_at_least("agent.swarm_efficiency", agent.swarm_efficiency, 0))

        memory = agent.memory_management
        if memory.cache_size <= 0:
            results.append(
                _reject(
                    "agent.memory_management.cache_size",
                    f"Cache size must be positive, got {memory.cache_size:g}",
                )
            )
        else:
            # A small cache drives memory efficiency, and so throughput, to zero or below
            efficiency = memory_efficiency(
                memory.cache_size, memory.retention_period, memory.pruning_strategy
            )
            if efficiency <= 0:
                results.append(
                    _reject(
                        "agent.memory_management.cache_size",
                        f"Cache size {memory.cache_size:g} gives memory efficiency "
                        f"{efficiency:.3g}; it must stay positive",
                    )
                )
        results.append(
            _at_least("agent.memory_management.retention_period", memory.retention_period, 0)
        )
        return results

    def check_human(self, config: Configuration) -> list[ValidationResult]:
        """Human team metrics.

        A combined overhead fraction above 1 is only a warning: the engine
        models it as negative productivity rather than clamping it. Exactly 1
        leaves no productive time at all and is rejected.
        """
        human = config.human
        results = []
        if human.hourly_rate <= 0:
            results.append(_reject("human.hourly_rate", "Hourly rate must be positive"))
        if human.loc_per_day <= 0:
            results.append(_reject("human.loc_per_day", "Lines of code per day must be positive"))
        results.append(_at_least("human.developers", human.developers, 1))
        results.append(_at_least("human.onboarding_weeks", human.onboarding_weeks, 0))
        if human.meetings_per_week is not None:
            results.append(_at_least("human.meetings_per_week", human.meetings_per_week, 0))

        fractions = ("code_review_time", "documentation_time", "qa_time", "technical_debt_time")
        for name in fractions:
            results.append(_in_unit_range(f"human.{name}", getattr(human, name)))

        if config.engine.work_week_hours <= 0:
            return results

        total = overhead_fraction(human, config.engine.work_week_hours)
        if 1 - total == 0:
            results.append(
                _reject(
                    "human",
                    "Non-coding time is 100% of the week; human productivity would be zero",
                )
            )
        elif total > 1.0:
            results.append(
                ValidationResult(
                    passed=True,
                    field="human",
                    violation=(
                        f"Non-coding time is {total:.0%} of the week; "
                        "human productivity will be negative"
                    ),
                    action="warn",
                )
            )
        return results

    def check_engine(self, config: Configuration) -> list[ValidationResult]:
        """Engine constants used as divisors and the input/output split."""
        engine = config.engine
        results = [_in_unit_range("engine.input_token_ratio", engine.input_token_ratio)]
        for name in (
            "tokens_per_minute",
            "lines_per_request",
            "minutes_per_request",
            "working_hours_per_day",
            "work_week_hours",
            "days_per_month",
            "processing_hours_per_day",
        ):
            value = getattr(engine, name)
            if value <= 0:
                results.append(_reject(f"engine.{name}", f"engine.{name} must be positive"))
        return results

    def check_all(self, config: Configuration) -> list[ValidationResult]:
        """Run all validation checks.

        Args:
            config: Configuration to check

        Returns:
            Results that carry a violation (failures and warnings)
        """
        results = [
            *self.check_project(config),
            *self.check_models(config),
            *self.check_overheads(config),
            *self.check_agent(config),
            *self.check_human(config),
            *self.check_engine(config),
        ]
        return [r for r in results if r.violation is not None]

    def ensure_valid(self, config: Configuration) -> list[ValidationResult]:
        """Raise if any check rejects the configuration.

        Returns:
            Warnings that did not block the configuration

        Raises:
            ConfigurationError: Listing every rejecting violation
        """
        issues = self.check_all(config)
        rejected = [r for r in issues if not r.passed]
        if rejected:
            raise ConfigurationError(
                f"Configuration has {len(rejected)} invalid field(s)",
                violations=[r.violation or "" for r in rejected],
            )
        return issues
