"""Estimator session - one user's configuration and its latest results.

A session owns an immutable Configuration. Every update builds a new value
from whole records and recomputes the results eagerly; identical
configurations are served from a small cache.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from agentcost.config.loader import configuration_from_dict, default_configuration, new_model
from agentcost.config.models import Configuration, ModelPricing, Results
from agentcost.engine.calculator import compute
from agentcost.errors import ConfigurationError
from agentcost.validation.validator import ValidationResult, Validator

logger = logging.getLogger(__name__)


class EstimatorSession:
    """
    Holds the configuration being edited and keeps results in sync.

    Features:
    - Section updates (project, models, overheads, agent, human) as whole-record replacements
    - Validation before every recompute; invalid configurations keep results at None
    - Results cached per configuration
    - Atomic reset to defaults
    """

    CACHE_SIZE = 32

    def __init__(
        self,
        configuration: Configuration | None = None,
        validator: Validator | None = None,
    ) -> None:
        self.validator = validator or Validator()
        self._cache: OrderedDict[Configuration, Results] = OrderedDict()
        self._configuration = default_configuration()
        self._issues: list[ValidationResult] = []
        self._results: Results | None = None
        self._set(configuration or self._configuration)

    # ── state ────────────────────────────────────────────────────────────

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def results(self) -> Results | None:
        """Results for the current configuration, or None if it is invalid."""
        return self._results

    @property
    def issues(self) -> list[ValidationResult]:
        """Violations and warnings found for the current configuration."""
        return list(self._issues)

    @property
    def is_valid(self) -> bool:
        return all(r.passed for r in self._issues)

    def estimate(self) -> Results:
        """Current results.

        Raises:
            ConfigurationError: If the current configuration is invalid
        """
        if self._results is None:
            rejected = [r.violation or "" for r in self._issues if not r.passed]
            raise ConfigurationError(
                f"Configuration has {len(rejected)} invalid field(s)", violations=rejected
            )
        return self._results

    # ── updates ──────────────────────────────────────────────────────────

    def set_project(self, **changes: Any) -> Configuration:
        project = replace(self._configuration.project, **changes)
        return self._set(replace(self._configuration, project=project))

    def set_models(self, models: Sequence[ModelPricing]) -> Configuration:
        return self._set(replace(self._configuration, models=tuple(models)))

    def add_model(self) -> Configuration:
        """Append the template model (0% share) to the model list."""
        models = self._configuration.models
        return self.set_models([*models, new_model(len(models))])

    def remove_model(self, index: int) -> Configuration:
        """Remove a model by position.

        Raises:
            ConfigurationError: If it is the last model
        """
        models = list(self._configuration.models)
        if len(models) <= 1:
            raise ConfigurationError("At least one model is required")
        del models[index]
        return self.set_models(models)

    def set_overheads(self, **changes: Any) -> Configuration:
        overheads = replace(self._configuration.overheads, **changes)
        return self._set(replace(self._configuration, overheads=overheads))

    def set_agent_config(self, **changes: Any) -> Configuration:
        agent = replace(self._configuration.agent, **changes)
        return self._set(replace(self._configuration, agent=agent))

    def set_human_metrics(self, **changes: Any) -> Configuration:
        human = replace(self._configuration.human, **changes)
        return self._set(replace(self._configuration, human=human))

    def apply(self, data: dict[str, Any]) -> Configuration:
        """Merge a partial configuration document (same shape as a config file)."""
        return self._set(configuration_from_dict(data, base=self._configuration))

    def reset(self) -> Configuration:
        """Discard every edit and return to the defaults."""
        logger.debug("Session reset")
        return self._set(default_configuration())

    # ── recompute ────────────────────────────────────────────────────────

    def _set(self, configuration: Configuration) -> Configuration:
        """Validate and compute ``configuration``, then commit it.

        Nothing is committed if computing fails; the session keeps its
        previous configuration, issues and results.

        Raises:
            ConfigurationError: If the engine cannot compute a configuration
                that passed validation
        """
        issues = self.validator.check_all(configuration)
        results: Results | None = None

        if not all(r.passed for r in issues):
            logger.warning(
                "Configuration rejected: %s",
                "; ".join(r.violation or "" for r in issues if not r.passed),
            )
        elif configuration in self._cache:
            logger.debug("Results cache hit")
            self._cache.move_to_end(configuration)
            results = self._cache[configuration]
        else:
            try:
                results = compute(configuration)
            except ArithmeticError as e:
                logger.warning("Configuration could not be computed: %s", e)
                raise ConfigurationError(
                    f"Configuration could not be computed: {e}", violations=[str(e)]
                ) from e
            self._cache[configuration] = results
            if len(self._cache) > self.CACHE_SIZE:
                self._cache.popitem(last=False)

        self._configuration = configuration
        self._issues = issues
        self._results = results
        return configuration
