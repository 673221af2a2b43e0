"""Configuration loading: defaults, JSON files and partial merges."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from types import UnionType
from typing import Any, Final, get_args, get_type_hints

from agentcost.config.models import (
    AgentConfig,
    Configuration,
    EngineConstants,
    HumanMetrics,
    MemoryManagement,
    ModelPerformance,
    ModelPricing,
    OpexCosts,
    OverheadFactors,
    ProjectSpec,
)
from agentcost.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Final[Path] = Path.home() / ".agentcost" / "config.json"

# ═══════════════════════════════════════════════════════════════════════════
# MODEL PRESETS
# ═══════════════════════════════════════════════════════════════════════════

PRESET_MODELS: Final[tuple[ModelPricing, ...]] = (
    ModelPricing(
        name="GPT-4 (SynthLang Optimized)",
        input_cost_per_k_tokens=0.03,
        output_cost_per_k_tokens=0.06,
        usage_share_percent=60.0,
        performance=ModelPerformance(
            execution_time=2.5,
            accuracy=97.0,
            token_efficiency=93.0,
            reasoning_score=95.0,
            memory_usage=896.0,
            error_rate=3.0,
            api_calls_per_task=8.0,
            cache_hit_rate=85.0,
            pattern_recognition=98.0,
            context_understanding=95.0,
            algorithm_optimization=96.0,
            schema_handling=95.0,
        ),
    ),
    ModelPricing(
        name="GPT-3.5 Turbo (Traditional)",
        input_cost_per_k_tokens=0.001,
        output_cost_per_k_tokens=0.002,
        usage_share_percent=40.0,
        performance=ModelPerformance(
            execution_time=2.1,
            accuracy=85.0,
            token_efficiency=78.0,
            reasoning_score=72.0,
            memory_usage=512.0,
            error_rate=15.0,
            api_calls_per_task=12.0,
            cache_hit_rate=60.0,
            pattern_recognition=70.0,
            context_understanding=72.0,
            algorithm_optimization=65.0,
            schema_handling=70.0,
        ),
    ),
)


def new_model(index: int) -> ModelPricing:
    """Template for a model added to an existing list.

    Args:
        index: Zero-based position the model will occupy

    Returns:
        A cheap model with no usage share yet
    """
    return ModelPricing(
        name=f"Model {index + 1}",
        input_cost_per_k_tokens=0.001,
        output_cost_per_k_tokens=0.002,
        usage_share_percent=0.0,
        performance=ModelPerformance(),
    )


def default_configuration() -> Configuration:
    """Configuration a new session starts with."""
    return Configuration(models=PRESET_MODELS)


# ═══════════════════════════════════════════════════════════════════════════
# DICT <-> DATACLASS
# ═══════════════════════════════════════════════════════════════════════════

_SECTIONS: Final[dict[str, type]] = {
    "project": ProjectSpec,
    "overheads": OverheadFactors,
    "agent": AgentConfig,
    "human": HumanMetrics,
    "engine": EngineConstants,
}

# Nested records that are rebuilt whole from their own dict
_NESTED: Final[dict[str, type]] = {
    "opex": OpexCosts,
    "memory_management": MemoryManagement,
    "performance": ModelPerformance,
}


def _type_names(expected: tuple[Any, ...]) -> str:
    return " or ".join("null" if t is type(None) else t.__name__ for t in expected)


def _check_value(path: str, hint: Any, value: Any) -> None:
    """Raise unless ``value`` fits the annotated field type ``hint``."""
    expected = get_args(hint) if isinstance(hint, UnionType) else (hint,)
    if value is None:
        if type(None) not in expected:
            raise ConfigurationError(f"{path} must not be null", violations=[path])
        return

    for kind in expected:
        if kind in (int, float):
            # bool is an int subclass but never a valid count or amount
            numeric = int if kind is int else (int, float)
            if isinstance(value, numeric) and not isinstance(value, bool):
                return
        elif kind is not type(None) and isinstance(value, kind):
            return
    raise ConfigurationError(
        f"{path} must be {_type_names(expected)}, got {type(value).__name__}",
        violations=[path],
    )


def _merge_record(record: Any, changes: dict[str, Any], section: str) -> Any:
    """Return ``record`` with ``changes`` applied, rebuilding nested records."""
    if not isinstance(changes, dict):
        raise ConfigurationError(f"Section '{section}' must be an object")

    known = {f.name for f in fields(record)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown field(s) in '{section}': {', '.join(unknown)}",
            violations=[f"{section}.{name}" for name in unknown],
        )

    hints = get_type_hints(type(record))
    updates: dict[str, Any] = {}
    for name, value in changes.items():
        current = getattr(record, name)
        if name in _NESTED and isinstance(value, dict):
            base = current if current is not None else _NESTED[name]()
            value = _merge_record(base, value, f"{section}.{name}")
        _check_value(f"{section}.{name}", hints[name], value)
        updates[name] = value
    return replace(record, **updates)


def _model_from_dict(data: dict[str, Any], index: int) -> ModelPricing:
    if not isinstance(data, dict):
        raise ConfigurationError(f"models[{index}] must be an object")
    try:
        performance = data.get("performance")
        return ModelPricing(
            name=str(data.get("name", f"Model {index + 1}")),
            input_cost_per_k_tokens=float(data["input_cost_per_k_tokens"]),
            output_cost_per_k_tokens=float(data["output_cost_per_k_tokens"]),
            usage_share_percent=float(data["usage_share_percent"]),
            performance=(
                _merge_record(ModelPerformance(), performance, f"models[{index}].performance")
                if performance is not None
                else None
            ),
        )
    except ConfigurationError:
        raise
    except KeyError as e:
        raise ConfigurationError(f"models[{index}] is missing {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"models[{index}] has an invalid value: {e}") from e


def configuration_from_dict(
    data: dict[str, Any], base: Configuration | None = None
) -> Configuration:
    """Merge a partial configuration document over ``base``.

    Each section replaces only the fields it names. ``models``, when present,
    replaces the whole model list.

    Args:
        data: Mapping with any of the sections project, models, overheads,
            agent, human, engine
        base: Configuration to merge into (defaults if None)

    Returns:
        New Configuration

    Raises:
        ConfigurationError: On unknown sections/fields or malformed models
    """
    config = base if base is not None else default_configuration()

    unknown = sorted(set(data) - set(_SECTIONS) - {"models"})
    if unknown:
        raise ConfigurationError(
            f"Unknown section(s): {', '.join(unknown)}", violations=unknown
        )

    updates: dict[str, Any] = {}
    for section in _SECTIONS:
        if section in data:
            updates[section] = _merge_record(getattr(config, section), data[section], section)

    if "models" in data:
        models = data["models"]
        if not isinstance(models, list):
            raise ConfigurationError("'models' must be a list")
        updates["models"] = tuple(_model_from_dict(m, i) for i, m in enumerate(models))

    return replace(config, **updates)


def configuration_to_dict(config: Configuration) -> dict[str, Any]:
    """JSON-ready representation of ``config``."""
    data = asdict(config)
    data["models"] = [asdict(m) for m in config.models]
    return data


# ═══════════════════════════════════════════════════════════════════════════
# FILE LOADING
# ═══════════════════════════════════════════════════════════════════════════


def load_configuration(path: Path | None = None) -> Configuration:
    """Load a configuration file, merged over the defaults.

    Args:
        path: JSON file. If None, ``~/.agentcost/config.json`` is used when it
            exists, otherwise defaults are returned.

    Returns:
        Configuration

    Raises:
        ConfigurationError: If an explicit path is missing or any file is malformed
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return default_configuration()
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with path.open("r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")

    logger.debug("Loaded configuration from %s", path)
    return configuration_from_dict(data)

