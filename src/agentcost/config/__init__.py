"""Configuration aggregate, defaults and loading."""

from __future__ import annotations

from .loader import (
    PRESET_MODELS,
    configuration_from_dict,
    configuration_to_dict,
    default_configuration,
    load_configuration,
    new_model,
)
from .models import (
    AgentConfig,
    AgentMetrics,
    Configuration,
    EngineConstants,
    HumanMetrics,
    MemoryManagement,
    ModelCost,
    ModelPerformance,
    ModelPricing,
    OpexCosts,
    OpexMetrics,
    OverheadFactors,
    ProjectSpec,
    Results,
    TokenUsage,
)

__all__ = [
    "AgentConfig",
    "AgentMetrics",
    "Configuration",
    "EngineConstants",
    "HumanMetrics",
    "MemoryManagement",
    "ModelCost",
    "ModelPerformance",
    "ModelPricing",
    "OpexCosts",
    "OpexMetrics",
    "OverheadFactors",
    "PRESET_MODELS",
    "ProjectSpec",
    "Results",
    "TokenUsage",
    "configuration_from_dict",
    "configuration_to_dict",
    "default_configuration",
    "load_configuration",
    "new_model",
]
