"""Agent parallelization model.

Turns an agent topology into the multiplier by which it accelerates token
throughput relative to a single agent. The topology gives a base factor; three
independent efficiency sub-models (memory, communication, resources) scale it,
and a logarithmic term damps the gain of very large agent pools.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from agentcost.config.models import (
    AgentConfig,
    AgentMode,
    CommunicationProtocol,
    PruningStrategy,
    ResourceAllocation,
)

PRUNING_BONUS: Final[dict[str, float]] = {
    PruningStrategy.LRU: 0.0,
    PruningStrategy.PRIORITY: 0.05,
    PruningStrategy.ADAPTIVE: 0.1,
}

PROTOCOL_EFFICIENCY: Final[dict[str, float]] = {
    CommunicationProtocol.BROADCAST: 1.0,
    CommunicationProtocol.P2P: 1.1,
    CommunicationProtocol.HIERARCHICAL: 1.15,
}

ALLOCATION_BONUS: Final[dict[str, float]] = {
    ResourceAllocation.STATIC: 1.0,
    ResourceAllocation.DYNAMIC: 1.1,
    ResourceAllocation.PREDICTIVE: 1.2,
}

BASE_CACHE_SIZE: Final[float] = 1024
BASE_RETENTION_SECONDS: Final[float] = 3600
MAX_RETENTION_UNITS: Final[float] = 2


@dataclass(frozen=True)
class ParallelismResult:
    """Effective parallelism with its components."""

    base_factor: float
    diminishing_factor: float
    memory_efficiency: float
    communication_efficiency: float
    resource_efficiency: float
    effective_parallelism: float


def base_factor(
    mode: str, agent_count: int, parallel_tasks: int, swarm_efficiency: float
) -> float:
    """Raw speed-up of a topology before efficiency adjustments.

    Args:
        mode: single, parallel, swarm or concurrent (anything else acts as single)
        agent_count: Number of agents
        parallel_tasks: Tasks that can run at once
        swarm_efficiency: Gain or loss from swarm behaviour

    Returns:
        Base parallelization factor
    """
    if mode == AgentMode.PARALLEL:
        return min(agent_count, parallel_tasks) * 0.8
    if mode == AgentMode.SWARM:
        # Swarms can pick up half again as many tasks as the nominal limit
        max_tasks = parallel_tasks * 1.5
        return min(agent_count, max_tasks) * swarm_efficiency
    if mode == AgentMode.CONCURRENT:
        return min(agent_count, parallel_tasks * 1.2) * 0.9
    return 1.0


def memory_efficiency(
    cache_size: float, retention_period: float, pruning_strategy: str | None
) -> float:
    """Efficiency from agent memory.

    ``cache_size`` must be positive; 1024 is neutral.
    """
    cache_term = math.log2(cache_size / BASE_CACHE_SIZE) * 0.1
    retention_term = min(retention_period / BASE_RETENTION_SECONDS, MAX_RETENTION_UNITS) * 0.05
    pruning = PRUNING_BONUS.get(str(pruning_strategy), 0.0)
    return 1 + cache_term + retention_term + pruning


def communication_efficiency(protocol: str | None, learning_rate: float) -> float:
    protocol_efficiency = PROTOCOL_EFFICIENCY.get(str(protocol), 1.0)
    return protocol_efficiency * (1 + learning_rate * 0.2)


def resource_efficiency(allocation: str | None, specialization: float) -> float:
    allocation_bonus = ALLOCATION_BONUS.get(str(allocation), 1.0)
    return allocation_bonus * (1 + specialization * 0.15)


def diminishing_factor(agent_count: int) -> float:
    """1 for a single agent, shrinking logarithmically as agents are added."""
    return 1 / (1 + math.log10(max(agent_count, 1)))


def effective_parallelism(agent: AgentConfig) -> ParallelismResult:
    """Throughput multiplier for an agent configuration.

    Precondition: ``agent_count >= 1`` and, in swarm mode,
    ``swarm_efficiency > 0``. These are not re-checked here; the validator
    rejects configurations that break them.

    Args:
        agent: Agent configuration

    Returns:
        ParallelismResult; ``effective_parallelism`` is the multiplier
    """
    base = base_factor(
        agent.mode, agent.agent_count, agent.parallel_tasks, agent.swarm_efficiency
    )
    memory = agent.memory_management
    mem_eff = memory_efficiency(
        memory.cache_size, memory.retention_period, memory.pruning_strategy
    )
    comm_eff = communication_efficiency(agent.communication_protocol, agent.learning_rate)
    res_eff = resource_efficiency(agent.resource_allocation, agent.specialization)
    diminishing = diminishing_factor(agent.agent_count)

    return ParallelismResult(
        base_factor=base,
        diminishing_factor=diminishing,
        memory_efficiency=mem_eff,
        communication_efficiency=comm_eff,
        resource_efficiency=res_eff,
        effective_parallelism=base * (0.5 + 0.5 * diminishing) * mem_eff * comm_eff * res_eff,
    )
