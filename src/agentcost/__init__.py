"""agentcost: LLM-agent vs. human development cost estimator."""

__version__ = "0.1.0"
