"""Errors raised outside the pure engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Configuration could not be loaded or failed validation."""

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []
