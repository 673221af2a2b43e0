"""Configuration validation."""

from __future__ import annotations

from .validator import ValidationResult, Validator

__all__ = [
    "ValidationResult",
    "Validator",
]
