"""LLM duration estimates.

Two independent estimates: one bound by raw token throughput and one bound by
the number of discrete interactions. The slower one wins. Processing is
continuous (24/7).
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class DurationResult:
    token_hours: float
    request_hours: float
    requests: int
    effective_tokens: float
    llm_duration_hours: float


def token_bound_hours(
    total_tokens: float,
    final_overhead: float,
    coordination: float,
    effective_parallelism: float,
    tokens_per_hour: float = 30000.0,
) -> float:
    """Hours to emit every token at the parallelized throughput.

    ``effective_parallelism`` must be positive.
    """
    effective_tokens_per_hour = tokens_per_hour * effective_parallelism
    return total_tokens * final_overhead * coordination / effective_tokens_per_hour


def request_count(total_lines_of_code: int, lines_per_request: int = 50) -> int:
    return math.ceil(total_lines_of_code / lines_per_request)


def request_bound_hours(
    total_lines_of_code: int,
    lines_per_request: int = 50,
    minutes_per_request: float = 5.0,
) -> float:
    """Hours spent on request round-trips, regardless of throughput."""
    return request_count(total_lines_of_code, lines_per_request) * minutes_per_request / 60


def estimate_duration(
    total_tokens: float,
    total_lines_of_code: int,
    final_overhead: float,
    coordination: float,
    effective_parallelism: float,
    tokens_per_hour: float = 30000.0,
    lines_per_request: int = 50,
    minutes_per_request: float = 5.0,
) -> DurationResult:
    """Combine both estimates by taking the slower one."""
    token_hours = token_bound_hours(
        total_tokens, final_overhead, coordination, effective_parallelism, tokens_per_hour
    )
    request_hours = request_bound_hours(
        total_lines_of_code, lines_per_request, minutes_per_request
    )
    return DurationResult(
        token_hours=token_hours,
        request_hours=request_hours,
        requests=request_count(total_lines_of_code, lines_per_request),
        effective_tokens=total_tokens * final_overhead * coordination,
        llm_duration_hours=max(token_hours, request_hours),
    )
