"""Token estimation from project size and domain complexity."""

from __future__ import annotations

from typing import Final

TOKENS_PER_LINE: Final[dict[str, int]] = {
    "simple": 3,
    "moderate": 5,
    "complex": 8,
    "high-verbosity": 12,
}

DEFAULT_TOKENS_PER_LINE: Final[int] = 5


def tokens_per_line(complexity: str | None) -> int:
    """Tokens generated per line of code. Unknown classes get the moderate rate."""
    if complexity is None:
        return DEFAULT_TOKENS_PER_LINE
    return TOKENS_PER_LINE.get(str(complexity), DEFAULT_TOKENS_PER_LINE)


def estimate_total_tokens(total_lines_of_code: int, complexity: str | None) -> int:
    return total_lines_of_code * tokens_per_line(complexity)
