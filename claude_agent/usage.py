"""Token usage totals and dollar cost accounting.

Prices are Claude 3.5 Sonnet list prices in USD per 1M tokens and are not
configurable. Totals only ever grow.
"""

from __future__ import annotations

from dataclasses import dataclass

INPUT_COST_PER_M = 3.00
OUTPUT_COST_PER_M = 15.00

_TOKENS_PER_M = 1_000_000


def token_cost(input_tokens: int, output_tokens: int) -> float:
    """Dollar cost of the given token counts."""
    return (
        input_tokens * INPUT_COST_PER_M / _TOKENS_PER_M
        + output_tokens * OUTPUT_COST_PER_M / _TOKENS_PER_M
    )


def format_accounting_line(
    input_tokens: int,
    output_tokens: int,
    turn_cost: float,
    session_cost: float,
) -> str:
    """Per-turn footer printed after each successful reply."""
    return (
        f"└─ Tokens: {input_tokens} in, {output_tokens} out. "
        f"Cost: Turn=${turn_cost:.4f}, Session=${session_cost:.4f}"
    )


@dataclass
class UsageTotals:
    """Running token sums for one chat session."""

    total_input_tokens: int = 0
    total_output_tokens: int = 0

    def add(self, input_tokens: int, output_tokens: int) -> None:
        """Add one turn's usage. Negative counts are rejected."""
        if input_tokens < 0 or output_tokens < 0:
            raise ValueError("token counts must be non-negative")
        self.total_input_tokens += input_tokens
        self.total_output_tokens += output_tokens

    @property
    def session_cost(self) -> float:
        return token_cost(self.total_input_tokens, self.total_output_tokens)

    def format_summary(self) -> str:
        """Session summary block printed on exit."""
        return "\n".join([
            "--- Session Summary ---",
            f"Total Input Tokens:  {self.total_input_tokens}",
            f"Total Output Tokens: {self.total_output_tokens}",
            f"Total Cost: ${self.session_cost:.4f}",
            "-----------------------",
        ])
