"""
Pricing utilities for estimating Claude API costs.

Rates are fixed constants in USD per token (not per million), based on
Anthropic's public Sonnet pricing.
"""

PRICING_RATES = {
    "input_cost_per_token": 3.0 / 1_000_000,  # $3 per million
    "output_cost_per_token": 15.0 / 1_000_000,  # $15 per million
    "cache_creation_cost_per_token": 3.75 / 1_000_000,  # $3.75 per million
    "cache_read_cost_per_token": 0.30 / 1_000_000,  # $0.30 per million
}


def calculate_cost(tokens, rates: dict[str, float] | None = None) -> dict[str, float]:
    """
    Calculate cost breakdown for the given token usage.

    Args:
        tokens: TokenUsage with input, output, cache_creation and cache_read counters
        rates: Per-token rates, defaults to PRICING_RATES

    Returns:
        Dict with cost breakdown by token type and total
    """
    if rates is None:
        rates = PRICING_RATES

    costs = {
        "input_cost": tokens.input * rates["input_cost_per_token"],
        "output_cost": tokens.output * rates["output_cost_per_token"],
        "cache_creation_cost": tokens.cache_creation * rates["cache_creation_cost_per_token"],
        "cache_read_cost": tokens.cache_read * rates["cache_read_cost_per_token"],
    }

    costs["total_cost"] = sum(costs.values())
    return costs


def estimate_cost(tokens, rates: dict[str, float] | None = None) -> float:
    """Estimated USD cost of the token usage. No rounding is applied."""
    return calculate_cost(tokens, rates)["total_cost"]


def format_cost(cost: float, digits: int = 6) -> str:
    """Format cost for display."""
    return f"${cost:.{digits}f}"
