"""
Daily statistics aggregator.
Folds every thread of the day into a single DailyStats summary.
"""

from collections.abc import Sequence

from .models import DailyStats, Thread, TokenUsage


def aggregate(threads: Sequence[Thread]) -> DailyStats:
    """
    Sum the counters of all threads and track the active time window.

    An empty day returns the zero value with no time window; callers
    treat that as "nothing to show", not as an error.
    """
    if not threads:
        return DailyStats()

    total_exchanges = 0
    tools_used = 0
    tokens = TokenUsage()
    total_cost = 0.0
    window_start = threads[0].start_time
    window_end = threads[0].end_time

    for thread in threads:
        total_exchanges += thread.exchange_count
        tools_used += thread.tool_count
        tokens = tokens + thread.tokens
        total_cost += thread.cost

        if thread.start_time < window_start:
            window_start = thread.start_time
        if thread.end_time > window_end:
            window_end = thread.end_time

    return DailyStats(
        user_messages=len(threads),
        total_exchanges=total_exchanges,
        tools_used=tools_used,
        tokens=tokens,
        total_cost=total_cost,
        window_start=window_start,
        window_end=window_end,
    )
