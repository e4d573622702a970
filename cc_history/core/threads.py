"""
Thread builder: turns a flat list of log records into conversation threads.

Each user-authored prompt becomes the root of a thread. The records that
follow it are found by walking parentUuid links breadth-first. The link
graph may branch, dangle or even loop, so the walk keeps a visited set
and never expands an id twice.
"""

import logging
from collections import defaultdict, deque
from collections.abc import Sequence

from ..utils.pricing import estimate_cost
from .models import LogRecord, Thread, TokenUsage

logger = logging.getLogger(__name__)


class RecordIndex:
    """Records stored in a flat list, plus parent id -> child positions."""

    def __init__(self, records: Sequence[LogRecord]):
        self.records = list(records)
        self.children: dict[str, list[int]] = defaultdict(list)
        for position, record in enumerate(self.records):
            if record.parent_id is not None:
                self.children[record.parent_id].append(position)

    def children_of(self, record_id: str) -> list[LogRecord]:
        return [self.records[position] for position in self.children.get(record_id, ())]


def _collect_responses(root: LogRecord, index: RecordIndex) -> list[LogRecord]:
    """Breadth-first walk from the root, returning billed assistant records in discovery order."""
    visited = {root.id}
    frontier = deque([root.id])
    responses = []

    while frontier:
        current_id = frontier.popleft()
        for child in index.children_of(current_id):
            if child.id in visited:
                logger.debug(f"Skipping already visited record {child.id} under {current_id}")
                continue
            visited.add(child.id)
            frontier.append(child.id)

            # Other roles still link the chain but are not billed
            if child.is_billed_response:
                responses.append(child)

    return responses


def _fold_thread(root: LogRecord, responses: list[LogRecord]) -> Thread:
    tokens = TokenUsage()
    tool_count = 0
    end_time = root.time

    for response in responses:
        tokens = tokens + response.usage
        tool_count += len(response.tool_uses)
        if response.time > end_time:
            end_time = response.time

    return Thread(
        root=root,
        responses=tuple(responses),
        tool_count=tool_count,
        tokens=tokens,
        cost=estimate_cost(tokens),
        start_time=root.time,
        end_time=end_time,
    )


def build_thread(root: LogRecord, records: Sequence[LogRecord] | RecordIndex) -> Thread:
    """Build the thread rooted at one user record."""
    index = records if isinstance(records, RecordIndex) else RecordIndex(records)
    return _fold_thread(root, _collect_responses(root, index))


def build_threads(records: Sequence[LogRecord]) -> list[Thread]:
    """
    Build one thread per user-authored prompt.

    Tool-result echoes logged as user entries are not prompts and never
    start a thread. Threads keep the order of their roots in the input,
    and are not deduplicated against each other.

    Args:
        records: Records of the day, usually from load_records_for_date

    Returns:
        List of threads
    """
    index = RecordIndex(records)
    threads = [build_thread(record, index) for record in index.records if record.is_user_prompt]
    logger.debug(f"Built {len(threads)} threads from {len(index.records)} records")
    return threads
