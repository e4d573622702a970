"""
Text formatting for the terminal views.

Every function returns plain strings (styled with click.style) so the
views can be rendered and tested without a terminal.
"""

import json
from datetime import date, datetime

import click

from ..core.constants import BLOCK_TEXT, BLOCK_TOOL_USE
from ..core.models import DailyStats, LogRecord, Thread
from ..utils.pricing import estimate_cost, format_cost

RULE = "━" * 81


def truncate_message(message: str, max_length: int) -> str:
    if len(message) <= max_length:
        return message
    return message[:max_length] + "..."


def format_clock(moment: datetime, seconds: bool = True) -> str:
    """Local wall-clock time, 24h."""
    return moment.astimezone().strftime("%H:%M:%S" if seconds else "%H:%M")


def format_tool_input(tool_input) -> str:
    if isinstance(tool_input, str):
        return truncate_message(tool_input, 50)
    return truncate_message(json.dumps(tool_input, ensure_ascii=False), 50)


def format_tool_breakdown(breakdown: dict[str, int]) -> str:
    """Format as " (Read: 2x, Edit: 1x)", or "" when no named tools were used."""
    if not breakdown:
        return ""
    return " (" + ", ".join(f"{name}: {count}x" for name, count in breakdown.items()) + ")"


def format_tokens(tokens) -> str:
    return f"input {tokens.input} | output {tokens.output} | cache {tokens.cache}"


def response_type_tag(record: LogRecord) -> str:
    has_text = bool(record.text_blocks)
    has_tools = bool(record.tool_uses)

    if has_text and has_tools:
        return "[text+tools]"
    if has_tools:
        return "[tools]"
    return "[text]"


def render_header(title: str) -> list[str]:
    border = "─" * 81
    return [
        click.style(f"┌{border}┐", fg="cyan"),
        click.style(f"│{title.center(81)}│", fg="cyan"),
        click.style(f"└{border}┘", fg="cyan"),
        "",
    ]


def render_thread_summary(thread: Thread, number: int, preview_length: int = 60) -> list[str]:
    """Three-line entry of the main list."""
    time = click.style(format_clock(thread.start_time), fg="blue")
    project = click.style(f"[{thread.project}]", fg="green")
    cost = click.style(format_cost(thread.cost), fg="yellow")
    return [
        f"{click.style(f'{number}.', fg='bright_black')} {time} {project}",
        f"   {truncate_message(thread.prompt, preview_length)}",
        f"   {thread.exchange_count} exchanges | {thread.tool_count} tools | {cost}",
        "",
    ]


def render_daily_stats(stats: DailyStats, title: str = "Daily Statistics") -> list[str]:
    lines = [
        click.style(RULE, fg="bright_black"),
        "",
        click.style(f"{title}:", bold=True),
        f"   User messages: {stats.user_messages}",
        f"   Total exchanges: {stats.total_exchanges} (avg {stats.average_exchanges:.1f}/question)",
        f"   Tools used: {stats.tools_used}",
        f"   Total tokens: {format_tokens(stats.tokens)}",
        f"   Estimated cost: {click.style(format_cost(stats.total_cost, 5), fg='yellow')}",
    ]

    if stats.user_messages > 0 and stats.window_start and stats.window_end:
        window = f"{format_clock(stats.window_start, seconds=False)} - {format_clock(stats.window_end, seconds=False)}"
        lines.append(f"   Active time: {window}")

    lines.append("")
    return lines


def render_response(response: LogRecord, number: int) -> list[str]:
    number_label = click.style(f"{number}.", fg="bright_black")
    time = click.style(format_clock(response.time), fg="blue")
    lines = [f"{number_label} {time} {response_type_tag(response)}"]

    for block in response.blocks:
        if block.type == BLOCK_TEXT:
            lines.append(f"   {truncate_message(block.text, 100)}")
        elif block.type == BLOCK_TOOL_USE:
            suffix = f" - {format_tool_input(block.input)}" if block.input else ""
            lines.append(f"   {click.style(block.name, fg='magenta')}{suffix}")

    usage = response.usage
    lines.append(
        f"   Input: {usage.input} | Output: {usage.output} | Cache: {usage.cache} | "
        f"{click.style(format_cost(estimate_cost(usage)), fg='yellow')}"
    )
    lines.append("")
    return lines


def render_thread_detail(thread: Thread) -> list[str]:
    """Full view of one thread: prompt, every response and the thread totals."""
    started = thread.start_time.astimezone()
    lines = render_header(f"Message Details - {started.date().isoformat()} {format_clock(started)}")

    lines.append(click.style(f"User Message [{thread.project}]:", bold=True))
    lines.append(thread.prompt)
    lines.append("")

    lines.append(click.style(f"Assistant Response History ({thread.exchange_count} exchanges):", bold=True))
    lines.append("")
    for number, response in enumerate(thread.responses, 1):
        lines.extend(render_response(response, number))

    lines.extend(
        [
            click.style(RULE, fg="bright_black"),
            "",
            click.style("Question Statistics:", bold=True),
            f"   Total exchanges: {thread.exchange_count}",
            f"   Tools used: {thread.tool_count}{format_tool_breakdown(thread.tool_breakdown())}",
            f"   Total tokens: {format_tokens(thread.tokens)}",
            f"   Estimated cost: {click.style(format_cost(thread.cost), fg='yellow')}",
            f"   Processing time: {thread.duration_seconds}s",
            "",
        ]
    )
    return lines


def history_title(target_date: date) -> str:
    return f"Claude Code Message History - {target_date.isoformat()}"
