"""
Typed data model for Claude Code log records, threads and daily statistics.

Log entries are deserialized once into LogRecord instances. Optional
usage fields are defaulted to zero here, so the rest of the code never
has to check for missing keys.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..utils.log_finder import project_label
from .constants import (
    BLOCK_TEXT,
    BLOCK_TOOL_USE,
    ROLE_ASSISTANT,
    ROLE_USER,
    USAGE_CACHE_CREATION,
    USAGE_CACHE_READ,
    USAGE_INPUT,
    USAGE_OUTPUT,
)
from .errors import RecordParseError


_FRACTION = re.compile(r"\.(\d+)")


def _pad_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are taken as UTC."""
    try:
        # fromisoformat before 3.11 only takes 3 or 6 fractional digits
        normalized = _FRACTION.sub(_pad_fraction, value.replace("Z", "+00:00"), count=1)
        parsed = datetime.fromisoformat(normalized)
    except (ValueError, AttributeError, TypeError) as e:
        raise RecordParseError(f"Invalid timestamp {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _string_field(data: dict, key: str, default: str = "") -> str:
    """A string field, or the default when it is missing, empty or not a string."""
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def _token_count(usage: dict, key: str) -> int:
    value = usage.get(key)
    if value is None:
        return 0
    try:
        return int(value)
    except (ValueError, TypeError) as e:
        raise RecordParseError(f"Invalid token count for {key}: {value!r}") from e


@dataclass(frozen=True)
class TokenUsage:
    """Token counters for the four billed categories."""

    input: int = 0
    output: int = 0
    cache_creation: int = 0
    cache_read: int = 0

    @classmethod
    def from_usage(cls, usage: dict) -> "TokenUsage":
        """Build from an assistant message "usage" object, missing fields count as zero."""
        return cls(
            input=_token_count(usage, USAGE_INPUT),
            output=_token_count(usage, USAGE_OUTPUT),
            cache_creation=_token_count(usage, USAGE_CACHE_CREATION),
            cache_read=_token_count(usage, USAGE_CACHE_READ),
        )

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input=self.input + other.input,
            output=self.output + other.output,
            cache_creation=self.cache_creation + other.cache_creation,
            cache_read=self.cache_read + other.cache_read,
        )

    @property
    def cache(self) -> int:
        """Cache tokens written plus cache tokens read."""
        return self.cache_creation + self.cache_read

    @property
    def total(self) -> int:
        return self.input + self.output + self.cache_creation + self.cache_read

    def to_dict(self) -> dict[str, int]:
        return {
            "input": self.input,
            "output": self.output,
            "cache_creation": self.cache_creation,
            "cache_read": self.cache_read,
        }


@dataclass(frozen=True)
class ContentBlock:
    """One entry of a message content list."""

    type: str
    text: str = ""
    name: str = ""
    input: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "ContentBlock":
        return cls(
            type=_string_field(data, "type"),
            text=_string_field(data, "text"),
            name=_string_field(data, "name"),
            input=data.get("input"),
        )


@dataclass(frozen=True)
class LogRecord:
    """
    One event from a Claude Code JSONL log.

    Attributes:
        id: The entry's uuid
        parent_id: uuid of the entry this one follows, if any
        role: The entry's type ("user", "assistant", or whatever else the log holds)
        timestamp: Original ISO-8601 timestamp string
        time: Parsed, timezone-aware timestamp
        working_directory: The cwd the entry was logged from
        session_id: Session the entry belongs to
        text: Plain-text content, None when the content is a list
        blocks: Content blocks when the content is a list
        usage: Token usage, None when the message has no usage object
        model: Model name for assistant entries
    """

    id: str
    parent_id: str | None
    role: str
    timestamp: str
    time: datetime
    working_directory: str = ""
    session_id: str = ""
    text: str | None = None
    blocks: tuple[ContentBlock, ...] = ()
    usage: TokenUsage | None = None
    model: str = "N/A"

    @classmethod
    def from_dict(cls, data: Any) -> "LogRecord":
        """
        Deserialize one decoded JSON line.

        Raises:
            RecordParseError: when the entry lacks a usable uuid, type or timestamp
        """
        if not isinstance(data, dict):
            raise RecordParseError(f"Expected a JSON object, got {type(data).__name__}")

        record_id = data.get("uuid")
        role = data.get("type")
        timestamp = data.get("timestamp")
        for key, value in (("uuid", record_id), ("type", role), ("timestamp", timestamp)):
            if not isinstance(value, str) or not value:
                raise RecordParseError(f"Missing or invalid '{key}'")

        parent_id = data.get("parentUuid")
        if not isinstance(parent_id, str) or not parent_id:
            parent_id = None

        message = data.get("message")
        if not isinstance(message, dict):
            message = {}

        content = message.get("content")
        text = content if isinstance(content, str) else None
        blocks = ()
        if isinstance(content, list):
            blocks = tuple(ContentBlock.from_dict(item) for item in content if isinstance(item, dict))

        usage = message.get("usage")
        token_usage = TokenUsage.from_usage(usage) if isinstance(usage, dict) else None

        return cls(
            id=record_id,
            parent_id=parent_id,
            role=role,
            timestamp=timestamp,
            time=parse_timestamp(timestamp),
            working_directory=_string_field(data, "cwd"),
            session_id=_string_field(data, "sessionId"),
            text=text,
            blocks=blocks,
            usage=token_usage,
            model=_string_field(message, "model", "N/A"),
        )

    @property
    def is_user_prompt(self) -> bool:
        """A user-authored prompt, as opposed to an echoed tool result."""
        return self.role == ROLE_USER and self.text is not None

    @property
    def is_tool_result(self) -> bool:
        return self.role == ROLE_USER and self.text is None

    @property
    def is_billed_response(self) -> bool:
        """An assistant entry carrying token usage."""
        return self.role == ROLE_ASSISTANT and self.usage is not None

    @property
    def text_blocks(self) -> list[ContentBlock]:
        return [block for block in self.blocks if block.type == BLOCK_TEXT]

    @property
    def tool_uses(self) -> list[ContentBlock]:
        return [block for block in self.blocks if block.type == BLOCK_TOOL_USE]

    @property
    def project(self) -> str:
        return project_label(self.working_directory)


@dataclass(frozen=True)
class Thread:
    """One user prompt and all assistant activity linked to it."""

    root: LogRecord
    responses: tuple[LogRecord, ...]
    tool_count: int
    tokens: TokenUsage
    cost: float
    start_time: datetime
    end_time: datetime

    @property
    def exchange_count(self) -> int:
        return len(self.responses)

    @property
    def duration_seconds(self) -> int:
        return round((self.end_time - self.start_time).total_seconds())

    @property
    def project(self) -> str:
        return self.root.project

    @property
    def prompt(self) -> str:
        return self.root.text or ""

    def tool_breakdown(self) -> dict[str, int]:
        """Tool name -> number of uses, in order of first use."""
        counts = Counter()
        for response in self.responses:
            for block in response.tool_uses:
                if block.name:
                    counts[block.name] += 1
        return dict(counts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.root.id,
            "project": self.project,
            "prompt": self.prompt,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "exchanges": self.exchange_count,
            "tools": self.tool_count,
            "tool_breakdown": self.tool_breakdown(),
            "tokens": self.tokens.to_dict(),
            "cost": self.cost,
        }


@dataclass(frozen=True)
class DailyStats:
    """Fold of all threads of one day. The window is None for an empty day."""

    user_messages: int = 0
    total_exchanges: int = 0
    tools_used: int = 0
    tokens: TokenUsage = field(default_factory=TokenUsage)
    total_cost: float = 0.0
    window_start: datetime | None = None
    window_end: datetime | None = None

    @property
    def average_exchanges(self) -> float:
        return self.total_exchanges / max(self.user_messages, 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_messages": self.user_messages,
            "total_exchanges": self.total_exchanges,
            "tools_used": self.tools_used,
            "tokens": self.tokens.to_dict(),
            "total_cost": self.total_cost,
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "window_end": self.window_end.isoformat() if self.window_end else None,
        }
