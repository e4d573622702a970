"""Shared builders for Claude Code log entries."""

import json

import pytest

from cc_history.core.models import LogRecord


def user_entry(uuid, text, timestamp, parent=None, cwd="/home/dev/myapp"):
    return {
        "parentUuid": parent,
        "isSidechain": False,
        "userType": "external",
        "cwd": cwd,
        "sessionId": "session-1",
        "version": "1.0.0",
        "type": "user",
        "message": {"role": "user", "content": text},
        "uuid": uuid,
        "timestamp": timestamp,
    }


def tool_result_entry(uuid, parent, timestamp, cwd="/home/dev/myapp"):
    entry = user_entry(uuid, None, timestamp, parent=parent, cwd=cwd)
    entry["message"]["content"] = [
        {"tool_use_id": f"toolu_{parent}", "type": "tool_result", "content": "ok"},
    ]
    entry["toolUseResult"] = {"stdout": "ok"}
    return entry


def assistant_entry(uuid, parent, timestamp, usage=None, content=None, cwd="/home/dev/myapp"):
    message = {
        "id": f"msg_{uuid}",
        "type": "message",
        "role": "assistant",
        "model": "claude-sonnet-4-20250514",
        "content": content if content is not None else [{"type": "text", "text": "Done."}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
    }
    if usage is not None:
        message["usage"] = usage
    return {
        "parentUuid": parent,
        "isSidechain": False,
        "cwd": cwd,
        "sessionId": "session-1",
        "type": "assistant",
        "message": message,
        "uuid": uuid,
        "timestamp": timestamp,
    }


def usage(input_tokens=0, output_tokens=0, cache_creation=None, cache_read=None):
    data = {"input_tokens": input_tokens, "output_tokens": output_tokens, "service_tier": "standard"}
    if cache_creation is not None:
        data["cache_creation_input_tokens"] = cache_creation
    if cache_read is not None:
        data["cache_read_input_tokens"] = cache_read
    return data


def tool_use(name, tool_input=None, tool_id=None):
    return {"type": "tool_use", "id": tool_id or f"toolu_{name}", "name": name, "input": tool_input or {}}


def text(value):
    return {"type": "text", "text": value}


def records(*entries):
    return [LogRecord.from_dict(entry) for entry in entries]


def write_jsonl(path, entries):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for entry in entries:
            f.write((entry if isinstance(entry, str) else json.dumps(entry)) + "\n")


@pytest.fixture
def sample_log_root(tmp_path):
    """Two projects with one day of activity, a stale entry and a broken line."""
    root = tmp_path / "projects"
    write_jsonl(
        root / "-home-dev-myapp" / "session-1.jsonl",
        [
            user_entry("old", "Yesterday's question", "2024-01-01T23:59:59.000Z"),
            user_entry("u1", "Fix the failing test in parser.py", "2024-01-02T10:00:00.000Z"),
            assistant_entry(
                "a1",
                "u1",
                "2024-01-02T10:00:05.000Z",
                usage=usage(100, 50, 0, 0),
                content=[text("Let me look."), tool_use("Read", {"file_path": "/home/dev/myapp/parser.py"})],
            ),
            tool_result_entry("t1", "a1", "2024-01-02T10:00:06.000Z"),
            assistant_entry("a2", "t1", "2024-01-02T10:00:10.000Z", usage=usage(200, 0, 10, 5)),
        ],
    )
    write_jsonl(
        root / "-home-dev-other" / "session-2.jsonl",
        [
            user_entry("u2", "What does this repo do?", "2024-01-02T09:00:00.000Z", cwd="/home/dev/other"),
            "{not valid json",
            assistant_entry("a3", "u2", "2024-01-02T09:00:03.000Z", usage=usage(10, 10), cwd="/home/dev/other"),
        ],
    )
    return root
