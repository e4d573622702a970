"""
Utility helpers for locating Claude Code log directories.
"""

from pathlib import Path

LOG_FILE_PATTERN = "*.jsonl"
UNKNOWN_PROJECT = "unknown"


def _claude_base() -> Path:
    return Path.home() / ".claude" / "projects"


def default_log_root() -> Path:
    """
    Default root of the Claude Code logs.

    Claude stores logs at ~/.claude/projects/[converted-project-path]/
    where the project path has slashes replaced with dashes.
    """
    return _claude_base()


def resolve_log_root(configured: str | Path | None) -> Path:
    """
    Turn a configured log directory into an absolute path.

    Falls back to the default root when nothing is configured.
    """
    if not configured:
        return default_log_root()
    return Path(configured).expanduser()


def list_project_dirs(log_root: Path) -> list[Path]:
    """
    List project log directories under the root, sorted by name.

    Plain files sitting directly in the root are ignored.
    """
    return sorted((p for p in log_root.iterdir() if p.is_dir()), key=lambda p: p.name)


def list_log_files(project_dir: Path) -> list[Path]:
    """List the JSONL log files of one project directory, sorted by name."""
    return sorted(project_dir.glob(LOG_FILE_PATTERN), key=lambda p: p.name)


def project_label(working_directory: str | None) -> str:
    """
    Human readable project name for a working directory.

    Example:
        /Users/john/dev/myapp -> myapp

    Returns the last "/"-separated segment, or "unknown" when it is empty.
    """
    if not working_directory:
        return UNKNOWN_PROJECT
    return working_directory.split("/")[-1] or UNKNOWN_PROJECT
