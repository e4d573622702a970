"""
Record store: loads one day of Claude Code log records.

This module handles:
- Walking the log root (one directory per project, JSONL files inside)
- Filtering entries by a date prefix of their timestamp
- Skipping malformed lines and unreadable files without aborting the load
- Merging everything into a single timestamp-ordered sequence
"""

import logging
from datetime import date, datetime
from pathlib import Path

import orjson  # Faster JSON parsing

from ..utils.log_finder import list_log_files, list_project_dirs, resolve_log_root
from .errors import ConfigurationError, FileReadError, RecordParseError
from .models import LogRecord

logger = logging.getLogger(__name__)


def _date_prefix(target_date: date | str) -> str:
    if isinstance(target_date, datetime):
        target_date = target_date.date()
    if isinstance(target_date, date):
        return target_date.isoformat()
    return str(target_date)


class RecordStore:
    """
    Reads Claude Code JSONL logs from a log root directory.

    The store is stateless between loads apart from the statistics of
    the most recent load.
    """

    def __init__(self, log_root: str | Path | None = None):
        self.log_root = resolve_log_root(log_root)
        self.statistics = self._empty_statistics()

    @staticmethod
    def _empty_statistics() -> dict[str, int]:
        return {
            "files_processed": 0,
            "files_skipped": 0,
            "lines_skipped": 0,
            "records_loaded": 0,
        }

    def load_records_for_date(self, target_date: date | str) -> list[LogRecord]:
        """Load every record whose timestamp falls on the given calendar day.

        Args:
            target_date: Day to load; matched as a YYYY-MM-DD prefix of the raw timestamp

        Returns:
            Records from all projects, sorted ascending by timestamp

        Raises:
            ConfigurationError: if the log root does not exist
        """
        if not self.log_root.is_dir():
            raise ConfigurationError(f"Claude projects directory not found: {self.log_root}")

        prefix = _date_prefix(target_date)
        self.statistics = self._empty_statistics()
        records: list[LogRecord] = []

        for project_dir in list_project_dirs(self.log_root):
            for log_file in list_log_files(project_dir):
                try:
                    lines = self._read_lines(log_file)
                except FileReadError as e:
                    self.statistics["files_skipped"] += 1
                    logger.warning(str(e))
                    continue

                self.statistics["files_processed"] += 1
                records.extend(self._parse_lines(lines, log_file, prefix))

        # list.sort is stable, so equal timestamps keep encounter order
        records.sort(key=lambda record: record.time)
        self.statistics["records_loaded"] = len(records)

        logger.debug(
            f"Loaded {len(records)} records for {prefix} from {self.statistics['files_processed']} files "
            f"({self.statistics['files_skipped']} unreadable, {self.statistics['lines_skipped']} lines skipped)"
        )
        return records

    def _read_lines(self, file_path: Path) -> list[bytes]:
        try:
            with open(file_path, "rb") as f:  # Binary mode for orjson
                return f.read().splitlines()
        except OSError as e:
            raise FileReadError(file_path, e) from e

    def _parse_lines(self, lines: list[bytes], file_path: Path, prefix: str) -> list[LogRecord]:
        """Parse the lines of one file, keeping records of the target day."""
        records = []

        for line_num, line in enumerate(lines, 1):
            if not line.strip():
                continue

            try:
                data = orjson.loads(line)
                if not isinstance(data, dict):
                    raise RecordParseError("Expected a JSON object")

                timestamp = data.get("timestamp")
                if not isinstance(timestamp, str) or not timestamp.startswith(prefix):
                    continue

                records.append(LogRecord.from_dict(data))
            except (orjson.JSONDecodeError, RecordParseError) as e:
                self.statistics["lines_skipped"] += 1
                logger.debug(f"Skipping line {line_num} in {file_path}: {e}")

        return records


def load_records_for_date(target_date: date | str, log_root: str | Path | None = None) -> list[LogRecord]:
    """Load one day of records from the log root (default ~/.claude/projects)."""
    return RecordStore(log_root).load_records_for_date(target_date)
