"""Log-reading core: record store, thread builder and daily aggregator."""

from ..utils.log_finder import project_label
from ..utils.pricing import estimate_cost
from .aggregator import aggregate
from .errors import CCHistoryError, ConfigurationError, FileReadError, RecordParseError
from .models import DailyStats, LogRecord, Thread, TokenUsage
from .record_store import RecordStore, load_records_for_date
from .threads import build_thread, build_threads

__all__ = [
    "CCHistoryError",
    "ConfigurationError",
    "DailyStats",
    "FileReadError",
    "LogRecord",
    "RecordParseError",
    "RecordStore",
    "Thread",
    "TokenUsage",
    "aggregate",
    "build_thread",
    "build_threads",
    "estimate_cost",
    "load_records_for_date",
    "project_label",
]
