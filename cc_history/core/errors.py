"""
Error types raised by the log-reading core.

Only ConfigurationError is fatal. RecordParseError and FileReadError are
raised close to the failure and recovered by the record store so that one
corrupt line or file never hides the rest of the day.
"""


class CCHistoryError(Exception):
    """Base class for cc-history errors."""


class ConfigurationError(CCHistoryError):
    """The log root directory is missing or is not a directory."""


class RecordParseError(CCHistoryError):
    """A single log line could not be turned into a LogRecord."""


class FileReadError(CCHistoryError):
    """A log file could not be opened or read."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"Could not read log file {path}: {cause}")
        self.path = path
        self.cause = cause
