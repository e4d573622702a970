"""Terminal presentation of threads and daily statistics."""

from .browser import HistoryBrowser

__all__ = ["HistoryBrowser"]
