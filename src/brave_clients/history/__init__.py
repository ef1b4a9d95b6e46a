"""Brave history data access (multi-profile, macOS)."""

from brave_clients.history.aggregator import HistoryAggregator, merge_entries
from brave_clients.history.locator import find_history_paths
from brave_clients.history.models import HistoryEntry
from brave_clients.history.reader import HistoryDBReader, sqlite_runtime
from brave_clients.history.timecodec import to_source_epoch, to_unix_millis

__all__ = [
    "HistoryAggregator",
    "HistoryDBReader",
    "HistoryEntry",
    "find_history_paths",
    "merge_entries",
    "sqlite_runtime",
    "to_source_epoch",
    "to_unix_millis",
]
