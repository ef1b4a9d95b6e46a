"""Data models for the history module."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from brave_clients.history.timecodec import to_datetime


@dataclass(frozen=True)
class HistoryEntry:
    """The most recent visit to one URL within the lookback window."""

    entry_id: str
    title: str
    url: str
    last_visited: int  # Unix epoch milliseconds
    source_path: str = ""

    @property
    def last_visited_at(self) -> datetime:
        return to_datetime(self.last_visited)
