"""Data models for the snapshot module."""

from __future__ import annotations

from dataclasses import dataclass

from brave_clients.history.models import HistoryEntry
from brave_clients.notices import Notice
from brave_clients.tabs.models import Tab


@dataclass(frozen=True)
class Snapshot:
    """One complete fetch cycle: open tabs, merged history and liveness."""

    tabs: tuple[Tab, ...] = ()
    history: tuple[HistoryEntry, ...] = ()
    browser_is_running: bool = False
    notices: tuple[Notice, ...] = ()
