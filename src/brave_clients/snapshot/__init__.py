"""Combined browser state snapshots (open tabs + history)."""

from brave_clients.snapshot.aggregator import (
    BrowserStateAggregator,
    fetch_snapshot,
    fetch_snapshot_sync,
)
from brave_clients.snapshot.models import Snapshot

__all__ = [
    "BrowserStateAggregator",
    "Snapshot",
    "fetch_snapshot",
    "fetch_snapshot_sync",
]
