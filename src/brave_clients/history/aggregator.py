"""Merge recent history across every located Brave profile."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Iterable

from brave_clients.exceptions import (
    CorruptHistoryError,
    HistoryAccessDeniedError,
    HistoryReadError,
    OversizedHistoryError,
    StoreRuntimeError,
)
from brave_clients.history.locator import find_history_paths
from brave_clients.history.models import HistoryEntry
from brave_clients.history.reader import HistoryDBReader, short_path, sqlite_runtime
from brave_clients.history.timecodec import to_source_epoch
from brave_clients.notices import FAILURE, WARNING, Notice, add_notice

logger = logging.getLogger(__name__)

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def merge_entries(entries: Iterable[HistoryEntry]) -> list[HistoryEntry]:
    """Sort newest first and keep one entry per URL.

    The sort is stable, so when two profiles report the same timestamp for a
    URL the one read first wins.
    """
    ordered = sorted(entries, key=lambda e: e.last_visited, reverse=True)
    unique: dict[str, HistoryEntry] = {}
    for entry in ordered:
        unique.setdefault(entry.url, entry)
    return list(unique.values())


class HistoryAggregator:
    """Read every profile's History file and merge the results."""

    def __init__(
        self,
        locator: Callable[[], list[Path]] = find_history_paths,
        reader_factory: Callable[[Path], HistoryDBReader] = HistoryDBReader,
    ) -> None:
        self._locator = locator
        self._reader_factory = reader_factory

    async def fetch_history(
        self,
        days: int = 7,
        notices: list[Notice] | None = None,
    ) -> list[HistoryEntry]:
        """Deduplicated visits from the last `days` days, newest first.

        Per-file failures are recorded on `notices` and skipped; this method
        only returns an empty list when nothing could be read.
        """
        now_ms = int(time.time() * 1000)
        threshold = to_source_epoch(now_ms - days * MILLIS_PER_DAY)

        paths = await asyncio.to_thread(self._locator)
        if not paths:
            return []

        try:
            sqlite_runtime()
        except StoreRuntimeError as e:
            add_notice(notices, FAILURE, "History Engine Error", str(e))
            return []

        collected: list[HistoryEntry] = []
        permission_notice_shown = False

        for path in paths:
            logger.debug("Processing history file: %s", path)
            reader = self._reader_factory(path)
            try:
                entries = await asyncio.to_thread(reader.fetch_entries, threshold)
            except HistoryAccessDeniedError as e:
                logger.warning("Permission error accessing %s: %s", path, e)
                if not permission_notice_shown:
                    add_notice(
                        notices,
                        FAILURE,
                        "Permission Error",
                        "Full Disk Access is required to read Brave history. "
                        "Check System Settings > Privacy & Security.",
                    )
                    permission_notice_shown = True
                continue
            except CorruptHistoryError:
                add_notice(
                    notices,
                    WARNING,
                    "History DB Error",
                    f"Brave history file might be corrupted: {short_path(path)}",
                )
                continue
            except OversizedHistoryError:
                add_notice(
                    notices,
                    WARNING,
                    "History File Too Large",
                    f"History file too large to load: {short_path(path)}",
                )
                continue
            except HistoryReadError as e:
                add_notice(
                    notices,
                    FAILURE,
                    "Failed to read history",
                    f"Error for profile {short_path(path)}: {e}",
                )
                continue

            collected.extend(entries)
            logger.debug("Added %d entries from %s", len(entries), path)

        merged = merge_entries(collected)
        logger.info(
            "Returning %d unique history entries from %d profiles",
            len(merged),
            len(paths),
        )
        return merged
