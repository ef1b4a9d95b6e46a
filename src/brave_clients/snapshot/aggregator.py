"""Combine open tabs and history into one Snapshot per fetch cycle."""

from __future__ import annotations

import asyncio
import logging

from brave_clients.exceptions import BraveClientError
from brave_clients.history.aggregator import HistoryAggregator
from brave_clients.notices import FAILURE, INFO, Notice, add_notice
from brave_clients.snapshot.models import Snapshot
from brave_clients.tabs.channel import AutomationChannel, OsascriptChannel
from brave_clients.tabs.fetcher import TabFetcher

logger = logging.getLogger(__name__)

# A running browser already covers "now" through its tabs, so look further back.
LIVE_HISTORY_DAYS = 365
IDLE_HISTORY_DAYS = 7


class BrowserStateAggregator:
    """Fetch tabs and history with independent failure domains.

    Args:
        channel: Automation channel shared by the liveness probe and tab fetcher.
        history: History aggregator to use.
        tabs: Tab fetcher to use; defaults to one over `channel`.
        live_days: History lookback when the browser is running.
        idle_days: History lookback when it is not.
    """

    def __init__(
        self,
        channel: AutomationChannel | None = None,
        history: HistoryAggregator | None = None,
        tabs: TabFetcher | None = None,
        live_days: int = LIVE_HISTORY_DAYS,
        idle_days: int = IDLE_HISTORY_DAYS,
    ) -> None:
        self.channel = channel or OsascriptChannel()
        self.history = history or HistoryAggregator()
        self.tabs = tabs or TabFetcher(self.channel)
        self.live_days = live_days
        self.idle_days = idle_days

    async def is_browser_running(self) -> bool:
        """Liveness probe; a failing probe counts as not running."""
        try:
            return await self.channel.is_running()
        except BraveClientError as e:
            logger.warning("Could not determine whether the browser is running: %s", e)
            return False

    async def fetch_snapshot(self) -> Snapshot:
        """Build a fresh Snapshot. Never raises for source failures."""
        running = await self.is_browser_running()
        logger.info("Checking browser status. Running: %s", running)

        if running:
            tab_notices: list[Notice] = []
            history_notices: list[Notice] = []
            tab_result, history_result = await asyncio.gather(
                self.tabs.fetch_tabs(tab_notices, probe=False),
                self.history.fetch_history(self.live_days, history_notices),
                return_exceptions=True,
            )
            tabs = self._settle(tab_result, "Failed to get tabs", tab_notices)
            history = self._settle(history_result, "Failed to get history", history_notices)
            notices = tab_notices + history_notices
        else:
            notices = []
            add_notice(
                notices,
                INFO,
                "Brave Browser Not Running",
                "Showing history only. Start Brave to see open tabs.",
            )
            tabs = []
            try:
                history = await self.history.fetch_history(self.idle_days, notices)
            except Exception as e:
                history = self._settle(e, "Failed to get history", notices)

        logger.info("Fetched %d tabs, %d history entries", len(tabs), len(history))
        return Snapshot(
            tabs=tuple(tabs),
            history=tuple(history),
            browser_is_running=running,
            notices=tuple(notices),
        )

    def fetch_snapshot_sync(self) -> Snapshot:
        """Synchronous wrapper around fetch_snapshot()."""
        return asyncio.run(self.fetch_snapshot())

    @staticmethod
    def _settle(result, title: str, notices: list[Notice]) -> list:
        """Unwrap one side of the fetch; an exception becomes a notice and []."""
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.error("%s", title, exc_info=result)
            add_notice(notices, FAILURE, title, str(result) or type(result).__name__)
            return []
        return list(result)


async def fetch_snapshot() -> Snapshot:
    """Fetch a Snapshot with the default macOS channel and profile locations."""
    return await BrowserStateAggregator().fetch_snapshot()


def fetch_snapshot_sync() -> Snapshot:
    """Synchronous fetch_snapshot()."""
    return asyncio.run(fetch_snapshot())
