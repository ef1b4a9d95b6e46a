"""Fetch open tabs from a running Brave without ever launching it."""

from __future__ import annotations

import logging

from brave_clients.exceptions import (
    AutomationChannelError,
    AutomationError,
    BrowserNotRunningError,
)
from brave_clients.notices import FAILURE, Notice, add_notice
from brave_clients.tabs.channel import AutomationChannel, OsascriptChannel
from brave_clients.tabs.models import Tab
from brave_clients.tabs.parser import parse_tabs

logger = logging.getLogger(__name__)


class TabFetcher:
    """Enumerate every tab of every window through an automation channel."""

    def __init__(self, channel: AutomationChannel | None = None) -> None:
        self.channel = channel or OsascriptChannel()

    async def fetch_tabs(
        self,
        notices: list[Notice] | None = None,
        probe: bool = True,
    ) -> list[Tab]:
        """Open tabs in window order; empty when the browser is not running.

        With `probe` false the caller has already confirmed the browser is
        running and the liveness check is skipped.
        """
        if probe:
            try:
                running = await self.channel.is_running()
            except AutomationError as e:
                logger.warning("Liveness check failed, assuming not running: %s", e)
                return []
            if not running:
                logger.info("Browser is not running; no tabs to list")
                return []

        try:
            raw_tabs = await self.channel.list_windows_and_tabs()
        except BrowserNotRunningError:
            logger.info("Browser stopped before tabs could be listed")
            return []
        except AutomationChannelError as e:
            add_notice(notices, FAILURE, "Failed to get tabs", str(e))
            return []

        tabs = parse_tabs(raw_tabs)
        if len(tabs) != len(raw_tabs):
            logger.warning("Dropped %d malformed tab records", len(raw_tabs) - len(tabs))
        logger.info("Fetched %d open tabs", len(tabs))
        return tabs
