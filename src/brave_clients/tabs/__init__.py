"""Open tab access for a running Brave browser (macOS automation)."""

from brave_clients.tabs.channel import AutomationChannel, OsascriptChannel, build_search_url
from brave_clients.tabs.fetcher import TabFetcher
from brave_clients.tabs.models import Tab
from brave_clients.tabs.parser import parse_tab, parse_tabs

__all__ = [
    "AutomationChannel",
    "OsascriptChannel",
    "Tab",
    "TabFetcher",
    "build_search_url",
    "parse_tab",
    "parse_tabs",
]
