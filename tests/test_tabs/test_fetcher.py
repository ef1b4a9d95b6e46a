"""Tests for the tab fetcher."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from brave_clients.exceptions import AutomationChannelError, BrowserNotRunningError
from brave_clients.notices import FAILURE
from brave_clients.tabs.channel import AutomationChannel
from brave_clients.tabs.fetcher import TabFetcher


def _channel(running=True, tabs=None, list_error=None):
    channel = MagicMock(spec=AutomationChannel)
    channel.is_running = AsyncMock(return_value=running)
    if list_error is not None:
        channel.list_windows_and_tabs = AsyncMock(side_effect=list_error)
    else:
        channel.list_windows_and_tabs = AsyncMock(return_value=tabs or [])
    return channel


def test_not_running_skips_tab_query():
    channel = _channel(running=False)
    assert asyncio.run(TabFetcher(channel).fetch_tabs()) == []
    channel.list_windows_and_tabs.assert_not_awaited()


def test_probe_failure_counts_as_not_running():
    channel = _channel()
    channel.is_running = AsyncMock(side_effect=AutomationChannelError("boom"))
    assert asyncio.run(TabFetcher(channel).fetch_tabs()) == []
    channel.list_windows_and_tabs.assert_not_awaited()


def test_fetch_tabs_builds_identities():
    channel = _channel(tabs=[
        {"windowId": 10, "positionIndex": 1, "title": "A", "url": "https://a.com"},
        {"windowId": 10, "positionIndex": 2, "title": "B", "url": "https://b.com"},
        {"windowId": 11, "positionIndex": 1, "title": "C", "url": "https://c.com"},
    ])
    tabs = asyncio.run(TabFetcher(channel).fetch_tabs())
    assert [t.tab_id for t in tabs] == ["10-1", "10-2", "11-1"]


def test_malformed_entries_dropped():
    channel = _channel(tabs=[
        {"windowId": 10, "positionIndex": 1, "title": "A", "url": "https://a.com"},
        {"windowId": None, "positionIndex": 2},
    ])
    tabs = asyncio.run(TabFetcher(channel).fetch_tabs())
    assert [t.title for t in tabs] == ["A"]


def test_skip_probe():
    channel = _channel(running=False, tabs=[{"windowId": 1, "positionIndex": 1}])
    tabs = asyncio.run(TabFetcher(channel).fetch_tabs(probe=False))
    assert len(tabs) == 1
    channel.is_running.assert_not_awaited()


def test_not_running_during_listing_is_silent():
    channel = _channel(list_error=BrowserNotRunningError("gone"))
    notices = []
    assert asyncio.run(TabFetcher(channel).fetch_tabs(notices)) == []
    assert notices == []


def test_channel_error_becomes_notice():
    channel = _channel(list_error=AutomationChannelError("osascript exploded"))
    notices = []
    assert asyncio.run(TabFetcher(channel).fetch_tabs(notices)) == []
    assert len(notices) == 1
    assert notices[0].level == FAILURE
    assert notices[0].title == "Failed to get tabs"
    assert notices[0].message == "osascript exploded"
