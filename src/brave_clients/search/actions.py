"""Actions offered for query text, and the browser commands behind them."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from brave_clients.exceptions import BrowserNotRunningError
from brave_clients.search.classify import looks_like_url, normalize_url
from brave_clients.tabs.channel import AutomationChannel, build_search_url
from brave_clients.tabs.models import Tab

logger = logging.getLogger(__name__)

OPEN_URL = "open_url"
SEARCH = "search"


@dataclass(frozen=True)
class QueryAction:
    """Something the user can do with the text they typed."""

    kind: str  # "open_url" | "search"
    title: str
    target: str
    query: str = ""


def build_actions(query: str) -> tuple[QueryAction, ...]:
    """Open-URL (when the text looks like one) followed by web search.

    The search action is offered for any non-blank text, including when no
    tab or history entry matched.
    """
    text = (query or "").strip()
    if not text:
        return ()

    actions: list[QueryAction] = []
    if looks_like_url(text):
        actions.append(
            QueryAction(kind=OPEN_URL, title=f"Open URL: {text}", target=normalize_url(text), query=text)
        )
    actions.append(
        QueryAction(kind=SEARCH, title=f"Search with Brave: {text}", target=build_search_url(text), query=text)
    )
    return tuple(actions)


async def switch_to_tab(channel: AutomationChannel, tab: Tab) -> bool:
    """Focus `tab`. Returns False when the browser is not running."""
    if tab.window_id < 0 or tab.position_index < 1:
        raise ValueError(f"Invalid tab location {tab.tab_id}")
    try:
        await channel.activate_tab(tab.window_id, tab.position_index)
    except BrowserNotRunningError:
        logger.info("Cannot switch to tab %s: browser is not running", tab.tab_id)
        return False
    return True


async def open_text(channel: AutomationChannel, text: str) -> None:
    """Open URL-like text in a new tab; search the web for anything else."""
    text = text.strip()
    if looks_like_url(text):
        await channel.open_url_in_new_tab(normalize_url(text))
    else:
        logger.debug("%r does not look like a URL, searching instead", text)
        await channel.open_search_in_new_tab(text)


async def perform_action(channel: AutomationChannel, action: QueryAction) -> None:
    """Execute a QueryAction built by build_actions()."""
    if action.kind == OPEN_URL:
        await channel.open_url_in_new_tab(action.target)
    elif action.kind == SEARCH:
        await channel.open_search_in_new_tab(action.query)
    else:
        raise ValueError(f"Unknown action kind: {action.kind}")
