"""Query ranking, URL classification and query actions."""

from brave_clients.search.actions import (
    QueryAction,
    build_actions,
    open_text,
    perform_action,
    switch_to_tab,
)
from brave_clients.search.classify import looks_like_url, normalize_url
from brave_clients.search.ranker import FilteredResults, fuzzy_rank, rank_and_filter

__all__ = [
    "FilteredResults",
    "QueryAction",
    "build_actions",
    "fuzzy_rank",
    "looks_like_url",
    "normalize_url",
    "open_text",
    "perform_action",
    "rank_and_filter",
    "switch_to_tab",
]
