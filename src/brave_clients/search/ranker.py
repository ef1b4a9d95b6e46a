"""Fuzzy ranking of tabs and history entries against a query."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from brave_clients.history.models import HistoryEntry
from brave_clients.search.actions import QueryAction, build_actions
from brave_clients.snapshot.models import Snapshot
from brave_clients.tabs.models import Tab

logger = logging.getLogger(__name__)

T = TypeVar("T")

MATCH_FIELDS = ("title", "url")
# Up to 30% divergence from the query is still a match.
DEFAULT_THRESHOLD = 0.3
MIN_MATCH_CHARS = 3

Ranker = Callable[..., list]


@dataclass(frozen=True)
class FilteredResults:
    """Ranked subsets of a Snapshot plus the actions offered for the query."""

    tabs: tuple[Tab, ...]
    history: tuple[HistoryEntry, ...]
    actions: tuple[QueryAction, ...] = ()


def partial_ratio(needle: str, text: str) -> float:
    """Best SequenceMatcher ratio of `needle` against any aligned window of `text`.

    Both arguments are expected lowercased. Where in `text` the match falls
    does not affect the score.
    """
    if not needle or not text:
        return 0.0
    if needle in text:
        return 1.0
    if len(text) <= len(needle):
        return difflib.SequenceMatcher(None, needle, text, autojunk=False).ratio()

    best = 0.0
    matcher = difflib.SequenceMatcher(None, needle, text, autojunk=False)
    for block in matcher.get_matching_blocks():
        start = max(0, min(block.b - block.a, len(text) - len(needle)))
        window = text[start:start + len(needle)]
        ratio = difflib.SequenceMatcher(None, needle, window, autojunk=False).ratio()
        if ratio > best:
            best = ratio
            if best >= 0.995:
                break
    return best


def fuzzy_rank(
    items: Sequence[T],
    query: str,
    fields: Sequence[str] = MATCH_FIELDS,
    threshold: float = DEFAULT_THRESHOLD,
    min_match_chars: int = MIN_MATCH_CHARS,
) -> list[T]:
    """Items matching `query` on any of `fields`, best match first.

    A blank query returns the items unchanged. Queries shorter than
    `min_match_chars` match nothing.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(items)
    if len(needle) < min_match_chars:
        return []

    cutoff = 1.0 - threshold
    scored: list[tuple[float, int, T]] = []
    for position, item in enumerate(items):
        score = max(
            (partial_ratio(needle, str(getattr(item, name, "") or "").lower()) for name in fields),
            default=0.0,
        )
        if score >= cutoff:
            scored.append((score, position, item))

    scored.sort(key=lambda s: (-s[0], s[1]))
    return [item for _, _, item in scored]


def rank_and_filter(
    snapshot: Snapshot,
    query_text: str,
    ranker: Ranker = fuzzy_rank,
) -> FilteredResults:
    """Rank the snapshot's tabs and history independently against `query_text`."""
    tabs = ranker(list(snapshot.tabs), query_text)
    history = ranker(list(snapshot.history), query_text)
    logger.debug(
        "Query %r matched %d tabs, %d history entries", query_text, len(tabs), len(history)
    )
    return FilteredResults(
        tabs=tuple(tabs),
        history=tuple(history),
        actions=build_actions(query_text),
    )
