"""Tests for multi-profile history aggregation."""

import asyncio
from pathlib import Path
from unittest.mock import patch

from brave_clients.exceptions import (
    CorruptHistoryError,
    HistoryAccessDeniedError,
    HistoryReadError,
    OversizedHistoryError,
    StoreRuntimeError,
)
from brave_clients.history.aggregator import HistoryAggregator, merge_entries
from brave_clients.history.models import HistoryEntry
from brave_clients.notices import FAILURE, WARNING


def _entry(url, last_visited, source="a"):
    return HistoryEntry(
        entry_id=f"{source}-{url}-{last_visited}",
        title=url,
        url=url,
        last_visited=last_visited,
        source_path=source,
    )


class FakeReader:
    """Reader stand-in keyed by path: a list of entries or an exception."""

    results: dict = {}

    def __init__(self, db_path):
        self.db_path = Path(db_path)

    def fetch_entries(self, threshold, limit=500):
        result = self.results[self.db_path.name]
        if isinstance(result, Exception):
            raise result
        return result


def _aggregator(results):
    reader_cls = type("Reader", (FakeReader,), {"results": results})
    paths = [Path("/profiles") / name for name in results]
    return HistoryAggregator(locator=lambda: paths, reader_factory=reader_cls)


def test_merge_keeps_latest_visit_per_url():
    merged = merge_entries([
        _entry("https://x.com", 100, "A"),
        _entry("https://y.com", 150, "A"),
        _entry("https://x.com", 200, "B"),
    ])
    assert [(e.url, e.last_visited) for e in merged] == [
        ("https://x.com", 200),
        ("https://y.com", 150),
    ]
    assert merged[0].source_path == "B"


def test_merge_tie_keeps_first_profile():
    merged = merge_entries([_entry("https://x.com", 100, "A"), _entry("https://x.com", 100, "B")])
    assert len(merged) == 1
    assert merged[0].source_path == "A"


def test_fetch_history_across_profiles():
    aggregator = _aggregator({
        "A": [_entry("https://x.com", 100, "A")],
        "B": [_entry("https://x.com", 200, "B"), _entry("https://z.com", 50, "B")],
    })
    history = asyncio.run(aggregator.fetch_history(days=7))
    assert [(e.url, e.last_visited) for e in history] == [("https://x.com", 200), ("https://z.com", 50)]


def test_no_profiles_returns_empty():
    aggregator = HistoryAggregator(locator=lambda: [])
    notices = []
    assert asyncio.run(aggregator.fetch_history(notices=notices)) == []
    assert notices == []


def test_real_profiles(tmp_path, make_history_db, chrome_time):
    a = make_history_db(
        tmp_path / "Brave-Browser" / "Default" / "History",
        [("https://x.com/", "X old", [chrome_time(100)]), ("chrome://flags", "Flags", [chrome_time(1)])],
    )
    b = make_history_db(
        tmp_path / "Brave-Browser" / "Profile 1" / "History",
        [("https://x.com/", "X new", [chrome_time(10)])],
    )
    aggregator = HistoryAggregator(locator=lambda: [a, b])
    history = asyncio.run(aggregator.fetch_history(days=1))
    assert [(e.url, e.title) for e in history] == [("https://x.com/", "X new")]


def test_permission_notice_shown_once():
    aggregator = _aggregator({
        "A": HistoryAccessDeniedError("denied"),
        "B": HistoryAccessDeniedError("denied"),
        "C": [_entry("https://ok.com", 1, "C")],
    })
    notices = []
    history = asyncio.run(aggregator.fetch_history(notices=notices))
    assert [e.url for e in history] == ["https://ok.com"]
    assert [n.title for n in notices] == ["Permission Error"]
    assert notices[0].level == FAILURE
    assert "Full Disk Access" in notices[0].message


def test_per_file_failures_warn_and_continue():
    aggregator = _aggregator({
        "A": CorruptHistoryError("bad"),
        "B": OversizedHistoryError("big"),
        "C": HistoryReadError("disk I/O error"),
        "D": [_entry("https://ok.com", 1, "D")],
    })
    notices = []
    history = asyncio.run(aggregator.fetch_history(notices=notices))
    assert [e.url for e in history] == ["https://ok.com"]
    assert [(n.level, n.title) for n in notices] == [
        (WARNING, "History DB Error"),
        (WARNING, "History File Too Large"),
        (FAILURE, "Failed to read history"),
    ]
    assert notices[0].message.endswith(": profiles/A")
    assert "disk I/O error" in notices[2].message


def test_runtime_failure_is_reported_separately():
    aggregator = _aggregator({"A": [_entry("https://x.com", 1)]})
    notices = []
    with patch(
        "brave_clients.history.aggregator.sqlite_runtime",
        side_effect=StoreRuntimeError("SQLite too old"),
    ):
        history = asyncio.run(aggregator.fetch_history(notices=notices))
    assert history == []
    assert [n.title for n in notices] == ["History Engine Error"]
