"""Shared fixtures: minimal Chromium History databases."""

import sqlite3
import time

import pytest

from brave_clients.history.timecodec import to_source_epoch


def _chrome_time(minutes_ago: float = 0) -> int:
    """Chromium timestamp for `minutes_ago` minutes before now."""
    return to_source_epoch(int((time.time() - minutes_ago * 60) * 1000))


@pytest.fixture
def make_history_db():
    """Factory building a History file with `urls` and `visits` tables.

    `rows` is a list of (url, title, [visit_time, ...]).
    """

    def _make(path, rows):
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
        conn.execute(
            "CREATE TABLE urls (id INTEGER PRIMARY KEY, url LONGVARCHAR, title LONGVARCHAR)"
        )
        conn.execute(
            "CREATE TABLE visits (id INTEGER PRIMARY KEY, url INTEGER NOT NULL, visit_time INTEGER NOT NULL)"
        )
        for url_id, (url, title, visit_times) in enumerate(rows, start=1):
            conn.execute(
                "INSERT INTO urls (id, url, title) VALUES (?, ?, ?)", (url_id, url, title)
            )
            for visit_time in visit_times:
                conn.execute(
                    "INSERT INTO visits (url, visit_time) VALUES (?, ?)", (url_id, visit_time)
                )
        conn.commit()
        conn.close()
        return path

    return _make


@pytest.fixture
def chrome_time():
    """Function returning the Chromium timestamp for N minutes ago."""
    return _chrome_time
