"""Read-only access to one Brave (Chromium) History database."""

from __future__ import annotations

import functools
import logging
import os
import shutil
import sqlite3
import tempfile
from pathlib import Path

from brave_clients.exceptions import (
    CorruptHistoryError,
    HistoryAccessDeniedError,
    HistoryReadError,
    OversizedHistoryError,
    StoreRuntimeError,
)
from brave_clients.history.models import HistoryEntry
from brave_clients.history.timecodec import to_unix_millis

logger = logging.getLogger(__name__)

# Larger files are not worth copying and loading on every refresh.
DEFAULT_MAX_HISTORY_BYTES = int(
    os.environ.get("BRAVE_CLIENTS_MAX_HISTORY_BYTES", str(2 * 1024**3))
)
DEFAULT_ROW_LIMIT = 500

# Read-only URI filenames need SQLite 3.7.7.
_MIN_SQLITE_VERSION = (3, 7, 7)

_CORRUPT_MARKERS = ("file is not a database", "database disk image is malformed")

HISTORY_QUERY = """
    SELECT
        u.id AS url_id,
        u.title AS title,
        u.url AS url,
        MAX(v.visit_time) AS last_visit_time
    FROM urls u
    JOIN visits v ON u.id = v.url
    WHERE v.visit_time >= ?
      AND (u.url LIKE 'http://%' OR u.url LIKE 'https://%')
    GROUP BY u.id, u.title, u.url
    ORDER BY last_visit_time DESC
    LIMIT ?
"""


@functools.lru_cache(maxsize=None)
def sqlite_runtime() -> str:
    """Check the process-wide SQLite library once and return its version.

    Raises StoreRuntimeError when the linked library cannot serve read-only
    opens. Successful checks are cached for the life of the process.
    """
    version = tuple(sqlite3.sqlite_version_info[:3])
    if version < _MIN_SQLITE_VERSION:
        raise StoreRuntimeError(
            f"SQLite {sqlite3.sqlite_version} is too old; "
            f"{'.'.join(map(str, _MIN_SQLITE_VERSION))} or newer is required."
        )
    logger.debug("Using SQLite %s", sqlite3.sqlite_version)
    return sqlite3.sqlite_version


def short_path(path: Path | str, segments: int = 3) -> str:
    """Last path segments, e.g. 'Brave-Browser/Default/History'."""
    path = Path(path)
    parts = [part for part in path.parts if part != path.anchor]
    return "/".join(parts[-segments:])


class HistoryDBReader:
    """Run the fixed recent-history query against one History file."""

    def __init__(self, db_path: Path | str, max_bytes: int = DEFAULT_MAX_HISTORY_BYTES):
        self.db_path = Path(db_path)
        self.max_bytes = max_bytes

    def fetch_entries(
        self,
        threshold: int,
        limit: int = DEFAULT_ROW_LIMIT,
    ) -> list[HistoryEntry]:
        """Most recent visit per http(s) URL visited at or after `threshold`.

        `threshold` is in Chromium microseconds. Raises a HistoryReadError
        subclass on any failure; connection and temporary copy are always
        released before returning.
        """
        self._check_size()
        db_copy = self._copy_db()
        conn: sqlite3.Connection | None = None
        try:
            conn = sqlite3.connect(f"{db_copy.as_uri()}?mode=ro", uri=True)
            conn.row_factory = sqlite3.Row
            rows = conn.execute(HISTORY_QUERY, (threshold, limit)).fetchall()
        except sqlite3.Error as e:
            raise self._classify_sqlite_error(e) from e
        finally:
            if conn is not None:
                conn.close()
            db_copy.unlink(missing_ok=True)

        entries = [entry for entry in map(self._row_to_entry, rows) if entry]
        logger.debug("Read %d history entries from %s", len(entries), self.db_path)
        return entries

    def _check_size(self) -> None:
        try:
            size = self.db_path.stat().st_size
        except PermissionError as e:
            raise HistoryAccessDeniedError(
                f"Permission denied reading {self.db_path}"
            ) from e
        except OSError as e:
            raise HistoryReadError(f"Cannot stat {self.db_path}: {e}") from e

        if size > self.max_bytes:
            raise OversizedHistoryError(
                f"History file too large to load: {short_path(self.db_path)} "
                f"({size} bytes > {self.max_bytes})"
            )

    def _copy_db(self) -> Path:
        """Brave keeps History locked while running; query a temporary copy."""
        with tempfile.NamedTemporaryFile(
            prefix="brave-history-", suffix=".db", delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
        try:
            shutil.copyfile(self.db_path, tmp_path)
        except PermissionError as e:
            tmp_path.unlink(missing_ok=True)
            raise HistoryAccessDeniedError(
                f"Permission denied reading {self.db_path}"
            ) from e
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise HistoryReadError(f"Failed to copy {self.db_path}: {e}") from e
        return tmp_path

    def _classify_sqlite_error(self, error: sqlite3.Error) -> HistoryReadError:
        # SQLite only ever sees the temporary copy; source access problems
        # surface earlier as PermissionError from stat or copy.
        message = str(error).lower()
        if any(marker in message for marker in _CORRUPT_MARKERS):
            return CorruptHistoryError(
                f"History file might be corrupted: {short_path(self.db_path)}"
            )
        return HistoryReadError(f"Failed querying {self.db_path}: {error}")

    def _row_to_entry(self, row: sqlite3.Row) -> HistoryEntry | None:
        url = row["url"]
        if not isinstance(url, str) or not url.startswith(("http://", "https://")):
            return None
        last_visited = to_unix_millis(row["last_visit_time"])
        return HistoryEntry(
            entry_id=f"{self.db_path}-{url}-{last_visited}",
            title=row["title"] or url,
            url=url,
            last_visited=last_visited,
            source_path=str(self.db_path),
        )
