"""Conversion between Chromium history timestamps and Unix time."""

from __future__ import annotations

import math
from datetime import datetime, timezone

# Microseconds from 1601-01-01 to 1970-01-01 (Chromium/Windows epoch).
CHROME_EPOCH_OFFSET_MICROS = 11_644_473_600_000_000


def to_unix_millis(chrome_time) -> int:
    """Convert Chromium microseconds to Unix milliseconds.

    Anything that is not a finite number maps to 0, so a single bad row
    never aborts a profile read.
    """
    if isinstance(chrome_time, bool):
        return 0
    try:
        if isinstance(chrome_time, int):
            micros = chrome_time
        elif isinstance(chrome_time, str):
            text = chrome_time.strip()
            micros = int(text) if text.lstrip("-").isdigit() else float(text)
        else:
            micros = float(chrome_time)
    except (TypeError, ValueError, OverflowError):
        return 0

    if isinstance(micros, float):
        if not math.isfinite(micros):
            return 0
        return math.floor((micros - CHROME_EPOCH_OFFSET_MICROS) / 1000)
    return (micros - CHROME_EPOCH_OFFSET_MICROS) // 1000


def to_source_epoch(unix_millis: int) -> int:
    """Convert Unix milliseconds to Chromium microseconds."""
    return int(unix_millis) * 1000 + CHROME_EPOCH_OFFSET_MICROS


def to_datetime(unix_millis: int) -> datetime:
    """Unix milliseconds as an aware UTC datetime."""
    return datetime.fromtimestamp(unix_millis / 1000, tz=timezone.utc)
