"""Validate raw tab payloads from the automation channel."""

from __future__ import annotations

import logging

from brave_clients.tabs.models import Tab

logger = logging.getLogger(__name__)


def _as_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_text(value) -> str | None:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return None


def parse_tab(raw) -> Tab | None:
    """Normalize one raw tab record; returns None for malformed records."""
    if not isinstance(raw, dict):
        logger.warning("Skipping non-object tab payload: %r", raw)
        return None

    window_id = _as_int(raw.get("windowId"))
    position_index = _as_int(raw.get("positionIndex"))
    if window_id is None or window_id < 0:
        logger.warning("Skipping tab with invalid windowId: %r", raw.get("windowId"))
        return None
    if position_index is None or position_index < 1:
        logger.warning(
            "Skipping tab with invalid positionIndex: %r", raw.get("positionIndex")
        )
        return None

    title = _as_text(raw.get("title"))
    url = _as_text(raw.get("url"))
    if title is None or url is None:
        logger.warning("Skipping tab %s-%s with non-text fields", window_id, position_index)
        return None

    return Tab(
        window_id=window_id,
        position_index=position_index,
        title=title,
        url=url,
    )


def parse_tabs(payload) -> list[Tab]:
    """Parse a sequence of raw tab records, dropping malformed ones."""
    if not isinstance(payload, (list, tuple)):
        logger.warning("Tab payload is not a list: %r", type(payload).__name__)
        return []
    return [tab for tab in map(parse_tab, payload) if tab is not None]
