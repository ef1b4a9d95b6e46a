"""User-facing notices raised while fetching browser state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

INFO = "info"
WARNING = "warning"
FAILURE = "failure"

_LOG_LEVELS = {
    INFO: logging.INFO,
    WARNING: logging.WARNING,
    FAILURE: logging.ERROR,
}


@dataclass(frozen=True)
class Notice:
    """A message the host UI may show to the user (e.g. as a toast)."""

    level: str  # "info" | "warning" | "failure"
    title: str
    message: str


def add_notice(
    notices: list[Notice] | None,
    level: str,
    title: str,
    message: str,
) -> Notice:
    """Record a notice on `notices` (if given) and log it."""
    notice = Notice(level=level, title=title, message=message)
    logger.log(_LOG_LEVELS.get(level, logging.INFO), "%s: %s", title, message)
    if notices is not None:
        notices.append(notice)
    return notice
