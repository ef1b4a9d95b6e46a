"""Data models for the tabs module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tab:
    """One open tab as seen at fetch time."""

    window_id: int
    position_index: int  # 1-based within its window
    title: str = ""
    url: str = ""

    @property
    def tab_id(self) -> str:
        # Not stable across reorders or restarts.
        return f"{self.window_id}-{self.position_index}"
