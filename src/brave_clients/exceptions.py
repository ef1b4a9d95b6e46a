"""Unified exception hierarchy for brave-clients."""


class BraveClientError(Exception):
    """Base exception for all brave-clients errors."""


# History
class HistoryError(BraveClientError):
    """Base exception for browser history operations."""


class HistoryReadError(HistoryError):
    """Failed to read one history file for an unclassified reason."""


class HistoryAccessDeniedError(HistoryReadError):
    """The history file exists but cannot be read (Full Disk Access)."""


class CorruptHistoryError(HistoryReadError):
    """The history file is not a valid SQLite database."""


class OversizedHistoryError(HistoryReadError):
    """The history file is larger than the configured size ceiling."""


class StoreRuntimeError(HistoryError):
    """The SQLite runtime is unusable; no history file can be read."""


# Automation
class AutomationError(BraveClientError):
    """Base exception for browser automation operations."""


class BrowserNotRunningError(AutomationError):
    """The browser application is not running."""


class WindowNotFoundError(AutomationError):
    """The requested browser window no longer exists."""


class AutomationChannelError(AutomationError):
    """The automation transport failed or returned an unusable response."""
