"""Browser automation channel: structured requests to a running Brave.

The concrete channel runs fixed JavaScript-for-Automation programs through
`osascript`. Parameters are passed as `argv` and every program answers with
a JSON document, so user data never becomes script source.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

from brave_clients.exceptions import (
    AutomationChannelError,
    BrowserNotRunningError,
    WindowNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = os.environ.get("BRAVE_CLIENTS_APP_NAME", "Brave Browser")
DEFAULT_TIMEOUT = float(os.environ.get("BRAVE_CLIENTS_OSASCRIPT_TIMEOUT", "10"))
SEARCH_URL_TEMPLATE = os.environ.get(
    "BRAVE_CLIENTS_SEARCH_URL", "https://www.google.com/search?q={query}"
)

# -1728: object not found, -600: application isn't running.
_NOT_RUNNING_MARKERS = ("isn't running", "-1728", "-600")


def build_search_url(query: str) -> str:
    """Web search URL for `query` using the configured template."""
    return SEARCH_URL_TEMPLATE.format(query=quote(query, safe=""))


class AutomationChannel(ABC):
    """Request/response contract with the running browser."""

    @abstractmethod
    async def is_running(self) -> bool:
        """Whether the browser process is running. Never launches it."""

    @abstractmethod
    async def list_windows_and_tabs(self) -> list[dict[str, Any]]:
        """Raw `{windowId, positionIndex, title, url}` records for every tab."""

    @abstractmethod
    async def activate_tab(self, window_id: int, position_index: int) -> None:
        """Bring a window to the front and select one of its tabs."""

    @abstractmethod
    async def open_url_in_new_tab(self, url: str) -> None:
        """Open `url` in a new tab of the front window."""

    async def open_search_in_new_tab(self, query: str) -> None:
        """Run a web search for `query` in a new tab."""
        await self.open_url_in_new_tab(build_search_url(query))


_IS_RUNNING_JS = """
function run(argv) {
    return JSON.stringify({running: Application(argv[0]).running()});
}
"""

_LIST_TABS_JS = """
function run(argv) {
    var app = Application(argv[0]);
    if (!app.running()) {
        return JSON.stringify({error: "not_running"});
    }
    var tabs = [];
    var skipped = [];
    var windows = app.windows();
    for (var i = 0; i < windows.length; i++) {
        var windowId = null;
        try {
            windowId = windows[i].id();
            var titles = windows[i].tabs.title();
            var urls = windows[i].tabs.url();
            for (var j = 0; j < titles.length; j++) {
                tabs.push({windowId: windowId, positionIndex: j + 1,
                           title: titles[j], url: urls[j]});
            }
        } catch (e) {
            skipped.push({windowId: windowId, message: String(e)});
        }
    }
    return JSON.stringify({tabs: tabs, skipped: skipped});
}
"""

_ACTIVATE_TAB_JS = """
function run(argv) {
    var app = Application(argv[0]);
    if (!app.running()) {
        return JSON.stringify({error: "not_running"});
    }
    var matches = app.windows.whose({id: Number(argv[1])})();
    if (matches.length === 0) {
        return JSON.stringify({error: "window_not_found"});
    }
    app.activate();
    var target = matches[0];
    target.index = 1;
    target.activeTabIndex = Number(argv[2]);
    return JSON.stringify({ok: true});
}
"""

_OPEN_URL_JS = """
function run(argv) {
    var app = Application(argv[0]);
    app.activate();
    if (app.windows.length === 0) {
        var created = app.Window().make();
        created.activeTab.url = argv[1];
    } else {
        var front = app.windows[0];
        front.tabs.push(app.Tab({url: argv[1]}));
        front.index = 1;
    }
    return JSON.stringify({ok: true});
}
"""


def _is_not_running(message: str) -> bool:
    return any(marker in message for marker in _NOT_RUNNING_MARKERS)


class OsascriptChannel(AutomationChannel):
    """Automation channel backed by `osascript -l JavaScript`.

    Args:
        app_name: Application name to target.
        timeout: Seconds to wait for each osascript call.
    """

    def __init__(self, app_name: str = DEFAULT_APP_NAME, timeout: float = DEFAULT_TIMEOUT):
        self.app_name = app_name
        self.timeout = timeout

    async def is_running(self) -> bool:
        payload = await self._run_jxa(_IS_RUNNING_JS)
        return payload.get("running") is True

    async def list_windows_and_tabs(self) -> list[dict[str, Any]]:
        payload = await self._run_jxa(_LIST_TABS_JS)
        for skipped in payload.get("skipped") or []:
            logger.warning(
                "Skipped tabs of window %s: %s",
                skipped.get("windowId"),
                skipped.get("message"),
            )
        tabs = payload.get("tabs")
        if not isinstance(tabs, list):
            raise AutomationChannelError("Tab listing response has no 'tabs' array")
        return tabs

    async def activate_tab(self, window_id: int, position_index: int) -> None:
        await self._run_jxa(_ACTIVATE_TAB_JS, window_id, position_index)
        logger.info("Switched to tab %s-%s", window_id, position_index)

    async def open_url_in_new_tab(self, url: str) -> None:
        await self._run_jxa(_OPEN_URL_JS, url)
        logger.info("Opened %s in a new tab", url)

    async def _run_jxa(self, script: str, *args: Any) -> dict[str, Any]:
        """Run one JXA program with `app_name` and `args` as argv; decode its JSON."""
        command = ["osascript", "-l", "JavaScript", "-e", script, self.app_name]
        command.extend(str(arg) for arg in args)
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise AutomationChannelError(
                "osascript not found; this feature requires macOS"
            ) from e
        except OSError as e:
            raise AutomationChannelError(f"Failed to start osascript: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise AutomationChannelError(
                f"osascript timed out after {self.timeout}s"
            ) from e

        error_text = stderr.decode("utf-8", errors="replace").strip()
        if proc.returncode != 0:
            if _is_not_running(error_text):
                raise BrowserNotRunningError(f"{self.app_name} is not running")
            logger.error("osascript failed: %s", error_text)
            raise AutomationChannelError(error_text or f"osascript exited with {proc.returncode}")

        output = stdout.decode("utf-8", errors="replace").strip()
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as e:
            raise AutomationChannelError(f"Invalid JSON from osascript: {output[:200]!r}") from e
        if not isinstance(payload, dict):
            raise AutomationChannelError("osascript response is not a JSON object")

        error = payload.get("error")
        if error == "not_running":
            raise BrowserNotRunningError(f"{self.app_name} is not running")
        if error == "window_not_found":
            raise WindowNotFoundError(f"Window {args[0] if args else '?'} not found")
        if error:
            raise AutomationChannelError(str(error))
        return payload
