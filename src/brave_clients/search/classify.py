"""Classify free-text query input."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_WHITESPACE = re.compile(r"\s")
_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_BARE_HOST = re.compile(r"^(localhost(:\d+)?|\S*\.\S*)$", re.IGNORECASE)


def looks_like_url(text: str) -> bool:
    """True when `text` should be offered as a URL to open.

    Text without whitespace counts when it parses with a host once
    `https://` is prepended (unless it already has `scheme://`). Text that
    fails to parse still counts when it contains a dot or is `localhost`
    with an optional port. Never rejects input outright; callers still
    offer a web search for anything.
    """
    text = (text or "").strip()
    if not text or _WHITESPACE.search(text):
        return False

    candidate = text if "://" in text else f"https://{text}"
    try:
        parsed = urlsplit(candidate)
        host = parsed.hostname
        parsed.port  # raises ValueError for an invalid port
    except ValueError:
        host = None
    if host:
        return True
    return bool(_BARE_HOST.match(text))


def normalize_url(text: str) -> str:
    """Add `https://` to text that has no scheme.

    `host:port` is not mistaken for a scheme.
    """
    text = text.strip()
    match = _SCHEME.match(text)
    if match and not text[match.end():match.end() + 1].isdigit():
        return text
    return f"https://{text}"
