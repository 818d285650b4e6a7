"""Turn bare http(s) URLs in text into anchors.

The scan is a single left-to-right pass with non-overlapping matches. A
match is a scheme prefix followed by characters that are not whitespace,
angle brackets or double quotes, and it never ends on sentence
punctuation, so "see https://example.com." links without the period.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .constants import LINK_REL
from .serialize import escape_attr_value, escape_text

URL_RE = re.compile(r"https?://[^\s<>\"]+[^\s<>\".,;:!?)\]]")


def find_urls(text: str) -> list[tuple[int, int]]:
    """Return (start, end) offsets of every URL in `text`."""
    return [m.span() for m in URL_RE.finditer(text)]


def linkify_text(
    text: str,
    *,
    accept: Callable[[str], bool] | None = None,
    rel: str | None = LINK_REL,
) -> str:
    """Escape `text` and wrap every URL in `<a href=... rel="noopener noreferrer">`.

    URLs for which `accept` returns False are emitted as plain escaped text.
    `rel=None` leaves the rel attribute off the created anchors.
    """
    rel_attr = "" if rel is None else f' rel="{escape_attr_value(rel)}"'
    parts: list[str] = []
    last = 0
    for start, end in find_urls(text):
        url = text[start:end]
        if accept is not None and not accept(url):
            continue
        parts.append(escape_text(text[last:start]))
        parts.append(f'<a href="{escape_attr_value(url)}"{rel_attr}>{escape_text(url)}</a>')
        last = end
    parts.append(escape_text(text[last:]))
    return "".join(parts)
