"""Plain-text extraction."""

from __future__ import annotations

from typing import Any

from .parser import TEXT, find_body, node_kind, parse


def extract_text(root: Any) -> str:
    """Concatenate every text node below <body> (or `root`) in document order.

    Character references were already decoded by the parser, so the result
    is literal text and must be escaped before it is put back into HTML.
    """
    start = find_body(root)
    if start is None:
        start = root
    if node_kind(start) == TEXT:
        return str(start)
    descendants = getattr(start, "descendants", ())
    return "".join(str(node) for node in descendants if node_kind(node) == TEXT)


def strip_tags(markup: str) -> str:
    """Parse `markup` and return its text content with all tags removed."""
    return extract_text(parse(markup))
