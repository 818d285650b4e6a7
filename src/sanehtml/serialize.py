"""HTML serialization helpers for sanitized output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def escape_text(text: str | None) -> str:
    if not text:
        return ""
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value)
    return str(value).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def serialize_start_tag(
    name: str,
    attrs: Mapping[str, Any] | None,
    *,
    is_void: bool = False,
) -> str:
    """Serialize a start tag with double-quoted, escaped attribute values.

    Void elements get a trailing solidus (`<br />`).
    """
    parts: list[str] = ["<", name]
    if attrs:
        for key, value in attrs.items():
            parts.extend([" ", key, '="', escape_attr_value(value), '"'])
    parts.append(" />" if is_void else ">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def render_original_start_tag(name: str, attrs: Mapping[str, Any] | None) -> str:
    """Render a start tag exactly as received, values unescaped.

    Used for escape mode, where the result is passed through escape_text
    and emitted as inert text.
    """
    parts: list[str] = ["<", name]
    if attrs:
        for key, value in attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(str(v) for v in value)
            parts.extend([" ", key, '="', "" if value is None else str(value), '"'])
    parts.append(">")
    return "".join(parts)
