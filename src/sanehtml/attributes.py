"""Attribute allow-list filtering and helpers for transformers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .constants import URL_ATTRIBUTES
from .urls import is_scheme_allowed

if TYPE_CHECKING:
    from bs4.element import Tag

    from .policy import Policy


def filter_attributes(attrs: Mapping[str, Any] | None, tag: str, policy: Policy) -> dict[str, Any]:
    """Return the attributes of `tag` that `policy` keeps, in their original order.

    A name must be allowed for the tag or by the wildcard entry. URL-valued
    attributes (href, src, action) also need an allowed scheme.
    """
    if not attrs:
        return {}
    allowed = policy.attributes_for(tag)
    kept: dict[str, Any] = {}
    for key, value in attrs.items():
        if key not in allowed:
            continue
        if key in URL_ATTRIBUTES and not is_scheme_allowed(value, policy.allowed_schemes):
            continue
        kept[key] = value
    return kept


def get_attr(node: Tag, key: str, default: str | None = None) -> str | None:
    return node.attrs.get(key, default)


def set_attr(node: Tag, key: str, value: str) -> None:
    """Set `key` on `node`, keeping its position if it already exists."""
    node.attrs[key] = value


def remove_attr(node: Tag, key: str) -> None:
    node.attrs.pop(key, None)
