"""Sanitization policy model and presets.

A Policy is an allow-list: tags not in `allowed_tags` are disallowed,
attributes not in `allowed_attributes[tag]` or `allowed_attributes["*"]`
are dropped, and URL-valued attributes must use a scheme from
`allowed_schemes` (or be relative).

Policies are frozen. Construction normalizes the collections (lists and
tuples become frozensets, tag names and schemes are lower-cased) but does
not validate them. Use `dataclasses.replace` to derive a variant.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .constants import WILDCARD

if TYPE_CHECKING:
    from .transforms import Transformer


def _lowered(values: Collection[str]) -> frozenset[str]:
    return frozenset(str(v).lower() for v in values)


@dataclass(frozen=True, slots=True)
class Policy:
    """What HTML is considered safe.

    - `strip_disallowed`: True removes a disallowed element with its
      subtree. False renders its tags as escaped text and keeps walking its
      children.
    - `max_depth`: elements nested deeper than this are disallowed. 0 means
      unlimited.
    - `drop_content_tags`: disallowed containers whose content is dropped
      even when `strip_disallowed` is False.
    - `linkify_skip_tags`: text below these elements is never linkified.
    """

    allowed_tags: Collection[str]
    allowed_attributes: Mapping[str, Collection[str]] = field(default_factory=dict)
    allowed_schemes: Collection[str] = field(default_factory=frozenset)
    strip_disallowed: bool = False
    transformers: Sequence[Transformer] = ()
    linkify: bool = False
    max_depth: int = 0
    drop_content_tags: Collection[str] = field(default_factory=lambda: frozenset({"script", "style"}))
    linkify_skip_tags: Collection[str] = field(default_factory=lambda: frozenset({"a", "code", "pre", "textarea"}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_tags", _lowered(self.allowed_tags))
        object.__setattr__(self, "allowed_schemes", _lowered(self.allowed_schemes))
        object.__setattr__(self, "drop_content_tags", _lowered(self.drop_content_tags))
        object.__setattr__(self, "linkify_skip_tags", _lowered(self.linkify_skip_tags))
        object.__setattr__(self, "transformers", tuple(self.transformers))

        # Tag keys are case-insensitive, attribute names are kept as given.
        normalized: dict[str, frozenset[str]] = {}
        for tag, attrs in (self.allowed_attributes or {}).items():
            key = str(tag).lower()
            normalized[key] = normalized.get(key, frozenset()) | frozenset(attrs)
        object.__setattr__(self, "allowed_attributes", MappingProxyType(normalized))

    def attributes_for(self, tag: str) -> frozenset[str]:
        """Attribute names allowed on `tag`: the wildcard entry plus the tag's own."""
        wildcard = self.allowed_attributes.get(WILDCARD, frozenset())
        return wildcard | self.allowed_attributes.get(tag.lower(), frozenset())

    def allows_tag(self, tag: str, depth: int) -> bool:
        if tag.lower() not in self.allowed_tags:
            return False
        return self.max_depth == 0 or depth <= self.max_depth


DEFAULT_POLICY: Policy = Policy(
    allowed_tags=[
        # Headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # Structure
        "p",
        "br",
        "hr",
        # Text formatting
        "b",
        "i",
        "em",
        "strong",
        "u",
        "s",
        "strike",
        "del",
        "ins",
        # Links and images
        "a",
        "img",
        # Lists
        "ul",
        "ol",
        "li",
        # Tables
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        # Code
        "code",
        "pre",
        "kbd",
        "samp",
        # Quotes
        "blockquote",
        "cite",
        "q",
        "figure",
        "figcaption",
        # Containers
        "div",
        "span",
        "section",
        "article",
        "header",
        "footer",
        "details",
        "summary",
        "abbr",
        "acronym",
        "address",
        "sup",
        "sub",
    ],
    allowed_attributes={
        "a": ["href", "title", "target", "rel"],
        "img": ["src", "alt", "title", "width", "height", "loading"],
        "td": ["colspan", "rowspan", "align", "valign"],
        "th": ["colspan", "rowspan", "align", "valign", "scope"],
        "blockquote": ["cite"],
        "q": ["cite"],
        "abbr": ["title"],
        "acronym": ["title"],
        WILDCARD: ["id", "class", "lang", "dir"],
    },
    allowed_schemes=["http", "https", "mailto"],
    strip_disallowed=False,
)

# Basic inline formatting only, no attributes. Meant for comments and other
# short user-generated content.
STRICT_POLICY: Policy = Policy(
    allowed_tags=["b", "i", "em", "strong", "br", "p", "ul", "ol", "li"],
    allowed_attributes={},
    allowed_schemes=["https"],
    strip_disallowed=True,
)


def default_policy() -> Policy:
    """The permissive preset, for articles and other rich content."""
    return DEFAULT_POLICY


def strict_policy() -> Policy:
    return STRICT_POLICY
