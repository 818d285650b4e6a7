"""Policy-driven HTML sanitizer.

The sanitizer walks a parsed tree depth-first and writes a new markup
string. It never emits the input tree directly:

- Text is escaped (or linkified).
- Allowed elements are re-serialized from their filtered attributes, after
  the policy's transformers had a chance to edit or drop them.
- Disallowed elements are either dropped with their subtree (strip mode) or
  written as escaped text while their children are still walked (escape
  mode). Tags in `Policy.drop_content_tags` are always dropped.
- Comments and doctypes are dropped.

Depth starts at 1 for the children of <body> and grows by one per element.

Everything that reads back as one text node (text, escaped tags, text that
was separated only by dropped nodes) is buffered and written in one piece
when the next live tag is emitted. Sanitizing the output again then sees the
same text in the same place, so the result is a fixed point.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, Any

from .attributes import filter_attributes
from .constants import LINK_REL, MAX_NESTING_DEPTH, TABLE_CONTAINERS, TABLE_PART_PARENTS, VOID_ELEMENTS
from .linkify import linkify_text
from .parser import COMMENT, DOCTYPE, ELEMENT, TEXT, children_of, find_body, node_kind, parse, parse_stream
from .policy import DEFAULT_POLICY, Policy
from .serialize import escape_text, render_original_start_tag, serialize_end_tag, serialize_start_tag
from .transforms import apply_transformers
from .urls import is_scheme_allowed

if TYPE_CHECKING:
    from bs4.element import Tag

logger = logging.getLogger(__name__)


class Sanitizer:
    """One sanitization run. Owns its output buffer; not reusable across threads."""

    __slots__ = (
        "_container",
        "_debug",
        "_link_rel",
        "_linkify",
        "_parts",
        "_pending",
        "_skip_linkify",
        "_text_depth",
        "policy",
    )

    def __init__(self, policy: Policy | None = None) -> None:
        self.policy = policy if policy is not None else DEFAULT_POLICY
        self._parts: list[str] = []
        self._pending: list[str] = []

        # Only linkify when the anchors we create would themselves survive.
        link_attrs = self.policy.attributes_for("a")
        self._linkify = self.policy.linkify and "a" in self.policy.allowed_tags and "href" in link_attrs
        self._link_rel = LINK_REL if "rel" in link_attrs else None

        # Nearest emitted element, the depth its text reads back at, and
        # whether it (or an emitted ancestor) suppresses linkify.
        self._container = ""
        self._text_depth = 1
        self._skip_linkify = False
        self._debug = logger.isEnabledFor(logging.DEBUG)

    def run(self, root: Any) -> str:
        self._parts = []
        self._pending = []
        self._container = ""
        self._skip_linkify = False
        body = find_body(root)
        if body is not None:
            self._text_depth = 1
            for child in children_of(body):
                self._walk(child, 1)
        else:
            self._text_depth = 0
            self._walk(root, 0)
        self._flush_text()
        return "".join(self._parts)

    def debug(self, message: str, *args: Any) -> None:
        # Callers check self._debug first to skip argument formatting.
        logger.debug(message, *args)

    def _walk(self, node: Any, depth: int) -> None:
        kind = node_kind(node)

        if kind == TEXT:
            self._pending.append(str(node))
        elif kind == ELEMENT:
            self._walk_element(node, depth)
        elif kind in (COMMENT, DOCTYPE):
            return
        else:
            # Documents and unrecognized kinds are transparent.
            for child in children_of(node):
                self._walk(child, depth)

    def _walk_element(self, node: Tag, depth: int) -> None:
        policy = self.policy
        tag = (node.name or "").lower()

        if depth > MAX_NESTING_DEPTH:
            if self._debug:
                self.debug("dropping <%s> at depth %d: nesting ceiling reached", tag, depth)
            return

        if not self._allowed_here(tag, depth):
            self._walk_disallowed(node, tag, depth)
            return

        node.attrs = filter_attributes(node.attrs, tag, policy)
        if policy.transformers:
            result = apply_transformers(node, policy.transformers)
            if result is None:
                return
            node = result
            tag = (node.name or "").lower()

        is_void = tag in VOID_ELEMENTS
        self._flush_text()
        self._parts.append(serialize_start_tag(tag, node.attrs, is_void=is_void))
        if is_void:
            return

        saved = (self._container, self._text_depth, self._skip_linkify)
        self._container = tag
        self._text_depth += 1
        self._skip_linkify = self._skip_linkify or tag in policy.linkify_skip_tags
        for child in children_of(node):
            self._walk(child, depth + 1)
        self._flush_text()
        self._container, self._text_depth, self._skip_linkify = saved
        self._parts.append(serialize_end_tag(tag))

    def _allowed_here(self, tag: str, depth: int) -> bool:
        if not self.policy.allows_tag(tag, depth):
            return False
        parents = TABLE_PART_PARENTS.get(tag)
        if parents is not None and self._container not in parents:
            if self._debug:
                self.debug("<%s> at depth %d is outside its table parent", tag, depth)
            return False
        return True

    def _walk_disallowed(self, node: Tag, tag: str, depth: int) -> None:
        policy = self.policy
        if policy.strip_disallowed or tag in policy.drop_content_tags:
            if self._debug:
                self.debug("stripping <%s> at depth %d", tag, depth)
            return
        if self._container in TABLE_CONTAINERS:
            # No text may sit here, escaped tags included.
            if self._debug:
                self.debug("stripping <%s> at depth %d inside <%s>", tag, depth, self._container)
            return

        if self._debug:
            self.debug("escaping <%s> at depth %d", tag, depth)
        self._pending.append(render_original_start_tag(node.name or tag, node.attrs))
        for child in children_of(node):
            self._walk(child, depth + 1)
        if tag not in VOID_ELEMENTS:
            self._pending.append(serialize_end_tag(tag))

    def _flush_text(self) -> None:
        if not self._pending:
            return
        text = "".join(self._pending)
        self._pending = []
        if self._linkify and not self._skip_linkify and self._links_allowed(self._text_depth):
            self._parts.append(linkify_text(text, accept=self._accept_link, rel=self._link_rel))
        else:
            self._parts.append(escape_text(text))

    def _links_allowed(self, depth: int) -> bool:
        return depth <= MAX_NESTING_DEPTH and self.policy.allows_tag("a", depth)

    def _accept_link(self, url: str) -> bool:
        return is_scheme_allowed(url, self.policy.allowed_schemes)


def sanitize_tree(root: Any, policy: Policy | None = None) -> str:
    """Sanitize an already parsed tree. Attributes of allowed elements are rewritten in place."""
    return Sanitizer(policy).run(root)


def sanitize(markup: str, policy: Policy | None = None) -> str:
    """Parse `markup` and return it reduced to what `policy` allows.

    `policy` defaults to DEFAULT_POLICY. Raises ParseError if the markup
    cannot be parsed.
    """
    return sanitize_tree(parse(markup), policy)


def sanitize_stream(stream: IO[Any], policy: Policy | None = None) -> str:
    """Like sanitize(), reading the markup (str or bytes) from `stream`."""
    return sanitize_tree(parse_stream(stream), policy)
