"""Parser entry points and node classification.

Tokenization and tree construction are done by html5lib through
BeautifulSoup. This module only builds the tree, names node kinds the way
the rest of the package expects them, and locates <body>.
"""

from __future__ import annotations

import logging
from typing import IO, Any

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Comment, Doctype, NavigableString, PreformattedString, Tag

from .errors import ParseError

logger = logging.getLogger(__name__)

# Node kinds.
DOCUMENT = "#document"
ELEMENT = "#element"
TEXT = "#text"
COMMENT = "#comment"
DOCTYPE = "!doctype"
OTHER = "#other"

TREE_BUILDER = "html5lib"


def parse(markup: str | bytes) -> BeautifulSoup:
    """Parse markup into a full document (html/head/body are implied)."""
    try:
        # multi_valued_attributes=None keeps class/rel/... as plain strings.
        return BeautifulSoup(markup, TREE_BUILDER, multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise ParseError(f"markup rejected by parser: {exc}", cause=exc) from exc
    except UnicodeError as exc:
        raise ParseError(f"could not decode markup: {exc}", cause=exc) from exc


def parse_stream(stream: IO[Any]) -> BeautifulSoup:
    """Read `stream` once and parse it. Bytes are decoded by html5lib."""
    try:
        data = stream.read()
    except OSError as exc:
        raise ParseError(f"could not read input stream: {exc}", cause=exc) from exc
    if data is None:
        data = ""
    logger.debug("read %d units from input stream", len(data))
    return parse(data)


def node_kind(node: Any) -> str:
    """Classify a tree node as one of the kind constants above."""
    # BeautifulSoup subclasses Tag, and the special strings subclass
    # NavigableString, so order matters.
    if isinstance(node, BeautifulSoup):
        return DOCUMENT
    if isinstance(node, Tag):
        return ELEMENT
    if isinstance(node, Comment):
        return COMMENT
    if isinstance(node, Doctype):
        return DOCTYPE
    if isinstance(node, PreformattedString):
        return OTHER
    if isinstance(node, NavigableString):
        return TEXT
    return OTHER


def children_of(node: Any) -> list[Any]:
    # Copy, transformers may rearrange the tree while we walk it.
    contents = getattr(node, "contents", None)
    if not contents:
        return []
    return list(contents)


def find_body(root: Any) -> Tag | None:
    """Return the first <body> element in document order, if any."""
    if isinstance(root, Tag):
        if not isinstance(root, BeautifulSoup) and (root.name or "").lower() == "body":
            return root
        return root.find("body")
    return None
