"""Caller-supplied element transformers.

A transformer receives an allowed element after attribute filtering and
returns it (possibly mutated), or None to drop the element and its whole
subtree from the output. Transformers run in order; the first None wins.

Transformers are trusted code: exceptions they raise are not caught.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeAlias

from bs4.element import Tag

logger = logging.getLogger(__name__)

Transformer: TypeAlias = Callable[[Tag], Tag | None]


def apply_transformers(node: Tag, transformers: Iterable[Transformer]) -> Tag | None:
    for transformer in transformers:
        result = transformer(node)
        if result is None:
            logger.debug("<%s> vetoed by transformer %r", node.name, transformer)
            return None
        node = result
    return node
