"""Exceptions raised by sanehtml."""

from __future__ import annotations


class SanitizeError(Exception):
    """Base class for all sanehtml errors."""


class ParseError(SanitizeError):
    """The input could not be turned into a document tree.

    `cause` holds the underlying exception (also chained as __cause__).
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        if self.cause is not None:
            return f"ParseError({self.message!r}, cause={self.cause!r})"
        return f"ParseError({self.message!r})"
