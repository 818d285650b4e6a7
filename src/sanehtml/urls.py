"""URL scheme validation for href/src/action values.

The raw value is normalized the way a browser would before the scheme is
read: surrounding whitespace trimmed, character references decoded
(`&#106;avascript:` spells `javascript:`), control characters removed
(`java\\tscript:`), then lower-cased. Values without a scheme are relative
references and always pass.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Collection
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def normalize_url(value: str) -> str:
    value = html.unescape(str(value).strip())
    return _CONTROL_CHARS_RE.sub("", value).strip().lower()


def url_scheme(value: str) -> str | None:
    """Return the scheme of `value` ("" if relative), or None if it does not parse."""
    normalized = normalize_url(value)
    try:
        parts = urlsplit(normalized)
    except ValueError:
        return None
    if not parts.scheme:
        # A colon in the first segment of a relative path is not a valid
        # reference (RFC 3986 section 4.2), e.g. ":alert(1)" or "java script:x".
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            return None
    return parts.scheme


def is_scheme_allowed(value: str, allowed_schemes: Collection[str]) -> bool:
    scheme = url_scheme(value)
    if scheme is None:
        logger.debug("rejecting unparseable URL %r", value)
        return False
    if not scheme:
        return True
    if scheme in allowed_schemes:
        return True
    logger.debug("rejecting URL scheme %r", scheme)
    return False
