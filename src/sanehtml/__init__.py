import logging

from .attributes import get_attr, remove_attr, set_attr
from .errors import ParseError, SanitizeError
from .linkify import linkify_text
from .policy import DEFAULT_POLICY, STRICT_POLICY, Policy, default_policy, strict_policy
from .sanitizer import Sanitizer, sanitize, sanitize_stream, sanitize_tree
from .text import extract_text, strip_tags
from .transforms import Transformer
from .urls import is_scheme_allowed

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_POLICY",
    "STRICT_POLICY",
    "ParseError",
    "Policy",
    "SanitizeError",
    "Sanitizer",
    "Transformer",
    "default_policy",
    "extract_text",
    "get_attr",
    "is_scheme_allowed",
    "linkify_text",
    "remove_attr",
    "sanitize",
    "sanitize_stream",
    "sanitize_tree",
    "set_attr",
    "strict_policy",
    "strip_tags",
]
