"""HTML constants used by the sanitizer.

Usage:
    from sanehtml.constants import VOID_ELEMENTS, URL_ATTRIBUTES

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
"""

# Elements that never have children and serialize without an end tag.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Attributes whose values are URLs and must pass the scheme check.
URL_ATTRIBUTES = frozenset({"href", "src", "action"})

# Key in Policy.allowed_attributes that applies to every tag.
WILDCARD = "*"

# rel tokens added to anchors created by the linkifier.
LINK_REL = "noopener noreferrer"

# Hard ceiling on element nesting, independent of Policy.max_depth.
# Anything deeper is dropped with its subtree so recursion stays bounded.
MAX_NESTING_DEPTH = 200

# Elements in which the parser allows no text. Text written directly inside
# them is moved in front of the table when the output is parsed again.
TABLE_CONTAINERS = frozenset({"table", "thead", "tbody", "tfoot", "tr", "colgroup"})

# Table parts and the parents they must be written into. Anywhere else the
# parser drops their tags.
TABLE_PART_PARENTS = {
    "caption": frozenset({"table"}),
    "colgroup": frozenset({"table"}),
    "thead": frozenset({"table"}),
    "tbody": frozenset({"table"}),
    "tfoot": frozenset({"table"}),
    "col": frozenset({"colgroup"}),
    "tr": frozenset({"thead", "tbody", "tfoot"}),
    "td": frozenset({"tr"}),
    "th": frozenset({"tr"}),
}
