"""
Static element registry and lookup tables.

All tables are built once at import time and never mutated; they are the
only state shared between validation runs.
"""

from __future__ import annotations

from types import MappingProxyType

from .types import ElementSpec

COMMENT_OPEN = "<wr-->"
COMMENT_CLOSE = "</wr-->"
COMMENT_ELEMENT = "wr-->"

_SPECS: tuple[ElementSpec, ...] = (
    # Conditionals
    ElementSpec("wr-if", required=("condition",)),
    ElementSpec("wr-then"),
    ElementSpec("wr-else"),
    ElementSpec("wr-switch", required=("value",)),
    ElementSpec("wr-case", required=("value",)),
    ElementSpec("wr-default"),
    ElementSpec("wr-conditional"),
    ElementSpec("wr-cond", required=("condition",)),
    # Loops
    ElementSpec(
        "wr-for",
        required=("variable",),
        optional=("list", "string", "times", "count", "index"),
    ),
    ElementSpec("wr-break", optional=("condition",), self_closing=True),
    # Variable operations
    ElementSpec(
        "wr-variable", required=("name",), optional=("value",), self_closing=True
    ),
    ElementSpec("wr-append", required=("name", "value"), self_closing=True),
    ElementSpec("wr-clear", required=("name",), self_closing=True),
    # Control
    ElementSpec("wr-error", optional=("condition",)),
    ElementSpec("wr-return", required=("value",), self_closing=True),
    # Comments
    ElementSpec(COMMENT_ELEMENT, self_closing=True),
    ElementSpec("wr-comment"),
)

ELEMENTS: MappingProxyType[str, ElementSpec] = MappingProxyType(
    {spec.name: spec for spec in _SPECS}
)

SELF_CLOSING_ONLY: frozenset[str] = frozenset(
    spec.name for spec in _SPECS if spec.self_closing
)

CONTAINER_ONLY: frozenset[str] = frozenset(
    spec.name for spec in _SPECS if not spec.self_closing
)

# Element base names (without `wr-`); compared case-insensitively.
RESERVED_KEYWORDS: frozenset[str] = frozenset(
    spec.name[3:] for spec in _SPECS if spec.name != COMMENT_ELEMENT
)

# element -> ancestor that must be open somewhere on the stack
CONTEXT_RULES: MappingProxyType[str, str] = MappingProxyType(
    {
        "wr-case": "wr-switch",
        "wr-default": "wr-switch",
        "wr-cond": "wr-conditional",
        "wr-then": "wr-if",
        "wr-else": "wr-if",
        "wr-break": "wr-for",
    }
)

# Allowed direct `wr-*` children, only consulted with content-model tracking.
CONTENT_MODELS: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        "wr-switch": frozenset({"wr-case", "wr-default"}),
        "wr-conditional": frozenset({"wr-cond"}),
    }
)

# Attributes that must not be empty, per element. `value` on wr-variable and
# wr-append may legitimately be an empty string.
CRITICAL_ATTRIBUTES: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        "wr-if": frozenset({"condition"}),
        "wr-cond": frozenset({"condition"}),
        "wr-break": frozenset({"condition"}),
        "wr-error": frozenset({"condition"}),
        "wr-switch": frozenset({"value"}),
        "wr-case": frozenset({"value"}),
        "wr-return": frozenset({"value"}),
        "wr-variable": frozenset({"name"}),
        "wr-append": frozenset({"name"}),
        "wr-clear": frozenset({"name"}),
        "wr-for": frozenset({"variable", "list", "string"}),
    }
)

IDENTIFIER_ATTRIBUTES: frozenset[str] = frozenset({"name", "variable"})
NUMERIC_ATTRIBUTES: frozenset[str] = frozenset({"times"})

# Exactly one of these must be present on wr-for (order is reporting order).
LOOP_SOURCES: tuple[str, ...] = ("list", "string", "times")

CONDITION_OPERATORS: tuple[str, ...] = ("==", "!=", "<", ">", "<=", ">=", "&&", "||")

PERMISSIVE_CONDITION_FUNCTIONS: tuple[str, ...] = (
    "isNull",
    "isNotNull",
    "number",
    "string",
    "count",
)

# Built-in functions documented for WebRelease2. Templates may define their
# own, so this is informational and never used to reject a call.
KNOWN_FUNCTIONS: frozenset[str] = frozenset(
    {
        "currentTime",
        "formatDate",
        "string",
        "length",
        "substring",
        "number",
        "divide",
        "setScale",
        "pageTitle",
        "pageURL",
        "isNull",
        "isNotNull",
        "count",
        "selectedPage",
        "selectedName",
        "selectedValue",
        "generateText",
    }
)


def get_element(name: str) -> ElementSpec | None:
    return ELEMENTS.get(name)


def is_reserved(word: str) -> bool:
    return word.lower() in RESERVED_KEYWORDS
