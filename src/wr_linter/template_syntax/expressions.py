"""
Expression syntax helpers.

Small, deterministic predicates over a single `%...%` body, kept separate
from the validators that turn their results into findings.
"""

from __future__ import annotations

import re

IDENTIFIER_RE = re.compile(r"^[a-zA-Z_]\w*$")
FUNCTION_CALL_RE = re.compile(r"(\w+)\s*\(")
BRACKET_RE = re.compile(r"\[([^\]]*)\]")
INDEX_RE = re.compile(r"^(?:\d+|[a-zA-Z_]\w*)$")
DOTTED_NAME_RE = re.compile(r"^[a-zA-Z_]\w*(\.\w+)*$")


def is_identifier(text: str) -> bool:
    return IDENTIFIER_RE.match(text) is not None


def function_call_name(expression: str) -> str | None:
    """
    Return the name of the first `name(` call in the expression, if any.
    """
    match = FUNCTION_CALL_RE.search(expression)
    if match is None:
        return None
    return match.group(1)


def balanced_parentheses(expression: str) -> bool:
    count = 0
    for char in expression:
        if char == "(":
            count += 1
        elif char == ")":
            count -= 1
            if count < 0:
                return False
    return count == 0


def valid_index_access(expression: str) -> bool:
    """
    True when every `[...]` holds digits or a bare identifier and brackets pair up.
    """
    if expression.count("[") != expression.count("]"):
        return False
    return all(
        INDEX_RE.match(inner.strip()) for inner in BRACKET_RE.findall(expression)
    )


def invalid_reference_segments(expression: str) -> list[str]:
    """
    Return the `.`-separated segments that are not legal identifiers.

    Bracket indexes are dropped first. Empty segments (adjacent dots) and
    segments holding a nested call are accepted.
    """
    bad: list[str] = []
    for part in expression.split("."):
        clean = BRACKET_RE.sub("", part).strip()
        if not clean or "(" in clean:
            continue
        if not is_identifier(clean):
            bad.append(clean)
    return bad
