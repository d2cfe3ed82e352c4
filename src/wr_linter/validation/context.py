"""Parent/child context rules, checked against the current nesting stack."""

from __future__ import annotations

from collections.abc import Iterable

from ..registry import CONTEXT_RULES
from ..types import ErrorType
from ..types import Finding
from ..types import StackEntry
from ..types import make_finding


def required_ancestor(element: str) -> str | None:
    return CONTEXT_RULES.get(element)


def validate_context(
    element: str,
    stack: Iterable[StackEntry],
    line_number: int,
    column: int,
    source_line: str,
) -> list[Finding]:
    """
    Report `element` when its required ancestor is not open.

    Any depth counts, not just the immediate parent. The stack is only read.
    """
    parent = required_ancestor(element)
    if parent is None:
        return []
    if any(entry.name == parent for entry in stack):
        return []
    return [
        make_finding(
            line_number,
            column,
            ErrorType.STRUCTURE,
            f"{element} can only be used inside {parent}",
            source_line,
        )
    ]
