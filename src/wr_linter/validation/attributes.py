"""
Attribute validation for `wr-*` elements.

Checks, in order, for each `name="value"` pair: membership in the element's
allowed attributes, then value-shape rules keyed by attribute name. After all
pairs: one combined "missing required" finding, then the wr-for loop-source
exclusivity rule.
"""

from __future__ import annotations

import re

from ..registry import CONDITION_OPERATORS
from ..registry import CRITICAL_ATTRIBUTES
from ..registry import IDENTIFIER_ATTRIBUTES
from ..registry import LOOP_SOURCES
from ..registry import NUMERIC_ATTRIBUTES
from ..registry import PERMISSIVE_CONDITION_FUNCTIONS
from ..registry import is_reserved
from ..template_syntax.expressions import DOTTED_NAME_RE
from ..template_syntax.expressions import is_identifier
from ..template_syntax.scanning import parse_attributes
from ..types import ElementSpec
from ..types import ErrorType
from ..types import Finding
from ..types import make_finding

SINGLE_QUOTED_CALL_RE = re.compile(r"\w+\s*\(\s*'[^']*'\s*\)")
NUMBER_RE = re.compile(r"^\d+$")


def validate_attributes(
    spec: ElementSpec,
    attributes: str,
    line_number: int,
    column: int,
    source_line: str,
) -> list[Finding]:
    findings: list[Finding] = []
    allowed = spec.allowed
    found: set[str] = set()

    def add(error_type: ErrorType, message: str) -> None:
        findings.append(
            make_finding(line_number, column, error_type, message, source_line)
        )

    for attr in parse_attributes(attributes):
        found.add(attr.name)
        if attr.name not in allowed:
            add(
                ErrorType.ATTRIBUTE,
                f"Invalid attribute '{attr.name}' for element '{spec.name}'",
            )
        for error_type, message in _value_problems(spec.name, attr.name, attr.value):
            add(error_type, message)

    missing = [name for name in spec.required if name not in found]
    if missing:
        add(
            ErrorType.ATTRIBUTE,
            f"Missing required attributes for '{spec.name}': {', '.join(missing)}",
        )

    if spec.name == "wr-for":
        message = _loop_source_problem(found)
        if message:
            add(ErrorType.ATTRIBUTE, message)

    return findings


def _value_problems(
    element: str, name: str, value: str
) -> list[tuple[ErrorType, str]]:
    problems: list[tuple[ErrorType, str]] = []
    stripped = value.strip()

    if not stripped:
        if name in CRITICAL_ATTRIBUTES.get(element, ()):
            problems.append((ErrorType.ATTRIBUTE, f"Empty {name} not allowed"))
        # Shape rules below only apply to non-empty values, except numbers.
        if name not in NUMERIC_ATTRIBUTES:
            return problems

    if name == "condition":
        if SINGLE_QUOTED_CALL_RE.search(value):
            problems.append(
                (
                    ErrorType.SYNTAX,
                    "Use double quotes for string literals in function calls, "
                    "not single quotes",
                )
            )
        if not is_valid_condition(value):
            problems.append(
                (ErrorType.ATTRIBUTE, f"Invalid condition syntax: {value}")
            )

    elif name in IDENTIFIER_ATTRIBUTES:
        if not is_identifier(stripped):
            problems.append(
                (
                    ErrorType.ATTRIBUTE,
                    f"Invalid variable name '{stripped}' - use letters, digits "
                    "and underscores, not starting with a digit",
                )
            )
        elif is_reserved(stripped):
            problems.append(
                (
                    ErrorType.ATTRIBUTE,
                    f"'{stripped}' is a reserved keyword and cannot be used "
                    "as a variable name",
                )
            )

    elif name in NUMERIC_ATTRIBUTES:
        if not NUMBER_RE.match(stripped):
            problems.append(
                (ErrorType.ATTRIBUTE, f"{name} must be a number, got '{value}'")
            )
        elif not stripped.lstrip("0"):
            problems.append(
                (ErrorType.ATTRIBUTE, f"{name} must be greater than 0, got {stripped}")
            )

    return problems


def is_valid_condition(condition: str) -> bool:
    """
    Advisory condition check.

    Conditions are not parsed; anything non-empty is accepted. Operators,
    common functions and dotted names are recognised first so the accepted
    shapes are explicit.
    """
    condition = condition.strip()
    if not condition:
        return False
    if any(op in condition for op in CONDITION_OPERATORS):
        return True
    if any(func in condition for func in PERMISSIVE_CONDITION_FUNCTIONS):
        return True
    if DOTTED_NAME_RE.match(condition):
        return True
    return True


def _loop_source_problem(found: set[str]) -> str | None:
    sources = [name for name in LOOP_SOURCES if name in found]
    if not sources:
        return "wr-for must have one of: list, string, or times"
    if len(sources) > 1:
        return f"wr-for cannot combine: {', '.join(sources)}"
    return None
