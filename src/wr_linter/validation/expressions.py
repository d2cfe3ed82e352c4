"""Validation for `%expression%` interpolations."""

from __future__ import annotations

import logging

from ..registry import KNOWN_FUNCTIONS
from ..template_syntax.expressions import balanced_parentheses
from ..template_syntax.expressions import function_call_name
from ..template_syntax.expressions import invalid_reference_segments
from ..template_syntax.expressions import is_identifier
from ..template_syntax.expressions import valid_index_access
from ..template_syntax.scanning import scan_expressions
from ..types import ErrorType
from ..types import Finding
from ..types import make_finding

logger = logging.getLogger(__name__)


def validate_expressions(
    scan_line: str, line_number: int, source_line: str
) -> list[Finding]:
    """
    Check every `%...%` on a line, then the line's `%` parity.

    `scan_line` is the line with HTML comments erased; `source_line` is the
    original text used as finding context.
    """
    findings: list[Finding] = []
    for match in scan_expressions(scan_line):
        if not match.body.strip():
            findings.append(
                make_finding(
                    line_number,
                    match.column,
                    ErrorType.SYNTAX,
                    "Empty expression found",
                    source_line,
                )
            )
            continue
        findings.extend(
            validate_expression(match.body, line_number, match.column, source_line)
        )

    if scan_line.count("%") % 2 == 1:
        findings.append(
            make_finding(
                line_number,
                0,
                ErrorType.SYNTAX,
                "Unmatched % symbol - expressions must be properly closed",
                source_line,
            )
        )
    return findings


def validate_expression(
    expression: str, line_number: int, column: int, source_line: str
) -> list[Finding]:
    """
    Validate one non-empty expression body.

    Function calls and element references are mutually exclusive: once a
    call is found the reference checks are skipped, since templates may
    define arbitrary functions whose arguments we cannot interpret.
    """
    expression = expression.strip()
    findings: list[Finding] = []

    name = function_call_name(expression)
    if name is not None:
        if not is_identifier(name):
            findings.append(
                make_finding(
                    line_number,
                    column,
                    ErrorType.FUNCTION,
                    f"Invalid function name: {name}",
                    source_line,
                )
            )
        elif name not in KNOWN_FUNCTIONS:
            logger.debug("line %d: custom function %r", line_number, name)
        if not balanced_parentheses(expression):
            findings.append(
                make_finding(
                    line_number,
                    column,
                    ErrorType.SYNTAX,
                    "Unbalanced parentheses in function call",
                    source_line,
                )
            )
        return findings

    if "." in expression or "[" in expression:
        findings.extend(
            _validate_reference(expression, line_number, column, source_line)
        )
    return findings


def _validate_reference(
    expression: str, line_number: int, column: int, source_line: str
) -> list[Finding]:
    findings: list[Finding] = []
    if "[" in expression and not valid_index_access(expression):
        findings.append(
            make_finding(
                line_number,
                column,
                ErrorType.REFERENCE,
                "Invalid array access syntax - use [index] or [variable]",
                source_line,
            )
        )
    for segment in invalid_reference_segments(expression):
        findings.append(
            make_finding(
                line_number,
                column,
                ErrorType.REFERENCE,
                f"Invalid element reference: {segment}",
                source_line,
            )
        )
    return findings
