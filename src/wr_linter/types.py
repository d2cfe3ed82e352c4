"""
Shared types for scanning and validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum


class ErrorType(str, Enum):
    """Finding categories. There is no severity: every finding is an error."""

    SYNTAX = "Syntax Error"
    ATTRIBUTE = "Attribute Error"
    REFERENCE = "Reference Error"
    STRUCTURE = "Structure Error"
    FUNCTION = "Function Error"


@dataclass(frozen=True)
class Finding:
    """
    A single defect found in a template.

    `line_number` is 1-based (0 for file-level failures), `column` is the
    0-based offset of the offending token when known. `context` is the
    stripped source line and may be empty.
    """

    line_number: int
    column: int
    error_type: ErrorType
    message: str
    context: str = ""

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.line_number, self.column)

    def __str__(self) -> str:
        return (
            f"Line {self.line_number}:{self.column} - "
            f"{self.error_type.value}: {self.message}"
        )


@dataclass(frozen=True)
class ElementSpec:
    """
    Static description of a known `wr-*` element.

    `self_closing` marks elements that never take a body (and so are never
    pushed onto the nesting stack).
    """

    name: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    self_closing: bool = False

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(self.required) | frozenset(self.optional)


@dataclass
class StackEntry:
    """An open container element on the nesting stack."""

    name: str
    line: int
    # Only filled when content-model tracking is enabled.
    children: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationOptions:
    """
    Knobs for a validation run.

    content_model: track direct `wr-*` children of `wr-switch` and
    `wr-conditional` frames and report children of the wrong type when the
    frame closes. Off by default.
    """

    content_model: bool = False


# ---------------------------------------------------------------------------
# Finding helpers
# ---------------------------------------------------------------------------


def make_finding(
    line_number: int,
    column: int,
    error_type: ErrorType,
    message: str,
    line: str = "",
) -> Finding:
    """
    Create a finding, using the stripped source line as its context.
    """
    return Finding(
        line_number=line_number,
        column=column,
        error_type=error_type,
        message=message,
        context=line.strip(),
    )
