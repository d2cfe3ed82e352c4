"""
Structural (nesting-aware) validation.

This module validates:
- open/close/self-closing discipline for `wr-*` elements via a nesting stack
- the same-line pairing of the `<wr-->` / `</wr-->` comment markers
- tag starts that no tag pattern accepted (unterminated or malformed tags)

Attribute and context checks are triggered from here for each opening and
self-closing tag, before the element is pushed.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..registry import CONTAINER_ONLY
from ..registry import CONTENT_MODELS
from ..registry import SELF_CLOSING_ONLY
from ..registry import get_element
from ..template_syntax.scanning import TagToken
from ..template_syntax.scanning import comment_marker_positions
from ..template_syntax.scanning import find_unrecognized_tag_starts
from ..template_syntax.scanning import scan_tags
from ..types import ErrorType
from ..types import Finding
from ..types import StackEntry
from ..types import make_finding
from .attributes import validate_attributes
from .context import validate_context


class NestingStack:
    """
    The chain of currently open container elements, outermost first.

    With `track_children` enabled, direct `wr-*` children are recorded on
    frames that have a content model (`wr-switch`, `wr-conditional`).
    """

    def __init__(self, *, track_children: bool = False) -> None:
        self.track_children = track_children
        self._entries: list[StackEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StackEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[StackEntry, ...]:
        return tuple(self._entries)

    @property
    def top(self) -> StackEntry | None:
        return self._entries[-1] if self._entries else None

    def push(self, name: str, line: int) -> None:
        self._entries.append(StackEntry(name=name, line=line))

    def pop(self) -> StackEntry:
        return self._entries.pop()

    def record_child(self, name: str) -> None:
        top = self.top
        if self.track_children and top is not None and top.name in CONTENT_MODELS:
            top.children.append(name)

    def drain(self) -> list[StackEntry]:
        entries, self._entries = self._entries, []
        return entries


def validate_elements(
    scan_line: str,
    line_number: int,
    source_line: str,
    stack: NestingStack,
    unknown_elements: set[str],
) -> list[Finding]:
    """
    Process every `wr-*` tag on a line in document order, mutating `stack`.

    `unknown_elements` collects names already reported as unknown so their
    closing tags are not reported a second time.
    """
    findings: list[Finding] = []
    tokens = scan_tags(scan_line)

    for token in tokens:
        if token.kind == "close":
            findings.extend(
                _close_tag(token, line_number, source_line, stack, unknown_elements)
            )
        else:
            findings.extend(
                _open_tag(token, line_number, source_line, stack, unknown_elements)
            )

    findings.extend(_validate_comment_markers(scan_line, line_number, source_line))
    findings.extend(
        _validate_malformed_tags(scan_line, tokens, line_number, source_line)
    )
    return findings


def _open_tag(
    token: TagToken,
    line_number: int,
    source_line: str,
    stack: NestingStack,
    unknown_elements: set[str],
) -> list[Finding]:
    spec = get_element(token.name)
    if spec is None:
        unknown_elements.add(token.name)
        return [
            make_finding(
                line_number,
                token.start,
                ErrorType.SYNTAX,
                f"Unknown WebRelease2 element: {token.name}",
                source_line,
            )
        ]

    if token.kind == "self_closing" and token.name in CONTAINER_ONLY:
        return [
            make_finding(
                line_number,
                token.start,
                ErrorType.STRUCTURE,
                f"{token.name} should not be self-closing",
                source_line,
            )
        ]

    findings = validate_attributes(
        spec, token.attributes, line_number, token.start, source_line
    )
    findings.extend(
        validate_context(token.name, stack, line_number, token.start, source_line)
    )
    stack.record_child(token.name)
    if token.kind == "open" and token.name not in SELF_CLOSING_ONLY:
        stack.push(token.name, line_number)
    return findings


def _close_tag(
    token: TagToken,
    line_number: int,
    source_line: str,
    stack: NestingStack,
    unknown_elements: set[str],
) -> list[Finding]:
    name = token.name

    def finding(error_type: ErrorType, message: str) -> list[Finding]:
        return [make_finding(line_number, token.start, error_type, message, source_line)]

    if get_element(name) is None:
        if name in unknown_elements:
            return []
        unknown_elements.add(name)
        return finding(ErrorType.SYNTAX, f"Unknown WebRelease2 element: {name}")

    if name in SELF_CLOSING_ONLY:
        return finding(ErrorType.STRUCTURE, f"{name} should not have closing tag")

    top = stack.top
    if top is None:
        return finding(ErrorType.STRUCTURE, f"Unexpected closing tag: {name}")
    if top.name != name:
        return finding(
            ErrorType.STRUCTURE,
            f"Mismatched closing tag: expected {top.name}, found {name}",
        )

    entry = stack.pop()
    if stack.track_children:
        return _validate_content_model(entry, line_number, token.start, source_line)
    return []


def _validate_content_model(
    entry: StackEntry, line_number: int, column: int, source_line: str
) -> list[Finding]:
    allowed = CONTENT_MODELS.get(entry.name)
    if allowed is None:
        return []
    expected = " or ".join(sorted(allowed))
    return [
        make_finding(
            line_number,
            column,
            ErrorType.STRUCTURE,
            f"{entry.name} may only contain {expected}, found {child}",
            source_line,
        )
        for child in entry.children
        if child not in allowed
    ]


def _validate_comment_markers(
    scan_line: str, line_number: int, source_line: str
) -> list[Finding]:
    """
    `<wr-->` comments do not nest or span lines: both markers share one line.
    """
    open_at, close_at = comment_marker_positions(scan_line)
    if open_at >= 0:
        if close_at < 0:
            return [
                make_finding(
                    line_number,
                    open_at,
                    ErrorType.SYNTAX,
                    "WebRelease2 comment must be closed with </wr--> on the same line",
                    source_line,
                )
            ]
        return []

    bad_open = scan_line.find("<wr--")
    if bad_open >= 0:
        return [
            make_finding(
                line_number,
                bad_open,
                ErrorType.SYNTAX,
                "Invalid WebRelease2 comment syntax - use <wr--> to open comments",
                source_line,
            )
        ]
    if close_at >= 0:
        return [
            make_finding(
                line_number,
                close_at,
                ErrorType.SYNTAX,
                "Unexpected </wr--> without <wr--> on the same line",
                source_line,
            )
        ]
    return []


def _validate_malformed_tags(
    scan_line: str, tokens: list[TagToken], line_number: int, source_line: str
) -> list[Finding]:
    findings: list[Finding] = []
    for column, text in find_unrecognized_tag_starts(scan_line, tokens):
        if ">" not in scan_line[column:]:
            message = f"Malformed tag {text}: missing closing '>' or '/>'"
        elif text.startswith("</"):
            message = f"Malformed closing tag {text}: closing tags take no attributes"
        else:
            message = (
                f'Malformed tag {text}: attributes must be written as name="value"'
            )
        findings.append(
            make_finding(line_number, column, ErrorType.SYNTAX, message, source_line)
        )
    return findings


def unclosed_findings(stack: NestingStack) -> list[Finding]:
    """Drain the stack, reporting every element left open (outermost first)."""
    return [
        make_finding(
            entry.line,
            0,
            ErrorType.STRUCTURE,
            f"Unclosed element: {entry.name}",
        )
        for entry in stack.drain()
    ]
