from __future__ import annotations

import pytest

from wr_linter.types import ErrorType
from wr_linter.types import StackEntry
from wr_linter.validation.context import validate_context
from wr_linter.validation.template import validate

from ._helpers import messages


@pytest.mark.parametrize(
    "line,expected",
    [
        ('<wr-case value="1">x</wr-case>', "wr-case can only be used inside wr-switch"),
        ("<wr-default>x</wr-default>", "wr-default can only be used inside wr-switch"),
        (
            '<wr-cond condition="a">x</wr-cond>',
            "wr-cond can only be used inside wr-conditional",
        ),
        ("<wr-then>x</wr-then>", "wr-then can only be used inside wr-if"),
        ("<wr-else>x</wr-else>", "wr-else can only be used inside wr-if"),
        ("<wr-break/>", "wr-break can only be used inside wr-for"),
    ],
)
def test_element_outside_required_ancestor(line, expected):
    findings = validate(line)
    assert messages(findings) == [expected]
    assert findings[0].error_type == ErrorType.STRUCTURE


def test_ancestor_at_any_depth():
    template = "\n".join(
        [
            '<wr-for variable="i" list="items">',
            '  <wr-if condition="i == 3">',
            "    <wr-then><wr-break/></wr-then>",
            "  </wr-if>",
            "</wr-for>",
        ]
    )
    assert validate(template) == []


def test_ancestor_must_still_be_open():
    template = '<wr-switch value="x"></wr-switch><wr-case value="1">a</wr-case>'
    assert messages(validate(template)) == [
        "wr-case can only be used inside wr-switch"
    ]


def test_validate_context_reads_stack_only():
    stack = [StackEntry("wr-switch", 1), StackEntry("wr-if", 2)]
    assert validate_context("wr-case", stack, 3, 0, "") == []
    assert validate_context("wr-variable", [], 3, 0, "") == []
    findings = validate_context("wr-cond", stack, 3, 5, "  <wr-cond>  ")
    assert [(f.line_number, f.column, f.context) for f in findings] == [
        (3, 5, "<wr-cond>")
    ]
    assert [e.name for e in stack] == ["wr-switch", "wr-if"]
