from __future__ import annotations

from wr_linter.template_syntax.scanning import erase_html_comments
from wr_linter.template_syntax.scanning import find_unrecognized_tag_starts
from wr_linter.template_syntax.scanning import parse_attributes
from wr_linter.template_syntax.scanning import scan_expressions
from wr_linter.template_syntax.scanning import scan_tags


def test_erase_html_comments_keeps_columns():
    line = "a<!-- %x% <wr-if> -->b %y%"
    erased = erase_html_comments(line)
    assert len(erased) == len(line)
    assert "<wr-if>" not in erased
    assert erased.index("b") == line.index("b")
    assert erased.count("%") == 2


def test_scan_expressions_bodies_and_columns():
    matches = scan_expressions("a %x% b %%")
    assert [m.body for m in matches] == ["x", ""]
    assert [m.column for m in matches] == [2, 8]


def test_scan_expressions_does_not_nest():
    matches = scan_expressions("%a%b%c%")
    assert [m.body for m in matches] == ["a", "c"]


def test_scan_tags_document_order():
    tokens = scan_tags("</wr-then><wr-else>x</wr-else>")
    assert [(t.kind, t.name) for t in tokens] == [
        ("close", "wr-then"),
        ("open", "wr-else"),
        ("close", "wr-else"),
    ]
    assert [t.start for t in tokens] == [0, 10, 20]


def test_scan_tags_self_closing_is_not_also_open():
    tokens = scan_tags('<wr-variable name="x" /><wr-break/>')
    assert [(t.kind, t.name) for t in tokens] == [
        ("self_closing", "wr-variable"),
        ("self_closing", "wr-break"),
    ]
    assert tokens[0].attributes == ' name="x"'


def test_scan_tags_quoted_gt_in_attribute():
    tokens = scan_tags('<wr-if condition="a > b">')
    assert len(tokens) == 1
    assert tokens[0].kind == "open"
    assert tokens[0].attributes == ' condition="a > b"'


def test_scan_tags_skips_comment_markers():
    assert scan_tags("<wr--> note </wr-->") == []


def test_parse_attributes_with_escaped_quotes():
    attrs = parse_attributes(' condition="a == \\"b\\"" value="1"')
    assert [(a.name, a.value) for a in attrs] == [
        ("condition", 'a == \\"b\\"'),
        ("value", "1"),
    ]


def test_find_unrecognized_tag_starts():
    line = '<wr-if condition="x"><wr-for list=items'
    tokens = scan_tags(line)
    assert find_unrecognized_tag_starts(line, tokens) == [(21, "<wr-for")]


def test_find_unrecognized_tag_starts_ignores_comment_markers():
    line = "<wr-- bad"
    assert find_unrecognized_tag_starts(line, scan_tags(line)) == []


def test_scan_tags_ignores_close_inside_attribute_value():
    tokens = scan_tags('<wr-if condition="a </wr-if> b"></wr-if>')
    assert [(t.kind, t.name, t.start) for t in tokens] == [
        ("open", "wr-if", 0),
        ("close", "wr-if", 32),
    ]
