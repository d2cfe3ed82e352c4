"""
Line scanning.

This module defines the canonical per-line token stream used by the
validators: `%...%` expressions and `wr-*` tag tokens. Scanning is strictly
line-local; a tag or expression split across lines is not recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from ..registry import COMMENT_CLOSE
from ..registry import COMMENT_OPEN

HTML_COMMENT_RE = re.compile(r"<!--.*?-->")

# Non-greedy and non-nested: `%` is its own terminator, so `%%` is an empty match.
EXPRESSION_RE = re.compile(r"%([^%]*)%")

_ATTRS = r'((?:\s+\w+\s*=\s*"(?:[^"\\]|\\.)*")*)'
OPEN_TAG_RE = re.compile(r"<(wr-\w+)" + _ATTRS + r"\s*(/?)>")
CLOSE_TAG_RE = re.compile(r"</(wr-\w+)\s*>")
ATTRIBUTE_RE = re.compile(r'(\w+)\s*=\s*"((?:[^"\\]|\\.)*)"')

# Any `<wr-` / `</wr-` start; used to find tags the patterns above rejected.
TAG_START_RE = re.compile(r"</?wr-[\w-]*")

TagKind = Literal["open", "self_closing", "close"]


@dataclass(frozen=True, slots=True)
class ExpressionMatch:
    body: str
    column: int


@dataclass(frozen=True, slots=True)
class TagToken:
    """
    A recognised `wr-*` tag on one line.

    `start`/`end` are offsets into the line; `attributes` is the raw
    attribute string (empty for closing tags).
    """

    kind: TagKind
    name: str
    attributes: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: str


def erase_html_comments(line: str) -> str:
    """
    Blank out `<!--...-->` spans, keeping every other column in place.
    """
    return HTML_COMMENT_RE.sub(lambda m: " " * len(m.group(0)), line)


def scan_expressions(line: str) -> list[ExpressionMatch]:
    return [
        ExpressionMatch(body=m.group(1), column=m.start())
        for m in EXPRESSION_RE.finditer(line)
    ]


def scan_tags(line: str) -> list[TagToken]:
    """
    Return open, self-closing and closing `wr-*` tags in document order.

    Self-closing tags are told apart from open tags by the trailing `/`, so a
    tag is never reported as both. The `<wr-->` / `</wr-->` comment markers
    are not returned; they are checked separately.
    """
    tokens: list[TagToken] = []
    for m in OPEN_TAG_RE.finditer(line):
        tokens.append(
            TagToken(
                kind="self_closing" if m.group(3) else "open",
                name=m.group(1),
                attributes=m.group(2),
                start=m.start(),
                end=m.end(),
            )
        )
    spans = [(t.start, t.end) for t in tokens]
    for m in CLOSE_TAG_RE.finditer(line):
        # Inside a quoted attribute value of an enclosing tag.
        if any(start < m.start() < end for start, end in spans):
            continue
        tokens.append(
            TagToken(
                kind="close",
                name=m.group(1),
                attributes="",
                start=m.start(),
                end=m.end(),
            )
        )
    tokens.sort(key=lambda t: t.start)
    return tokens


def parse_attributes(attributes: str) -> list[Attribute]:
    """
    Split a raw attribute string into `name="value"` pairs.

    Values may contain backslash-escaped quotes; they are returned verbatim.
    """
    return [
        Attribute(name=m.group(1), value=m.group(2))
        for m in ATTRIBUTE_RE.finditer(attributes)
    ]


def find_unrecognized_tag_starts(
    line: str, tokens: list[TagToken]
) -> list[tuple[int, str]]:
    """
    Return `(column, text)` for each `<wr-`/`</wr-` start not covered by a
    recognised tag token. Comment markers (`<wr--`, `</wr--`) are skipped.
    """
    covered = [(t.start, t.end) for t in tokens]
    out: list[tuple[int, str]] = []
    for m in TAG_START_RE.finditer(line):
        text = m.group(0)
        if text.startswith(("<wr--", "</wr--")):
            continue
        if any(start <= m.start() < end for start, end in covered):
            continue
        out.append((m.start(), text))
    return out


def comment_marker_positions(line: str) -> tuple[int, int]:
    """Offsets of the first `<wr-->` and `</wr-->` on the line (-1 if absent)."""
    return line.find(COMMENT_OPEN), line.find(COMMENT_CLOSE)
