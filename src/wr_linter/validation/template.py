"""
Template validation.

`validate()` runs the per-line stages in order (expressions, then elements
with their attribute and context checks) against one `ValidationRun`, drains
the nesting stack, and returns the findings sorted by position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from ..template_syntax.scanning import erase_html_comments
from ..types import ErrorType
from ..types import Finding
from ..types import ValidationOptions
from .expressions import validate_expressions
from .structural import NestingStack
from .structural import unclosed_findings
from .structural import validate_elements

logger = logging.getLogger(__name__)


@dataclass
class ValidationRun:
    """State for validating one template; discarded after `finish()`."""

    options: ValidationOptions = field(default_factory=ValidationOptions)
    findings: list[Finding] = field(default_factory=list)
    unknown_elements: set[str] = field(default_factory=set)
    stack: NestingStack = field(init=False)

    def __post_init__(self) -> None:
        self.stack = NestingStack(track_children=self.options.content_model)

    def validate_line(self, line: str, line_number: int) -> None:
        scan_line = erase_html_comments(line)
        self.findings.extend(validate_expressions(scan_line, line_number, line))
        self.findings.extend(
            validate_elements(
                scan_line,
                line_number,
                line,
                self.stack,
                self.unknown_elements,
            )
        )

    def finish(self) -> list[Finding]:
        self.findings.extend(unclosed_findings(self.stack))
        # sorted() is stable: ties keep discovery order.
        return sorted(self.findings, key=lambda f: f.sort_key)


def validate(
    content: str, options: ValidationOptions | None = None
) -> list[Finding]:
    """
    Validate template text and return its findings ordered by (line, column).

    Never raises for malformed template content.
    """
    run = ValidationRun(options=options or ValidationOptions())
    lines = [line.removesuffix("\r") for line in content.split("\n")]
    for index, line in enumerate(lines):
        run.validate_line(line, index + 1)
    findings = run.finish()
    logger.debug("validated %d line(s): %d finding(s)", len(lines), len(findings))
    return findings


def validate_file(
    path: str | Path, options: ValidationOptions | None = None
) -> list[Finding]:
    """
    Read and validate a template file.

    Read failures are returned as a single finding at line 0 instead of
    being raised.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("template not found: %s", path)
        return [Finding(0, 0, ErrorType.SYNTAX, f"File not found: {path}")]
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("cannot read %s: %s", path, e)
        return [Finding(0, 0, ErrorType.SYNTAX, f"Error reading file: {e}")]

    logger.debug("validating %s", path)
    return validate(content, options)
