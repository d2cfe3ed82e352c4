from __future__ import annotations

from collections.abc import Iterable

from wr_linter.types import ErrorType
from wr_linter.types import Finding


def messages(findings: Iterable[Finding]) -> list[str]:
    return [f.message for f in findings]


def of_type(findings: Iterable[Finding], error_type: ErrorType) -> list[Finding]:
    return [f for f in findings if f.error_type == error_type]
