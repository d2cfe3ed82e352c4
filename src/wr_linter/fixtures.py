"""
Fixture-driven template checks.

A fixture is a template file that starts with a metadata comment:

    <!-- TEST_META:
      name: "Basic if structure"
      expected_result: "valid"
      description: "wr-if with then/else branches"
    -->

followed by the template content. Fixtures live under `<root>/<category>/`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .types import Finding
from .types import ValidationOptions
from .validation.template import validate_file

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_DIR = Path("tests/fixtures/individual")

META_START = "<!-- TEST_META:"
META_END = "-->"
META_LINE_RE = re.compile(r'\s*(\w+):\s*"([^"]*)"')


class FixtureMeta(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    expected_result: str = "unknown"
    expected_error_message: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class FixtureResult:
    path: Path
    name: str
    meta: FixtureMeta
    findings: list[Finding]
    passed: bool
    reason: str = ""


@dataclass
class FixtureReport:
    results: list[FixtureResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def success_rate(self) -> float:
        if not self.results:
            return 0.0
        return round(self.passed / self.total * 100, 1)


def parse_fixture_metadata(text: str) -> FixtureMeta:
    values: dict[str, str] = {}
    in_meta = False
    for line in text.splitlines():
        if line.strip() == META_START:
            in_meta = True
            continue
        if in_meta and line.strip() == META_END:
            break
        if in_meta:
            match = META_LINE_RE.match(line)
            if match:
                values[match.group(1)] = match.group(2)
    return FixtureMeta.model_validate(values)


def read_fixture_metadata(path: Path) -> FixtureMeta:
    """Metadata of a fixture file; an unreadable file has empty metadata."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("cannot read fixture metadata %s: %s", path, e)
        return FixtureMeta()
    return parse_fixture_metadata(content)


def display_name(path: Path, meta: FixtureMeta) -> str:
    if meta.name:
        return meta.name
    return path.stem.replace("-", " ").capitalize()


def run_fixture(path: Path, options: ValidationOptions | None = None) -> FixtureResult:
    """Validate one fixture and compare the findings with its metadata."""
    findings = validate_file(path, options)
    meta = read_fixture_metadata(path)
    expected = meta.expected_result
    # validate_file reports read failures at line 0
    unreadable = [f for f in findings if f.line_number == 0]

    if unreadable:
        passed = False
        reason = unreadable[0].message
    elif expected == "valid":
        passed = not findings
        reason = "" if passed else "Expected: No errors"
    elif expected == "error" and meta.expected_error_message:
        wanted = meta.expected_error_message
        passed = any(wanted in f.message for f in findings)
        reason = "" if passed else f"Expected error containing: '{wanted}'"
    elif expected == "error":
        passed = bool(findings)
        reason = "" if passed else "Expected: At least one error"
    else:
        passed = False
        reason = f"Unknown expected result: {expected}"

    logger.debug("fixture %s: %s", path, "pass" if passed else "fail")
    return FixtureResult(
        path=path,
        name=display_name(path, meta),
        meta=meta,
        findings=findings,
        passed=passed,
        reason=reason,
    )


def list_categories(root: Path) -> list[str]:
    if not root.is_dir():
        return []
    return sorted(
        p.name for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")
    )


def iter_fixture_files(root: Path, category: str | None = None) -> list[Path]:
    categories = [category] if category else list_categories(root)
    paths: list[Path] = []
    for name in categories:
        paths.extend(sorted((root / name).glob("*.html")))
    return paths


def run_fixtures(
    root: Path,
    category: str | None = None,
    options: ValidationOptions | None = None,
) -> FixtureReport:
    report = FixtureReport()
    for path in iter_fixture_files(root, category):
        report.results.append(run_fixture(path, options))
    return report


def coverage_summary(root: Path) -> dict[str, list[tuple[str, str | None]]]:
    """Map each category to its `(name, description)` cases."""
    summary: dict[str, list[tuple[str, str | None]]] = {}
    for category in list_categories(root):
        cases = []
        for path in iter_fixture_files(root, category):
            meta = read_fixture_metadata(path)
            cases.append((display_name(path, meta), meta.description))
        summary[category] = cases
    return summary
