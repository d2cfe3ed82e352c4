"""
Command line interface.

    wr-lint check TEMPLATE...           validate templates
    wr-lint fixtures [CATEGORY|FILE]    run metadata-driven fixtures
    wr-lint summary                     list fixture coverage
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .fixtures import DEFAULT_FIXTURE_DIR
from .fixtures import FixtureReport
from .fixtures import FixtureResult
from .fixtures import coverage_summary
from .fixtures import list_categories
from .fixtures import run_fixture
from .fixtures import run_fixtures
from .logging import LogConfig
from .logging import configure_logging
from .types import Finding
from .types import ValidationOptions
from .validation.template import validate_file

logger = logging.getLogger(__name__)


def _print_findings(
    console: Console, findings: list[Finding], *, verbose: bool, indent: str = ""
) -> None:
    for finding in findings:
        if verbose:
            console.print(
                f"{indent}Line {finding.line_number}:{finding.column} - "
                f"{finding.error_type.value}"
            )
            console.print(f"{indent}  {escape(finding.message)}")
            if finding.context:
                console.print(f"{indent}  Context: {escape(finding.context)}")
            console.print()
        else:
            console.print(
                f"{indent}Line {finding.line_number}: {escape(finding.message)}"
            )


def cmd_check(args: argparse.Namespace, console: Console) -> int:
    options = ValidationOptions(content_model=args.content_model)
    exit_code = 0
    for path in args.files:
        findings = validate_file(path, options)
        if not findings:
            console.print(f"[green]✅ {escape(str(path))} is valid![/green]")
            continue
        exit_code = 1
        console.print(
            f"[red]❌ Found {len(findings)} error(s) in {escape(str(path))}:[/red]"
        )
        console.print()
        _print_findings(console, findings, verbose=args.verbose)
    return exit_code


def _print_result(console: Console, result: FixtureResult, *, verbose: bool) -> None:
    mark = "[green]✅[/green]" if result.passed else "[red]❌[/red]"
    console.print(f"  {mark} {escape(result.name)}")
    if not verbose:
        return
    if not result.passed:
        console.print(f"     {escape(result.reason)}")
        if result.findings:
            console.print(f"     Got {len(result.findings)} error(s):")
            _print_findings(console, result.findings, verbose=False, indent="       - ")
        else:
            console.print("     Got: No errors")
    if result.meta.description:
        console.print(f"     Description: {escape(result.meta.description)}")


def _print_report(console: Console, report: FixtureReport) -> None:
    table = Table(title="Test Summary", show_header=False)
    table.add_row("Total test cases", str(report.total))
    table.add_row("Passed", str(report.passed))
    table.add_row("Failed", str(report.failed))
    if report.total:
        table.add_row("Success rate", f"{report.success_rate}%")
    console.print()
    console.print(table)
    if report.failed == 0:
        console.print("[green]🎉 All tests passed![/green]")
    else:
        console.print(
            f"[yellow]⚠️  {report.failed} test(s) failed. "
            "Use --verbose for details.[/yellow]"
        )


def cmd_fixtures(args: argparse.Namespace, console: Console) -> int:
    root: Path = args.dir
    categories = list_categories(root)

    if args.list:
        console.print("Available test categories:")
        for category in categories:
            console.print(f"  - {escape(category)}")
        return 0

    options = ValidationOptions(content_model=args.content_model)
    target = args.target
    if target and Path(target).is_file():
        report = FixtureReport(results=[run_fixture(Path(target), options)])
    elif target and target not in categories:
        console.print(f"[red]❌ Category '{escape(target)}' not found![/red]")
        console.print(f"Available categories: {escape(', '.join(categories))}")
        return 1
    else:
        report = run_fixtures(root, target, options)

    for result in report.results:
        _print_result(console, result, verbose=args.verbose)
    _print_report(console, report)
    return 0 if report.failed == 0 else 1


def cmd_summary(args: argparse.Namespace, console: Console) -> int:
    summary = coverage_summary(args.dir)
    total = 0
    for category, cases in summary.items():
        total += len(cases)
        title = category.replace("-", " ").capitalize()
        console.print(f"\n📂 {escape(title)} Tests: {len(cases)} files")
        for name, description in cases:
            console.print(f"   ✓ {escape(name)}")
            if description:
                console.print(f"     {escape(description)}")
    console.print()
    console.print(f"Total test categories: {len(summary)}")
    console.print(f"Total individual test cases: {total}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wr-lint",
        description="Static validator for WebRelease2 template files.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log validation internals to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate one or more template files.")
    check.add_argument("files", nargs="+", type=Path, metavar="TEMPLATE")
    check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show column, category and source line for each error.",
    )
    check.add_argument(
        "--content-model",
        action="store_true",
        help="Also check wr-switch/wr-conditional children.",
    )
    check.set_defaults(func=cmd_check)

    fixtures = sub.add_parser("fixtures", help="Run metadata-driven fixture files.")
    fixtures.add_argument(
        "target",
        nargs="?",
        default=None,
        help="A category name or a single fixture file (default: all categories).",
    )
    fixtures.add_argument(
        "--dir",
        type=Path,
        default=DEFAULT_FIXTURE_DIR,
        help=f"Fixture root directory (default: {DEFAULT_FIXTURE_DIR}).",
    )
    fixtures.add_argument(
        "--list", action="store_true", help="List fixture categories and exit."
    )
    fixtures.add_argument("-v", "--verbose", action="store_true")
    fixtures.add_argument("--content-model", action="store_true")
    fixtures.set_defaults(func=cmd_fixtures)

    summary = sub.add_parser("summary", help="Show fixture coverage.")
    summary.add_argument("--dir", type=Path, default=DEFAULT_FIXTURE_DIR)
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        LogConfig(log_level=logging.DEBUG if args.debug else logging.WARNING)
    )
    console = console or Console(soft_wrap=True)
    logger.debug("running %s", args.command)
    return args.func(args, console)
