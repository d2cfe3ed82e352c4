from __future__ import annotations

import pytest

from wr_linter.cli import main


def test_check_valid_file(write_template, capsys):
    path = write_template('<wr-if condition="x"></wr-if>\n')
    assert main(["check", str(path)]) == 0
    assert "is valid!" in capsys.readouterr().out


def test_check_invalid_file(write_template, capsys):
    path = write_template("<p>%%</p>\n</wr-if>\n")
    assert main(["check", str(path)]) == 1
    out = capsys.readouterr().out
    assert "Found 2 error(s)" in out
    assert "Line 1: Empty expression found" in out
    assert "Line 2: Unexpected closing tag: wr-if" in out


def test_check_verbose_shows_category_and_context(write_template, capsys):
    path = write_template("<p>%a.[x y]%</p>\n")
    assert main(["check", "-v", str(path)]) == 1
    out = capsys.readouterr().out
    assert "Line 1:3 - Reference Error" in out
    assert "Invalid array access syntax - use [index] or [variable]" in out
    assert "Context: <p>%a.[x y]%</p>" in out


def test_check_multiple_files_fails_if_any_fails(write_template, tmp_path):
    good = write_template("<p>ok</p>", "good.html")
    bad = write_template("%%", "bad.html")
    assert main(["check", str(good), str(bad)]) == 1
    assert main(["check", str(good)]) == 0


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "nope.html")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_check_content_model_flag(write_template):
    path = write_template(
        '<wr-switch value="x"><wr-if condition="y"><wr-then>a</wr-then></wr-if>'
        "</wr-switch>\n"
    )
    assert main(["check", str(path)]) == 0
    assert main(["check", "--content-model", str(path)]) == 1


def test_check_requires_a_file():
    with pytest.raises(SystemExit) as exc:
        main(["check"])
    assert exc.value.code == 2


def test_fixtures_all_pass(fixtures_dir, capsys):
    assert main(["fixtures", "--dir", str(fixtures_dir)]) == 0
    out = capsys.readouterr().out
    assert "All tests passed!" in out
    assert "Success rate" in out


def test_fixtures_list(fixtures_dir, capsys):
    assert main(["fixtures", "--list", "--dir", str(fixtures_dir)]) == 0
    out = capsys.readouterr().out
    assert "  - valid" in out
    assert "  - structure-error" in out


def test_fixtures_single_category_and_file(fixtures_dir, capsys):
    assert main(["fixtures", "valid", "--dir", str(fixtures_dir)]) == 0
    single = fixtures_dir / "structure-error" / "unclosed-element.html"
    assert main(["fixtures", str(single), "-v"]) == 0
    assert "Unclosed element" in capsys.readouterr().out


def test_fixtures_unknown_category(fixtures_dir, capsys):
    assert main(["fixtures", "nope", "--dir", str(fixtures_dir)]) == 1
    assert "Category 'nope' not found!" in capsys.readouterr().out


def test_fixtures_failure_is_reported(write_template, tmp_path, capsys):
    write_template(
        '<!-- TEST_META:\n  expected_result: "valid"\n-->\n%%\n', "valid/bad.html"
    )
    assert main(["fixtures", "--dir", str(tmp_path), "--verbose"]) == 1
    out = capsys.readouterr().out
    assert "Expected: No errors" in out
    assert "1 test(s) failed" in out


def test_summary(fixtures_dir, capsys):
    assert main(["summary", "--dir", str(fixtures_dir)]) == 0
    out = capsys.readouterr().out
    assert "Valid Tests: 4 files" in out
    assert "Total individual test cases" in out
