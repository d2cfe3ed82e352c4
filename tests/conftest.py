from __future__ import annotations

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "individual"


def _iter_fixture_files() -> list[Path]:
    if not FIXTURES_DIR.exists():
        return []
    return sorted(FIXTURES_DIR.glob("*/*.html"))


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """
    Parameterize fixture-file tests so failures are isolated per file.
    """
    if "fixture_path" not in metafunc.fixturenames:
        return
    paths = _iter_fixture_files()
    if not paths:
        metafunc.parametrize(
            "fixture_path",
            [
                pytest.param(
                    None,
                    id="no-fixtures",
                    marks=pytest.mark.skip(reason="No fixture files found."),
                )
            ],
        )
        return
    ids = [f"{p.parent.name}::{p.name}" for p in paths]
    metafunc.parametrize("fixture_path", paths, ids=ids)


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def write_template(tmp_path: Path):
    def _write(text: str, name: str = "template.html") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
