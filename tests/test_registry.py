from __future__ import annotations

import logging

import pytest

from wr_linter.logging import LogConfig
from wr_linter.logging import configure_logging
from wr_linter.registry import CONTAINER_ONLY
from wr_linter.registry import ELEMENTS
from wr_linter.registry import RESERVED_KEYWORDS
from wr_linter.registry import SELF_CLOSING_ONLY
from wr_linter.registry import is_reserved


def test_self_closing_only_set():
    assert SELF_CLOSING_ONLY == {
        "wr-->",
        "wr-break",
        "wr-variable",
        "wr-append",
        "wr-clear",
        "wr-return",
    }
    assert not SELF_CLOSING_ONLY & CONTAINER_ONLY
    assert SELF_CLOSING_ONLY | CONTAINER_ONLY == set(ELEMENTS)


def test_reserved_keywords_are_element_base_names():
    assert {"if", "then", "switch", "for", "variable", "return"} <= RESERVED_KEYWORDS
    assert is_reserved("Variable")
    assert not is_reserved("item")


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        ELEMENTS["wr-new"] = ELEMENTS["wr-if"]


def test_element_allowed_attributes():
    spec = ELEMENTS["wr-for"]
    assert spec.required == ("variable",)
    assert spec.allowed == {"variable", "list", "string", "times", "count", "index"}


def test_configure_logging(tmp_path):
    log_file = tmp_path / "wr.log"
    logger = configure_logging(LogConfig(log_file=log_file, log_level=logging.INFO))
    assert logger.name == "wr_linter"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    logging.getLogger("wr_linter.validation.template").debug("hello")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    assert "hello" in log_file.read_text()
