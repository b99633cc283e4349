from __future__ import annotations

import logging

import pytest

from lib_struct_logger.domain.levels import TRACE, Level


def test_trace_is_registered_with_logging() -> None:
    assert TRACE == 5
    assert logging.getLevelName(TRACE) == "TRACE"


def test_levels_match_logging_constants() -> None:
    assert [int(level) for level in Level] == [TRACE, logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR]


@pytest.mark.parametrize(
    ("name", "expected"),
    [("warn", Level.WARN), ("WARNING", Level.WARN), (" info ", Level.INFO), ("Trace", Level.TRACE)],
)
def test_from_name_is_case_insensitive(name: str, expected: Level) -> None:
    assert Level.from_name(name) is expected


def test_from_name_rejects_unknown_levels() -> None:
    with pytest.raises(KeyError):
        Level.from_name("critical")
