"""Testing helpers that keep failure scenarios observable and predictable.

Purpose
    Provide a recording backend and intentionally failing collaborators so the
    "logging never raises" guarantee can be exercised without brittle fixtures.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``i_should_fail``: raises ``RuntimeError`` so callers can assert on the
      propagated error details.
    - ``FailingRenderer``: renderer whose ``end`` step raises.
    - ``RecordingBackend``: in-memory backend capturing every ``log`` call.

System Integration
    Used by the CLI ``fail`` command and by the unit and end-to-end suites.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message emitted when ``i_should_fail`` triggers a failure sequence."""


def i_should_fail() -> None:
    """Raise a deterministic :class:`RuntimeError` for failure-path testing.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    RuntimeError: i should fail
    """

    raise RuntimeError(FAILURE_MESSAGE)


class FailingRenderer:
    """Renderer that accepts input normally and raises when finishing a line."""

    def start(self, logger: Any) -> list[str]:
        return []

    def add_message(self, logger: Any, state: list[str], message: str) -> None:
        state.append(message)

    def add_field(self, logger: Any, state: list[str], key: str, value: Any) -> None:
        state.append(f"{key}={value}")

    def end(self, logger: Any, state: list[str]) -> str:
        raise RuntimeError(FAILURE_MESSAGE)


@dataclass(frozen=True)
class Record:
    """One captured ``log`` call."""

    level: int
    message: str
    exc_info: Any = None


@dataclass
class RecordingBackend:
    """Backend storing every call in :attr:`records`.

    Examples
    --------
    >>> backend = RecordingBackend(level=logging.INFO)
    >>> backend.log(logging.DEBUG, "hidden")
    >>> backend.log(logging.INFO, "shown")
    >>> backend.messages()
    ['shown']
    """

    level: int = logging.NOTSET
    name: str = "recording"
    records: list[Record] = field(default_factory=list)

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802 - mirrors logging.Logger
        return level >= self.level

    def log(self, level: int, msg: object, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        self.records.append(Record(int(level), str(msg), kwargs.get("exc_info")))

    def messages(self, level: int | None = None) -> list[str]:
        """Return captured messages, optionally only those at *level*."""

        return [record.message for record in self.records if level is None or record.level == level]


__all__ = ["FAILURE_MESSAGE", "FailingRenderer", "Record", "RecordingBackend", "i_should_fail"]
