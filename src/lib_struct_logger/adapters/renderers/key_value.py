"""Key-value renderer producing ``message, k1=v1, k2=v2`` lines.

Purpose
-------
Default human-readable format. Values are stringified by the value renderer,
double quotes are escaped, and values containing whitespace are wrapped in
double quotes so the line stays splittable.

Contents
--------
* :class:`KeyValueRenderer` – renderer with optional fixed separator and value
  renderer; otherwise both are read from the process settings at ``start``.
* :func:`format_value` – quoting rule for one value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ...domain.settings import SETTINGS


def format_value(text: str) -> str:
    """Escape double quotes and quote *text* when it contains whitespace.

    Examples
    --------
    >>> format_value("plain")
    'plain'
    >>> format_value("two words")
    '"two words"'
    >>> format_value('say "hi"')
    '"say \\\\"hi\\\\""'
    """

    escaped = text.replace('"', '\\"')
    if any(char.isspace() for char in escaped):
        return f'"{escaped}"'
    return escaped


@dataclass(slots=True)
class _Line:
    """Per-call builder: the collected parts and the settings captured at start."""

    parts: list[str]
    separator: str
    value_renderer: Callable[[Any], str]


class KeyValueRenderer:
    """Render a message followed by ``key=value`` entries.

    Why
    ----
    Plain text lines are what most log pipelines read by default and remain
    greppable without a decoder.

    Parameters
    ----------
    separator:
        Fixed separator placed before each entry (followed by one space).
        ``None`` reads :data:`~lib_struct_logger.domain.settings.SETTINGS` on
        every call.
    value_renderer:
        Fixed value renderer, or ``None`` to read the process settings.

    Examples
    --------
    >>> renderer = KeyValueRenderer(separator=",")
    >>> state = renderer.start(None)
    >>> renderer.add_message(None, state, "Hello")
    >>> renderer.add_field(None, state, "a", "b")
    >>> renderer.add_field(None, state, "note", "two words")
    >>> renderer.end(None, state)
    'Hello, a=b, note="two words"'
    """

    def __init__(
        self,
        *,
        separator: str | None = None,
        value_renderer: Callable[[Any], str] | None = None,
    ) -> None:
        self._separator = separator
        self._value_renderer = value_renderer

    def start(self, logger: Any) -> _Line:
        return _Line(
            parts=[],
            separator=SETTINGS.separator if self._separator is None else self._separator,
            value_renderer=SETTINGS.value_renderer if self._value_renderer is None else self._value_renderer,
        )

    def add_message(self, logger: Any, state: _Line, message: str) -> None:
        state.parts.append(message)

    def add_field(self, logger: Any, state: _Line, key: str, value: Any) -> None:
        rendered = format_value(str(state.value_renderer(value)))
        state.parts.append(f"{state.separator} {key}={rendered}")

    def end(self, logger: Any, state: _Line) -> str:
        return "".join(state.parts)

    def __repr__(self) -> str:
        return f"KeyValueRenderer(separator={self._separator!r})"
