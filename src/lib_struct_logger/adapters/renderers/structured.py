"""Structured renderer producing one compact JSON object per line.

Purpose
-------
Machine-readable output for log shippers. The message is stored under
``message``; fields follow in render order.

Contents
--------
* :data:`MESSAGE_KEY` / :data:`CUSTOM_MESSAGE_KEY` – reserved field names.
* :func:`native_value` – keep JSON-native scalars, stringify the rest.
* :class:`MappingRenderer` – shared dict-building steps.
* :class:`StructuredRenderer` – JSON serialisation of the builder.
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Final

from ...domain.settings import SETTINGS
from ...observability import report_warning

MESSAGE_KEY: Final[str] = "message"
CUSTOM_MESSAGE_KEY: Final[str] = "custom_message"

_NATIVE_SCALARS: Final[frozenset[type]] = frozenset({bool, int, str})


def native_value(value: Any, value_renderer: Callable[[Any], str]) -> Any:
    """Return *value* unchanged when it is a JSON scalar, else its rendered text.

    Only the exact scalar types count as native: subclasses such as
    ``IntEnum`` members go through *value_renderer* because the YAML emitter
    cannot represent them. Non-finite floats are not valid JSON and are
    rendered as text too.

    Examples
    --------
    >>> native_value(3, str), native_value(None, str), native_value(True, str)
    (3, None, True)
    >>> native_value(float("nan"), str), native_value(("a", 1), str)
    ('nan', "('a', 1)")
    >>> from enum import IntEnum
    >>> class Color(IntEnum):
    ...     RED = 1
    >>> native_value(Color.RED, lambda value: value.name)
    'RED'
    """

    kind = type(value)
    if value is None or kind in _NATIVE_SCALARS:
        return value
    if kind is float and math.isfinite(value):
        return value
    return str(value_renderer(value))


class MappingRenderer:
    """Builder steps shared by renderers whose state is an ordered ``dict``.

    Subclasses add the ``end`` step that serialises the finished ``dict``; this
    base alone is not a renderer.
    """

    def __init__(self, *, value_renderer: Callable[[Any], str] | None = None) -> None:
        self._value_renderer = value_renderer

    def start(self, logger: Any) -> dict[str, Any]:
        return {}

    def add_message(self, logger: Any, state: dict[str, Any], message: str) -> None:
        state[MESSAGE_KEY] = message

    def add_field(self, logger: Any, state: dict[str, Any], key: str, value: Any) -> None:
        if key == MESSAGE_KEY:
            report_warning(
                logger,
                f"key `{MESSAGE_KEY}` renamed to `{CUSTOM_MESSAGE_KEY}` to avoid overriding the message field.",
            )
            key = CUSTOM_MESSAGE_KEY
        renderer = SETTINGS.value_renderer if self._value_renderer is None else self._value_renderer
        state[key] = native_value(value, renderer)


class StructuredRenderer(MappingRenderer):
    """Render the message and fields as a single-line JSON object.

    Examples
    --------
    >>> renderer = StructuredRenderer()
    >>> state = renderer.start(None)
    >>> renderer.add_message(None, state, "Hello")
    >>> renderer.add_field(None, state, "count", 2)
    >>> renderer.add_field(None, state, "user", None)
    >>> renderer.end(None, state)
    '{"message":"Hello","count":2,"user":null}'
    """

    def end(self, logger: Any, state: dict[str, Any]) -> str:
        return json.dumps(state, separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return "StructuredRenderer()"
