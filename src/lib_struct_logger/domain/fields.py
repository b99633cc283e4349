"""Field value objects exchanged between every layer of the pipeline.

Purpose
-------
Model one rendered key/value pair (:class:`Field`) and the stock Loggable
implementation (:class:`GenericLoggable`) used for bound and global context.
Field sequences are plain ``list``/``tuple`` objects of :class:`Field`;
insertion order is the render order and duplicate keys are allowed at this
layer.

Contents
--------
* :class:`Field` – immutable ``(key, value)`` pair.
* :class:`GenericLoggable` – Loggable wrapping a flat alternating sequence.
* :func:`fields_to_pairs` – flatten fields into an alternating sequence.
* :func:`fields_to_dict` – last-write-wins mapping view of a sequence.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, NamedTuple


class Field(NamedTuple):
    """One structured ``key``/``value`` pair destined for a renderer.

    Examples
    --------
    >>> Field("user", "ada")
    Field(key='user', value='ada')
    """

    key: str
    value: Any


class GenericLoggable:
    """Loggable over a flat sequence of alternating keys and values.

    Why
    ----
    Bound context, global context and ad-hoc callers need a Loggable without
    writing a class of their own.

    Examples
    --------
    >>> GenericLoggable("env", "prod", "region", "eu").loggable_fields()
    ('env', 'prod', 'region', 'eu')
    >>> GenericLoggable.from_mapping({"env": "prod"}).loggable_fields()
    ('env', 'prod')
    """

    __slots__ = ("_items",)

    def __init__(self, *items: Any) -> None:
        self._items: tuple[Any, ...] = tuple(items)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "GenericLoggable":
        """Build a loggable from the entries of *mapping* in iteration order."""

        return cls(*fields_to_pairs(Field(key, value) for key, value in mapping.items()))

    def loggable_fields(self) -> tuple[Any, ...]:
        return self._items

    def __repr__(self) -> str:
        return f"GenericLoggable{self._items!r}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericLoggable):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]


def fields_to_pairs(fields: Iterable[Field]) -> list[Any]:
    """Flatten fields into ``[key1, value1, key2, value2, ...]``.

    Examples
    --------
    >>> fields_to_pairs([Field("a", 1), Field("b", None)])
    ['a', 1, 'b', None]
    """

    flat: list[Any] = []
    for key, value in fields:
        flat.extend((key, value))
    return flat


def fields_to_dict(fields: Iterable[Field]) -> dict[str, Any]:
    """Collapse *fields* into a ``dict`` where later duplicates win.

    Examples
    --------
    >>> fields_to_dict([Field("a", 1), Field("a", 2), Field("b", 3)])
    {'a': 2, 'b': 3}
    """

    return {key: value for key, value in fields}
