"""Context merging for bound and global fields.

Purpose
-------
Maintain the per-logger bound context and enforce that global context values
take precedence over anything a call site or a bind operation supplies.

Contents
--------
* :func:`bind_fields` – merge arguments onto an existing bound context.
* :func:`unbind_fields` – remove entries matching both key and value.
* :func:`drop_shadowed` – filter fields whose key the global context owns.
* :func:`precedence_message` – diagnostic text for a shadowed key.

System Role
-----------
Bound contexts are stored as tuples of :class:`Field` with unique keys. The
functions here work on a ``dict`` internally (last write wins, an updated key
keeps its original position) and flatten back to a tuple. Global context is
never copied into bound storage.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from ..domain.fields import Field
from .normalize import Reporter, normalize_arguments


def precedence_message(key: str, global_value: Any) -> str:
    """Return the diagnostic for a key owned by the global context.

    Examples
    --------
    >>> precedence_message("env", "prod")
    'key `env` ignored because it exists in the global context with value `prod` which takes precedence.'
    """

    return (
        f"key `{key}` ignored because it exists in the global context "
        f"with value `{global_value}` which takes precedence."
    )


def drop_shadowed(fields: Iterable[Field], global_values: Mapping[str, Any], report: Reporter) -> list[Field]:
    """Return *fields* without entries whose key exists in *global_values*.

    Every dropped field produces one precedence diagnostic.

    Examples
    --------
    >>> drop_shadowed([Field("env", "dev"), Field("a", 1)], {"env": "prod"}, print)
    key `env` ignored because it exists in the global context with value `prod` which takes precedence.
    [Field(key='a', value=1)]
    """

    kept: list[Field] = []
    for field in fields:
        if field.key in global_values:
            report(precedence_message(field.key, global_values[field.key]))
            continue
        kept.append(field)
    return kept


def bind_fields(
    existing: Sequence[Field],
    args: Sequence[Any],
    global_values: Mapping[str, Any],
    report: Reporter,
) -> tuple[Field, ...]:
    """Merge *args* onto *existing* and return the new bound context.

    Why
    ----
    ``bind`` and ``new_bind`` share one merge; ``new_bind`` simply passes an
    empty *existing* context.

    Parameters
    ----------
    existing:
        Current bound context.
    args:
        Arguments using the log-call grammar. Exceptions are treated as plain
        values rather than forwarded.
    global_values:
        Current global context; matching keys are rejected with a diagnostic.
    report:
        Diagnostic sink.

    Returns
    -------
    tuple[Field, ...]
        Bound context with unique keys in first-seen order.

    Examples
    --------
    >>> bind_fields([Field("a", 1)], ["b", 2, "a", 3], {}, print)
    (Field(key='a', value=3), Field(key='b', value=2))
    >>> bind_fields((), ["env", "dev"], {"env": "prod"}, print)
    key `env` ignored because it exists in the global context with value `prod` which takes precedence.
    ()
    """

    merged = {field.key: field.value for field in existing}
    candidates = normalize_arguments(args, report, capture_errors=False).fields
    for key, value in drop_shadowed(candidates, global_values, report):
        merged[key] = value
    return tuple(Field(key, value) for key, value in merged.items())


def unbind_fields(existing: Sequence[Field], args: Sequence[Any], report: Reporter) -> tuple[Field, ...]:
    """Remove entries of *existing* that match a field in *args* by key and value.

    Examples
    --------
    >>> unbind_fields([Field("a", 1), Field("b", 2)], ["a", 1, "b", 3], print)
    (Field(key='b', value=2),)
    """

    remaining = {field.key: field.value for field in existing}
    for key, value in normalize_arguments(args, report, capture_errors=False).fields:
        if key in remaining and _same_value(remaining[key], value):
            del remaining[key]
    return tuple(Field(key, value) for key, value in remaining.items())


def _same_value(current: Any, candidate: Any) -> bool:
    return current is candidate or bool(current == candidate)


__all__ = ["bind_fields", "drop_shadowed", "precedence_message", "unbind_fields"]
