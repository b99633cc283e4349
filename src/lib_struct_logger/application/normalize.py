"""Argument normaliser: turn loosely typed call arguments into fields.

Purpose
-------
Interpret the variadic arguments of a log call (flat key/value pairs, mappings,
Loggables, and exceptions) as an ordered list of :class:`Field` objects plus
the exception to forward to the backend.

Contents
--------
* :class:`ArgumentKind` / :func:`classify` – tag every argument once.
* :class:`NormalizedArguments` – result of a normalisation pass.
* :func:`normalize_arguments` – the single left-to-right recovering pass.
* :func:`expand_loggable` / :func:`expand_mapping` – validated expansion of
  nested field sources.
* :func:`accept_key` – key check that reports rejections.
* :func:`mapping_allowed_at` – decide whether a mapping stands on its own.

System Role
-----------
Used by :mod:`lib_struct_logger.core` for log calls and by
:mod:`lib_struct_logger.application.context` for bind operations. Malformed
input never raises here: every problem is described through the ``report``
callable and the offending item is dropped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Callable, NamedTuple

from ..domain.causes import root_cause_message
from ..domain.fields import Field
from ..domain.keys import KeyVerdict, check_key, describe_rejection, is_valid_key
from .ports import Loggable

Reporter = Callable[[str], None]
"""Receives one diagnostic sentence per malformed item."""

ERROR_MESSAGE_KEY = "errorMessage"


class ArgumentKind(Enum):
    """Tag assigned to every call argument before dispatch."""

    LOGGABLE = "loggable"
    ERROR = "error"
    MAPPING = "mapping"
    SCALAR = "scalar"


class NormalizedArguments(NamedTuple):
    """Fields extracted from one argument list and the exception to forward."""

    fields: list[Field]
    error: BaseException | None


def classify(item: Any) -> ArgumentKind:
    """Return the :class:`ArgumentKind` for *item*.

    Loggables win over exceptions so an exception type that describes its own
    fields is expanded instead of forwarded.

    Examples
    --------
    >>> classify(ValueError("x")), classify({"a": 1}), classify("a")
    (<ArgumentKind.ERROR: 'error'>, <ArgumentKind.MAPPING: 'mapping'>, <ArgumentKind.SCALAR: 'scalar'>)
    """

    if not isinstance(item, type) and isinstance(item, Loggable):
        return ArgumentKind.LOGGABLE
    if isinstance(item, BaseException):
        return ArgumentKind.ERROR
    if isinstance(item, Mapping):
        return ArgumentKind.MAPPING
    return ArgumentKind.SCALAR


def accept_key(candidate: Any, report: Reporter | None, source: object | None = None) -> bool:
    """Return whether *candidate* is a usable key, reporting rejections.

    ``report=None`` performs the check silently.
    """

    verdict = check_key(candidate)
    if verdict is KeyVerdict.VALID:
        return True
    if report is not None:
        report(describe_rejection(candidate, verdict, source))
    return False


def mapping_allowed_at(items: Sequence[Any], index: int) -> bool:
    """Return whether a mapping at *index* is a field source, not a value.

    A mapping in an even slot always stands on its own. In an odd slot it does
    so only when the previous item could not have been consumed as a key.

    Examples
    --------
    >>> mapping_allowed_at(["k", {"a": 1}], 1)
    False
    >>> mapping_allowed_at([1, {"a": 1}], 1)
    True
    """

    return index % 2 == 0 or not is_valid_key(items[index - 1])


def odd_count_message(count: int, dangling: Any, source: object | None = None) -> str:
    """Return the diagnostic for an unpaired trailing key.

    Examples
    --------
    >>> odd_count_message(3, "c")
    'odd number of parameters (3) passed in. The value pair for key `c` not found thus it has been ignored.'
    """

    origin = "passed in" if source is None else f"returned from {type(source).__name__}.loggable_fields()"
    return (
        f"odd number of parameters ({count}) {origin}. "
        f"The value pair for key `{dangling}` not found thus it has been ignored."
    )


def expand_mapping(mapping: Mapping[Any, Any], report: Reporter | None, source: object | None = None) -> list[Field]:
    """Return the entries of *mapping* whose keys pass validation."""

    return [Field(key, value) for key, value in mapping.items() if accept_key(key, report, source)]


def expand_loggable(source: Any, report: Reporter | None) -> list[Field]:
    """Return the validated fields a Loggable describes.

    Why
    ----
    A Loggable's field list is validated on its own: an odd length drops only
    its own trailing item and never disturbs the parity of the outer call.

    Parameters
    ----------
    source:
        Object exposing ``loggable_fields()``.
    report:
        Diagnostic sink, or ``None`` for silent expansion.

    Returns
    -------
    list[Field]
        Fields in the order the Loggable listed them.

    Examples
    --------
    >>> from lib_struct_logger.domain.fields import GenericLoggable
    >>> messages = []
    >>> expand_loggable(GenericLoggable("a", 1, "b"), messages.append)
    [Field(key='a', value=1)]
    >>> messages[0]
    'odd number of parameters (3) returned from GenericLoggable.loggable_fields(). The value pair for key `b` not found thus it has been ignored.'
    """

    items = source.loggable_fields()
    if items is None:
        if report is not None:
            report(f"{type(source).__name__}.loggable_fields() returned None")
        return []
    if isinstance(items, Mapping):
        return expand_mapping(items, report, source)
    items = list(items)
    if len(items) % 2 and report is not None:
        report(odd_count_message(len(items), items[-1], source))
    usable = len(items) - len(items) % 2
    return [
        Field(items[index], items[index + 1])
        for index in range(0, usable, 2)
        if accept_key(items[index], report, source)
    ]


def normalize_arguments(args: Sequence[Any], report: Reporter, *, capture_errors: bool = True) -> NormalizedArguments:
    """Run the recovering pass over *args*.

    Why
    ----
    Call sites mix pairs, mappings, Loggables and exceptions freely. The pass
    keeps going after malformed input, but once a positional key is rejected
    it stops pairing loose scalars because it can no longer tell keys from
    orphaned values.

    What
    ----
    1. Loggables are expanded in place.
    2. Exceptions add an ``errorMessage`` field holding their root cause
       message; the first one is returned for the backend.
    3. Mappings in a field-source position are expanded.
    4. While ordering is trusted, a scalar is a key and the next item is its
       value. A rejected key consumes its value slot and ends trust.
    5. Untrusted scalars are skipped silently.

    Parameters
    ----------
    args:
        Arguments following the message.
    report:
        Diagnostic sink receiving one sentence per dropped item.
    capture_errors:
        ``False`` treats exceptions as plain scalars (bind operations).

    Returns
    -------
    NormalizedArguments
        Fields in encounter order plus the first exception seen.

    Examples
    --------
    >>> normalize_arguments(["a", "b", {"c": 1}], print)
    NormalizedArguments(fields=[Field(key='a', value='b'), Field(key='c', value=1)], error=None)
    >>> normalize_arguments([3, "x", "a", "b"], print).fields
    key `3` expected to be of type str but `int` passed in.
    []
    """

    fields: list[Field] = []
    error: BaseException | None = None
    reliable = True
    index = 0
    count = len(args)
    while index < count:
        item = args[index]
        kind = classify(item)
        if kind is ArgumentKind.ERROR and not capture_errors:
            kind = ArgumentKind.SCALAR
        if kind is ArgumentKind.LOGGABLE:
            fields.extend(expand_loggable(item, report))
        elif kind is ArgumentKind.ERROR:
            if error is None:
                error = item
            fields.append(Field(ERROR_MESSAGE_KEY, root_cause_message(item)))
        elif kind is ArgumentKind.MAPPING and mapping_allowed_at(args, index):
            fields.extend(expand_mapping(item, report))
        elif reliable:
            index += 1
            if index >= count:
                report(odd_count_message(count, item))
            elif accept_key(item, report):
                fields.append(Field(item, args[index]))
            else:
                reliable = False
        index += 1
    return NormalizedArguments(fields, error)


__all__ = [
    "ERROR_MESSAGE_KEY",
    "ArgumentKind",
    "NormalizedArguments",
    "Reporter",
    "accept_key",
    "classify",
    "expand_loggable",
    "expand_mapping",
    "mapping_allowed_at",
    "normalize_arguments",
    "odd_count_message",
]
