"""Root-cause lookup over exception chains.

Purpose
-------
Find the innermost exception of an explicit ``raise ... from ...`` chain so
its message can be logged as ``errorMessage``. Chains may be cyclic when code
assigns ``__cause__`` by hand, so the walk is bounded.
"""

from __future__ import annotations

from typing import Final

MAX_CAUSE_DEPTH: Final[int] = 100


def root_cause(error: BaseException) -> BaseException:
    """Return the innermost exception reachable through ``__cause__``.

    Examples
    --------
    >>> inner = KeyError("missing")
    >>> outer = RuntimeError("wrapped")
    >>> outer.__cause__ = inner
    >>> root_cause(outer) is inner
    True
    >>> loop = ValueError("self")
    >>> loop.__cause__ = loop
    >>> root_cause(loop) is loop
    True
    """

    current = error
    seen = {id(current)}
    for _ in range(MAX_CAUSE_DEPTH):
        cause = current.__cause__
        if cause is None or id(cause) in seen:
            break
        seen.add(id(cause))
        current = cause
    return current


def root_cause_message(error: BaseException) -> str:
    """Return ``str()`` of the root cause of *error*.

    Examples
    --------
    >>> try:
    ...     try:
    ...         raise OSError("disk full")
    ...     except OSError as exc:
    ...         raise RuntimeError("save failed") from exc
    ... except RuntimeError as exc:
    ...     root_cause_message(exc)
    'disk full'
    """

    return str(root_cause(error))
