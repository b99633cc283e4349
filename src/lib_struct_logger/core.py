"""Composition root for ``lib_struct_logger``.

Purpose
-------
Provide the logger façade that wires argument normalisation, context merging,
and the configured renderer in front of a :mod:`logging` backend.

Contents
--------
* :class:`StructLogger` – leveled façade with bound context.
* :func:`get_logger` – build a :class:`StructLogger` for a name or a class.
* :func:`logger_name_for` – resolve the backend logger name.

System Role
-----------
Every log call runs the same pipeline: enablement check, argument
normalisation, global-precedence filtering, rendering (message, call-site
fields, bound fields, global fields), then one ``backend.log`` call with the
extracted exception as ``exc_info``. Any unexpected failure is reported once
through the backend at ERROR and never reaches the caller.
"""

from __future__ import annotations

import logging
from itertools import chain
from typing import Any, Final, Iterable

from .application.context import bind_fields, drop_shadowed, unbind_fields
from .application.normalize import Reporter, expand_loggable, normalize_arguments
from .application.ports import Backend
from .config import get_renderer
from .domain.fields import Field, fields_to_dict
from .domain.levels import Level
from .domain.settings import SETTINGS
from .observability import report_failure, reporter_for

# Frames between the caller and ``backend.log``: caller -> info() -> _log().
_STACKLEVEL: Final[int] = 3


class StructLogger:
    """Structured logging façade over a :class:`logging.Logger`.

    Why
    ----
    Call sites describe events with loose arguments (pairs, mappings,
    Loggables, exceptions) and never have to guard their logging code: the
    façade drops and reports malformed input instead of raising.

    Parameters
    ----------
    backend:
        Logger receiving the rendered lines; anything with ``log`` and
        ``isEnabledFor`` works.

    Examples
    --------
    >>> import io
    >>> stream = io.StringIO()
    >>> backend = logging.getLogger("doctest.core")
    >>> backend.handlers[:] = [logging.StreamHandler(stream)]
    >>> backend.propagate = False
    >>> backend.setLevel(logging.INFO)
    >>> log = StructLogger(backend)
    >>> log.bind("request", "r-1")
    >>> log.info("Hello", "a", "b")
    >>> stream.getvalue()
    'Hello, a=b, request=r-1\\n'
    """

    __slots__ = ("_backend", "_bound")

    def __init__(self, backend: Backend) -> None:
        self._backend = backend
        self._bound: tuple[Field, ...] = ()

    @property
    def backend(self) -> Backend:
        """Underlying leveled logger."""

        return self._backend

    @property
    def bound_context(self) -> tuple[Field, ...]:
        """Fields bound to this instance, in render order."""

        return self._bound

    def error(self, message: object, *args: Any) -> None:
        self._log(Level.ERROR, message, args)

    def warn(self, message: object, *args: Any) -> None:
        self._log(Level.WARN, message, args)

    def warning(self, message: object, *args: Any) -> None:
        self._log(Level.WARN, message, args)

    def info(self, message: object, *args: Any) -> None:
        self._log(Level.INFO, message, args)

    def debug(self, message: object, *args: Any) -> None:
        self._log(Level.DEBUG, message, args)

    def trace(self, message: object, *args: Any) -> None:
        self._log(Level.TRACE, message, args)

    def log(self, level: Level | int | str, message: object, *args: Any) -> None:
        """Log at *level* given as a :class:`Level`, an ``int`` or a level name."""

        self._log(Level.from_name(level) if isinstance(level, str) else int(level), message, args)

    def is_error_enabled(self) -> bool:
        return self._backend.isEnabledFor(Level.ERROR)

    def is_warn_enabled(self) -> bool:
        return self._backend.isEnabledFor(Level.WARN)

    def is_info_enabled(self) -> bool:
        return self._backend.isEnabledFor(Level.INFO)

    def is_debug_enabled(self) -> bool:
        return self._backend.isEnabledFor(Level.DEBUG)

    def is_trace_enabled(self) -> bool:
        return self._backend.isEnabledFor(Level.TRACE)

    def new_bind(self, *args: Any) -> None:
        """Replace the bound context with the fields described by *args*.

        Keys owned by the global context are rejected with a diagnostic.
        """

        self._rebind((), args)

    def bind(self, *args: Any) -> None:
        """Merge the fields described by *args* into the bound context.

        Later values win; a key that is already bound keeps its position.
        """

        self._rebind(self._bound, args)

    def unbind(self, *args: Any) -> None:
        """Remove bound entries matching both the key and the value given in *args*."""

        try:
            self._bound = unbind_fields(self._bound, args, reporter_for(self._backend))
        except Exception as exc:
            report_failure(self._backend, exc)

    def _rebind(self, existing: tuple[Field, ...], args: tuple[Any, ...]) -> None:
        try:
            report = reporter_for(self._backend)
            global_values = fields_to_dict(_global_fields(report))
            self._bound = bind_fields(existing, args, global_values, report)
        except Exception as exc:
            report_failure(self._backend, exc)

    def _log(self, level: int, message: object, args: tuple[Any, ...]) -> None:
        backend = self._backend
        try:
            if not backend.isEnabledFor(level):
                return
            report = reporter_for(backend)
            call = normalize_arguments(args, report)
            global_fields = _global_fields(report)
            global_values = fields_to_dict(global_fields)
            fields = chain(
                drop_shadowed(call.fields, global_values, report),
                drop_shadowed(self._bound, global_values, report),
                global_fields,
            )
            line = _render(backend, "" if message is None else str(message), fields)
            backend.log(level, line, exc_info=call.error, stacklevel=_STACKLEVEL)
        except Exception as exc:
            report_failure(backend, exc)

    def __repr__(self) -> str:
        name = getattr(self._backend, "name", type(self._backend).__name__)
        return f"StructLogger(name={name!r}, bound={len(self._bound)})"


def logger_name_for(name_or_type: str | type | None) -> str | None:
    """Return the backend logger name for a string or a class.

    Examples
    --------
    >>> logger_name_for("billing")
    'billing'
    >>> logger_name_for(StructLogger)
    'lib_struct_logger.core.StructLogger'
    >>> logger_name_for(None) is None
    True
    """

    if name_or_type is None or isinstance(name_or_type, str):
        return name_or_type
    return f"{name_or_type.__module__}.{name_or_type.__qualname__}"


def get_logger(name_or_type: str | type | logging.Logger | None = None) -> StructLogger:
    """Return a :class:`StructLogger` for *name_or_type*.

    A :class:`logging.Logger` is wrapped as is; ``None`` selects the root
    logger.
    """

    if isinstance(name_or_type, logging.Logger):
        return StructLogger(name_or_type)
    return StructLogger(logging.getLogger(logger_name_for(name_or_type)))


def _global_fields(report: Reporter) -> list[Field]:
    supplier = SETTINGS.context_supplier
    if supplier is None:
        return []
    return expand_loggable(supplier, report)


def _render(backend: Backend, message: str, fields: Iterable[Field]) -> str:
    renderer = get_renderer()
    state = renderer.start(backend)
    renderer.add_message(backend, state, message)
    for key, value in fields:
        renderer.add_field(backend, state, key, value)
    return renderer.end(backend, state)


__all__ = ["StructLogger", "get_logger", "logger_name_for"]
