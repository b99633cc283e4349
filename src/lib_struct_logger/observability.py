"""Library diagnostics and lifecycle logging.

Purpose
    Give every part of the library one way to speak: lifecycle events go to the
    quiet package logger, while diagnostics about a particular log call go to
    the backend of the logger that observed them so they land next to the line
    they concern.

Contents
    - ``LIBRARY_TAG``: fixed prefix identifying diagnostics raised by the library.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``log_debug`` / ``log_info``: emit structured lifecycle entries.
    - ``report_warning``: send a malformed-input diagnostic to a backend.
    - ``report_failure``: send an unexpected-failure diagnostic to a backend.
    - ``reporter_for``: bind ``report_warning`` to one backend.

System Integration
    Used by the configuration surface for lifecycle events and by the façade
    and renderers for per-call diagnostics. The domain layer stays free of
    logging concerns.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from typing import Any, Callable, Final, Mapping

LIBRARY_TAG: Final[str] = "[lib_struct_logger] :"

_PACKAGE: Final[str] = "lib_struct_logger"

_LOGGER: Final[logging.Logger] = logging.getLogger(_PACKAGE)
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    return _LOGGER


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug lifecycle entry."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info lifecycle entry."""

    _emit(logging.INFO, message, fields)


def tagged(text: str) -> str:
    """Prefix *text* with :data:`LIBRARY_TAG`.

    Examples
    --------
    >>> tagged("key `a b` with spaces passed in.")
    '[lib_struct_logger] : key `a b` with spaces passed in.'
    """

    return f"{LIBRARY_TAG} {text}"


def report_warning(backend: Any, text: str) -> None:
    """Send a malformed-input diagnostic to *backend* at WARNING.

    Why
        Dropped fields must never be silent, yet must never interrupt the
        caller. The warning goes through the same backend as the log line so
        operators see both together.
    """

    backend.log(logging.WARNING, tagged(text), stacklevel=_caller_stacklevel())


def report_failure(backend: Any, exc: BaseException) -> None:
    """Send an unexpected-failure diagnostic to *backend* at ERROR with ``exc_info``.

    When *backend* itself fails, the diagnostic goes to the package logger as a
    ``backend_failed`` event instead.

    Examples
    --------
    >>> class Backend:
    ...     def log(self, level, msg, **kwargs):
    ...         print(level, msg, type(kwargs["exc_info"]).__name__)
    >>> report_failure(Backend(), RuntimeError("renderer exploded"))
    40 [lib_struct_logger] : unexpected logger error `renderer exploded`. RuntimeError
    """

    try:
        backend.log(
            logging.ERROR,
            tagged(f"unexpected logger error `{exc}`."),
            exc_info=exc,
            stacklevel=_caller_stacklevel(),
        )
    except Exception as backend_error:
        _LOGGER.log(
            logging.ERROR,
            "backend_failed",
            exc_info=exc,
            extra={"context": {"backend": type(backend).__name__, "error": repr(backend_error)}},
        )


def reporter_for(backend: Any) -> Callable[[str], None]:
    """Return a one-argument diagnostic sink writing to *backend*."""

    return partial(report_warning, backend)


def _caller_stacklevel() -> int:
    """Return the ``stacklevel`` pointing ``backend.log`` at the first frame outside the package.

    Must be called directly by the function that calls ``backend.log``.
    """

    frame = sys._getframe(1)
    level = 1
    while frame.f_back is not None and _inside_package(frame):
        frame = frame.f_back
        level += 1
    return level


def _inside_package(frame: Any) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == _PACKAGE or module.startswith(f"{_PACKAGE}.")


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": dict(fields)})


__all__ = [
    "LIBRARY_TAG",
    "get_logger",
    "log_debug",
    "log_info",
    "report_failure",
    "report_warning",
    "reporter_for",
    "tagged",
]
