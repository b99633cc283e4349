"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the pipeline talks to so the façade never
depends on a concrete renderer or backend implementation.

Contents
--------
* :class:`Loggable` – objects that describe their own loggable fields.
* :class:`Renderer` – four-step builder turning a message plus fields into a
  line of text.
* :class:`Backend` – the leveled logger receiving the rendered line.

System Role
-----------
Renderers under :mod:`lib_struct_logger.adapters.renderers` implement
:class:`Renderer`; :class:`logging.Logger` already satisfies :class:`Backend`.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

State = TypeVar("State")


@runtime_checkable
class Loggable(Protocol):
    """Capability of an object to supply its own fields.

    ``loggable_fields`` returns either a flat sequence of alternating keys and
    values (``["user", "ada", "role", "admin"]``), a mapping, or ``None``.
    """

    def loggable_fields(self) -> Any:
        """Return the fields describing this object."""


@runtime_checkable
class Backend(Protocol):
    """Leveled logger the façade delegates to (``logging.Logger`` compatible)."""

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802 - mirrors logging.Logger
        """Return whether *level* would be emitted."""

    def log(self, level: int, msg: object, *args: object, **kwargs: Any) -> None:
        """Emit *msg* at *level*; the façade passes ``exc_info`` and ``stacklevel``."""


@runtime_checkable
class Renderer(Protocol[State]):
    """Builder contract for output formats.

    Why
    ----
    Output formats (key-value, JSON, YAML, or anything a host application
    brings) must be swappable without touching argument handling.

    Lifecycle
    ---------
    ``start`` → ``add_message`` → ``add_field``\\* → ``end``. A fresh state is
    created per log call and never reused. The backend is passed to every step
    so renderers can report their own diagnostics through it.
    """

    def start(self, logger: Backend) -> State:
        """Return a new, empty builder state."""

    def add_message(self, logger: Backend, state: State, message: str) -> None:
        """Record the log message in *state*."""

    def add_field(self, logger: Backend, state: State, key: str, value: Any) -> None:
        """Record one field in *state*, renaming keys that clash with reserved names."""

    def end(self, logger: Backend, state: State) -> str:
        """Return the finished line for *state*."""
