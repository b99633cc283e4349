"""Process-wide rendering settings.

Purpose
-------
Hold the four knobs every logger instance reads on each call: the renderer,
the global context supplier, the value renderer and the key-value separator.

Contract
--------
The single :data:`SETTINGS` instance is meant to be written once, early, from
one thread (see :func:`lib_struct_logger.config.configure`). Reads happen on
every log call without locking; mutating it while other threads log is
undefined behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final

DEFAULT_SEPARATOR: Final[str] = ","


def default_value_renderer(value: Any) -> str:
    """Render ``None`` as ``"null"`` and anything else through ``str()``.

    Examples
    --------
    >>> default_value_renderer(None), default_value_renderer(1.5), default_value_renderer("x")
    ('null', '1.5', 'x')
    """

    return "null" if value is None else str(value)


@dataclass(slots=True)
class Settings:
    """Mutable holder for the process-wide rendering configuration.

    Attributes
    ----------
    renderer:
        Renderer object or ``None`` for the default key-value renderer.
    context_supplier:
        Loggable producing the global context, or ``None`` when unset.
    value_renderer:
        Callable turning arbitrary values into text.
    separator:
        Text placed between entries by the key-value renderer.
    """

    renderer: Any = None
    context_supplier: Any = None
    value_renderer: Callable[[Any], str] = default_value_renderer
    separator: str = DEFAULT_SEPARATOR

    def reset(self) -> None:
        """Restore every attribute to its default."""

        self.renderer = None
        self.context_supplier = None
        self.value_renderer = default_value_renderer
        self.separator = DEFAULT_SEPARATOR


SETTINGS: Final[Settings] = Settings()
"""Shared settings instance consulted by renderers and logger instances."""
