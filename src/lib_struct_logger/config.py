"""Process-wide configuration surface.

Purpose
-------
Expose the one place where rendering behaviour is chosen: the renderer, the
global context, the value renderer and the key-value separator.

Contents
--------
* :func:`configure` – the initialisation phase; set several values at once.
* :func:`configure_from_env` – apply ``LIB_STRUCT_LOGGER_*`` variables.
* ``set_*`` / ``get_*`` accessors for each setting and
  :func:`clear_context_supplier`.
* :func:`renderer_for` – resolve renderer names such as ``"json"``.
* :func:`describe_settings` – plain-data snapshot of the effective settings.
* :func:`reset_settings` – restore defaults (test support).

Contract
--------
Settings are process-global and read on every log call without locking.
Configure them once, early, from a single thread, before concurrent logging
starts. Setters validate their input and raise :class:`ConfigurationError`;
they are configuration APIs, not logging calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Final

from .adapters.env import EnvSettings, EnvSettingsLoader, default_env_prefix
from .adapters.renderers import BlockRenderer, KeyValueRenderer, StructuredRenderer
from .application.normalize import expand_loggable, odd_count_message
from .application.ports import Loggable
from .domain.errors import ConfigurationError
from .domain.fields import GenericLoggable
from .domain.keys import KeyVerdict, check_key, describe_rejection
from .domain.settings import SETTINGS
from .observability import log_debug, log_info

ENV_PREFIX: Final[str] = default_env_prefix("lib-struct-logger")

_RENDERER_METHODS: Final[tuple[str, ...]] = ("start", "add_message", "add_field", "end")

_DEFAULT_RENDERER: Final[KeyValueRenderer] = KeyValueRenderer()

_RENDERER_FACTORIES: Final[dict[str, Callable[[], Any]]] = {
    "key_value": KeyValueRenderer,
    "kv": KeyValueRenderer,
    "json": StructuredRenderer,
    "structured": StructuredRenderer,
    "yaml": BlockRenderer,
    "block": BlockRenderer,
}

RENDERER_NAMES: Final[tuple[str, ...]] = ("key_value", "json", "yaml")
"""Canonical renderer names accepted by :func:`renderer_for` (aliases aside)."""

_UNSET: Final[object] = object()


class CallableContext:
    """Loggable evaluating a zero-argument callable on every log call.

    Examples
    --------
    >>> CallableContext(lambda: {"request": "r-1"}).loggable_fields()
    {'request': 'r-1'}
    """

    __slots__ = ("_supplier",)

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self._supplier = supplier

    def loggable_fields(self) -> Any:
        return self._supplier()

    def __repr__(self) -> str:
        return f"CallableContext({self._supplier!r})"


def renderer_for(name: str) -> Any:
    """Return a new renderer for *name* (case-insensitive, ``-`` equals ``_``).

    Examples
    --------
    >>> renderer_for("JSON")
    StructuredRenderer()
    >>> renderer_for("key-value")
    KeyValueRenderer(separator=None)
    """

    factory = _RENDERER_FACTORIES.get(name.strip().lower().replace("-", "_"))
    if factory is None:
        raise ConfigurationError(f"unknown renderer {name!r}; expected one of {', '.join(RENDERER_NAMES)}")
    return factory()


def get_renderer() -> Any:
    """Return the active renderer (a shared :class:`KeyValueRenderer` by default)."""

    return _DEFAULT_RENDERER if SETTINGS.renderer is None else SETTINGS.renderer


def set_renderer(renderer: Any) -> None:
    """Install *renderer* for every logger.

    Parameters
    ----------
    renderer:
        Object implementing ``start``/``add_message``/``add_field``/``end``, a
        renderer name understood by :func:`renderer_for`, or ``None`` to
        restore the default.

    Raises
    ------
    ConfigurationError
        When the object lacks one of the renderer methods.
    """

    if isinstance(renderer, str):
        renderer = renderer_for(renderer)
    if renderer is not None:
        missing = [name for name in _RENDERER_METHODS if not callable(getattr(renderer, name, None))]
        if missing:
            raise ConfigurationError(f"{type(renderer).__name__} is not a renderer; missing {', '.join(missing)}")
    SETTINGS.renderer = renderer
    log_info("renderer_changed", renderer=type(get_renderer()).__name__)


def get_context_supplier() -> Any:
    """Return the global context Loggable or ``None`` when unset."""

    return SETTINGS.context_supplier


def set_context_supplier(*items: Any) -> None:
    """Install the global context stamped onto every log line.

    Why
    ----
    Values such as the service name or environment belong on every line and
    must win over anything a call site supplies.

    What
    ----
    Accepts one of:

    * a Loggable – consulted on every call;
    * a zero-argument callable – called on every call, may return a mapping or
      a flat sequence;
    * a mapping – copied once;
    * a flat ``list``/``tuple`` of alternating keys and values, or the same
      items spread as arguments.

    Static inputs (mappings and flat sequences) are validated immediately.
    Calling without arguments clears the global context.

    Raises
    ------
    ConfigurationError
        On an odd-length sequence, an invalid key, or an unsupported type.

    Examples
    --------
    >>> set_context_supplier("env", "prod")
    >>> get_context_supplier()
    GenericLoggable('env', 'prod')
    >>> clear_context_supplier()
    """

    supplier = _as_context_supplier(items)
    SETTINGS.context_supplier = supplier
    log_info("global_context_changed", supplier=type(supplier).__name__ if supplier is not None else None)


def clear_context_supplier() -> None:
    """Remove the global context."""

    SETTINGS.context_supplier = None
    log_info("global_context_cleared")


def get_value_renderer() -> Callable[[Any], str]:
    """Return the callable renderers use to stringify values."""

    return SETTINGS.value_renderer


def set_value_renderer(value_renderer: Callable[[Any], str]) -> None:
    """Install *value_renderer*; it receives any value and returns text."""

    if not callable(value_renderer):
        raise ConfigurationError(f"value renderer must be callable, got {type(value_renderer).__name__}")
    SETTINGS.value_renderer = value_renderer
    log_debug("value_renderer_changed", value_renderer=getattr(value_renderer, "__qualname__", repr(value_renderer)))


def get_separator() -> str:
    """Return the key-value separator (``","`` by default)."""

    return SETTINGS.separator


def set_separator(separator: str) -> None:
    """Set the text the key-value renderer places before each entry."""

    if not isinstance(separator, str):
        raise ConfigurationError(f"separator must be a str, got {type(separator).__name__}")
    SETTINGS.separator = separator
    log_debug("separator_changed", separator=separator)


def configure(
    *,
    renderer: Any = _UNSET,
    context: Any = _UNSET,
    value_renderer: Callable[[Any], str] | None = None,
    separator: str | None = None,
) -> None:
    """Initialise the process-wide settings in one step.

    Only supplied arguments change; ``renderer=None`` and ``context=None``
    restore the default renderer and clear the global context.

    Examples
    --------
    >>> configure(renderer="json", context={"env": "prod"}, separator=" |")
    >>> type(get_renderer()).__name__, get_separator()
    ('StructuredRenderer', ' |')
    >>> reset_settings()
    """

    if renderer is not _UNSET:
        set_renderer(renderer)
    if context is not _UNSET:
        if context is None:
            clear_context_supplier()
        else:
            set_context_supplier(context)
    if value_renderer is not None:
        set_value_renderer(value_renderer)
    if separator is not None:
        set_separator(separator)


def configure_from_env(environ: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX) -> EnvSettings:
    """Apply settings found in environment variables and return them.

    Reads ``<PREFIX>_RENDERER``, ``<PREFIX>_SEPARATOR`` and
    ``<PREFIX>_CONTEXT__<KEY>``. Variables that are absent leave the current
    setting untouched.

    Examples
    --------
    >>> found = configure_from_env({"DEMO_RENDERER": "yaml", "DEMO_CONTEXT__ENV": "prod"}, prefix="DEMO")
    >>> found.context, type(get_renderer()).__name__
    ({'env': 'prod'}, 'BlockRenderer')
    >>> reset_settings()
    """

    try:
        found = EnvSettingsLoader(environ=environ).load(prefix)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    options: dict[str, Any] = {}
    if found.renderer is not None:
        options["renderer"] = found.renderer
    if found.separator is not None:
        options["separator"] = found.separator
    if found.context:
        options["context"] = found.context
    configure(**options)
    log_info("settings_loaded_from_env", prefix=prefix, applied=sorted(options))
    return found


def describe_settings() -> dict[str, Any]:
    """Return the effective settings as plain data (used by ``show-config``).

    Examples
    --------
    >>> describe_settings()["renderer"], describe_settings()["separator"]
    ('KeyValueRenderer', ',')
    """

    supplier = SETTINGS.context_supplier
    context = {} if supplier is None else {key: value for key, value in expand_loggable(supplier, None)}
    value_renderer = SETTINGS.value_renderer
    return {
        "renderer": type(get_renderer()).__name__,
        "separator": SETTINGS.separator,
        "value_renderer": getattr(value_renderer, "__qualname__", repr(value_renderer)),
        "context": context,
    }


def reset_settings() -> None:
    """Restore every setting to its default."""

    SETTINGS.reset()
    log_debug("settings_reset")


def _as_context_supplier(items: tuple[Any, ...]) -> Any:
    if not items:
        return None
    if len(items) > 1:
        return _validated_pairs(items)
    (item,) = items
    if not isinstance(item, type) and isinstance(item, Loggable):
        return item
    if isinstance(item, Mapping):
        return GenericLoggable.from_mapping(_validated_mapping(item))
    if isinstance(item, (list, tuple)):
        return _validated_pairs(tuple(item))
    if callable(item):
        return CallableContext(item)
    raise ConfigurationError(f"unsupported global context of type {type(item).__name__}")


def _validated_pairs(items: tuple[Any, ...]) -> GenericLoggable:
    if len(items) % 2:
        raise ConfigurationError(odd_count_message(len(items), items[-1]))
    for key in items[::2]:
        _require_key(key)
    return GenericLoggable(*items)


def _validated_mapping(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    for key in mapping:
        _require_key(key)
    return dict(mapping)


def _require_key(candidate: Any) -> None:
    verdict = check_key(candidate)
    if verdict is not KeyVerdict.VALID:
        raise ConfigurationError(describe_rejection(candidate, verdict))


__all__ = [
    "ENV_PREFIX",
    "RENDERER_NAMES",
    "CallableContext",
    "clear_context_supplier",
    "configure",
    "configure_from_env",
    "describe_settings",
    "get_context_supplier",
    "get_renderer",
    "get_separator",
    "get_value_renderer",
    "renderer_for",
    "reset_settings",
    "set_context_supplier",
    "set_renderer",
    "set_separator",
    "set_value_renderer",
]
