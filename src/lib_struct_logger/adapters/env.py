"""Environment variable adapter.

Purpose
-------
Translate process environment variables into rendering settings so
deployments can pick a renderer and stamp global context without code changes.

Key behaviours
--------------
* Enforces a configurable prefix (``default_env_prefix``) so only relevant keys
  are captured.
* ``<PREFIX>_RENDERER`` and ``<PREFIX>_SEPARATOR`` are taken verbatim.
* ``<PREFIX>_CONTEXT__<KEY>`` entries form the global context; ``__`` nests
  further (``CONTEXT__SERVICE__NAME`` → ``{"service": {"name": ...}}``).
* Context values get light type coercion for common scalar types (bools, ints,
  floats, ``null``/``none``).
* Emits structured logging via :mod:`lib_struct_logger.observability` to aid
  troubleshooting.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from ..observability import log_debug

_CONTEXT_SECTION = "CONTEXT__"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-struct-logger')
    'LIB_STRUCT_LOGGER'
    """

    return slug.replace("-", "_").upper()


@dataclass(frozen=True)
class EnvSettings:
    """Settings found in the environment; ``None`` means "not set"."""

    renderer: str | None = None
    separator: str | None = None
    context: dict[str, object] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.renderer is None and self.separator is None and not self.context


class EnvSettingsLoader:
    """Load environment variables that belong to the logger namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> EnvSettings:
        """Return the settings carried by variables starting with *prefix*.

        Parameters
        ----------
        prefix:
            Prefix filter (upper-case). The loader appends ``_`` if missing.

        Side Effects
        ------------
        Emits an ``env_settings_loaded`` debug event with the keys found.

        Examples
        --------
        >>> env = {
        ...     'DEMO_RENDERER': 'json',
        ...     'DEMO_CONTEXT__ENV': 'prod',
        ...     'DEMO_CONTEXT__REPLICA': '3',
        ...     'OTHER_RENDERER': 'yaml',
        ... }
        >>> settings = EnvSettingsLoader(environ=env).load('DEMO')
        >>> settings.renderer, settings.context
        ('json', {'env': 'prod', 'replica': 3})
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        renderer: str | None = None
        separator: str | None = None
        context: dict[str, object] = {}
        for key, value in self._environ.items():
            if not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :]
            if stripped == "RENDERER":
                renderer = value
            elif stripped == "SEPARATOR":
                separator = value
            elif stripped.startswith(_CONTEXT_SECTION) and len(stripped) > len(_CONTEXT_SECTION):
                assign_nested(context, stripped[len(_CONTEXT_SECTION) :], _coerce(value))
        log_debug(
            "env_settings_loaded",
            prefix=prefix,
            renderer=renderer,
            separator=separator,
            context_keys=sorted(context.keys()),
        )
        return EnvSettings(renderer=renderer, separator=separator, context=context)


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'SERVICE__NAME', 'billing')
    >>> data
    {'service': {'name': 'billing'}}
    """

    parts = key.split("__")
    cursor = target
    for part in parts[:-1]:
        cursor = _ensure_child_mapping(cursor, part)
    cursor[_resolve_key(cursor, parts[-1])] = value


def _resolve_key(mapping: dict[str, object], key: str) -> str:
    """Return an existing key that matches ``key`` (case-insensitive) or a new lowercase key."""

    lower = key.lower()
    for existing in mapping.keys():
        if existing.lower() == lower:
            return existing
    return lower


def _ensure_child_mapping(mapping: dict[str, object], key: str) -> dict[str, object]:
    """Ensure ``mapping[key]`` is a ``dict`` (creating or validating as necessary)."""

    resolved = _resolve_key(mapping, key)
    if resolved not in mapping:
        mapping[resolved] = {}
    child = mapping[resolved]
    if not isinstance(child, dict):
        raise ValueError(f"Cannot override scalar with mapping for key {key}")
    return child


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('hello'), _coerce('none')
    (True, 10, 3.5, 'hello', None)
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value


__all__ = ["EnvSettings", "EnvSettingsLoader", "assign_nested", "default_env_prefix"]
