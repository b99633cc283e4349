"""Public package surface for ``lib_struct_logger``.

Structured logging over :mod:`logging`: a façade that accepts loose key/value
arguments, mappings, Loggables and exceptions, binds per-instance context,
stamps a process-wide global context, and renders lines as key-value text,
JSON or YAML.

>>> from lib_struct_logger import GenericLoggable, get_logger
>>> log = get_logger("billing")
>>> log.new_bind(GenericLoggable("tenant", "acme"))
>>> log.bound_context
(Field(key='tenant', value='acme'),)
"""

from __future__ import annotations

from .adapters.renderers import BlockRenderer, KeyValueRenderer, StructuredRenderer
from .application.ports import Backend, Loggable, Renderer
from .config import (
    clear_context_supplier,
    configure,
    configure_from_env,
    describe_settings,
    get_context_supplier,
    get_renderer,
    get_separator,
    get_value_renderer,
    renderer_for,
    reset_settings,
    set_context_supplier,
    set_renderer,
    set_separator,
    set_value_renderer,
)
from .core import StructLogger, get_logger
from .domain.errors import ConfigurationError, StructLogError
from .domain.fields import Field, GenericLoggable
from .domain.levels import TRACE, Level
from .observability import LIBRARY_TAG

__all__ = [
    "LIBRARY_TAG",
    "TRACE",
    "Backend",
    "BlockRenderer",
    "ConfigurationError",
    "Field",
    "GenericLoggable",
    "KeyValueRenderer",
    "Level",
    "Loggable",
    "Renderer",
    "StructLogError",
    "StructLogger",
    "StructuredRenderer",
    "clear_context_supplier",
    "configure",
    "configure_from_env",
    "describe_settings",
    "get_context_supplier",
    "get_logger",
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
