"""Domain-level exception hierarchy.

Purpose
-------
Name the few failures the library raises at all. Logging calls never raise;
only configuration-time APIs reject bad input.

Contents
--------
* :class:`StructLogError` – umbrella base class.
* :class:`ConfigurationError` – invalid renderer, separator, value renderer or
  context supplier handed to :mod:`lib_struct_logger.config`.
"""

from __future__ import annotations


class StructLogError(ValueError):
    """Base type for all exceptions emitted by ``lib_struct_logger``."""


class ConfigurationError(StructLogError):
    """Raised when a configuration setter receives an unusable value.

    Typical Sources
    ---------------
    :func:`lib_struct_logger.config.set_renderer`,
    :func:`lib_struct_logger.config.set_separator` and friends.
    """
