"""Level table shared by the façade and the backend binding.

Purpose
-------
Expose the five levels the façade speaks (``trace`` through ``error``) as the
integers understood by :mod:`logging`. ``TRACE`` is not a standard library
level, so it is registered once at import time.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Final

TRACE: Final[int] = 5

logging.addLevelName(TRACE, "TRACE")


class Level(IntEnum):
    """Levels accepted by :class:`lib_struct_logger.core.StructLogger`.

    Examples
    --------
    >>> Level.WARN == logging.WARNING
    True
    >>> Level.from_name("trace")
    <Level.TRACE: 5>
    """

    TRACE = TRACE
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Resolve a case-insensitive level name (``warning`` is accepted for ``warn``)."""

        normalized = name.strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        return cls[normalized]
