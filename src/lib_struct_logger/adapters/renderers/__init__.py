"""Concrete renderers implementing :class:`lib_struct_logger.application.ports.Renderer`.

* :class:`KeyValueRenderer` – ``message, k1=v1, k2=v2`` lines (default).
* :class:`StructuredRenderer` – one JSON object per line.
* :class:`BlockRenderer` – YAML block mappings.
"""

from __future__ import annotations

from .block import BlockRenderer
from .key_value import KeyValueRenderer
from .structured import StructuredRenderer

__all__ = ["BlockRenderer", "KeyValueRenderer", "StructuredRenderer"]
