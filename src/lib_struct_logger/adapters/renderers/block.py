"""Block renderer producing YAML mappings.

Uses PyYAML's ``safe_dump`` so values that need quoting are quoted by the
emitter. Field handling (reserved ``message`` key, native scalars) is shared
with :class:`~lib_struct_logger.adapters.renderers.structured.StructuredRenderer`.
"""

from __future__ import annotations

from typing import Any

import yaml

from .structured import MappingRenderer


class BlockRenderer(MappingRenderer):
    """Render the message and fields as a block-style YAML mapping.

    Examples
    --------
    >>> renderer = BlockRenderer()
    >>> state = renderer.start(None)
    >>> renderer.add_message(None, state, "Hello")
    >>> renderer.add_field(None, state, "flag", "yes")
    >>> renderer.add_field(None, state, "count", 2)
    >>> print(renderer.end(None, state))
    message: Hello
    flag: 'yes'
    count: 2
    """

    def end(self, logger: Any, state: dict[str, Any]) -> str:
        text = yaml.safe_dump(
            state,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=float("inf"),
        )
        return text.strip()

    def __repr__(self) -> str:
        return "BlockRenderer()"
