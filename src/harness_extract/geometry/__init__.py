"""Drawing access helpers."""

from __future__ import annotations

from .dxf_text import (
    count_entities,
    iter_block_attributes,
    iter_layouts,
    iter_text_entities,
    load_drawing,
)

__all__ = [
    "count_entities",
    "iter_block_attributes",
    "iter_layouts",
    "iter_text_entities",
    "load_drawing",
]
