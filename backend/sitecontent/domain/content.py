# sitecontent/domain/content.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

# Block types the site editor knows how to render
BLOCK_TYPES = frozenset({
    "hero",
    "features",
    "modules",
    "module",
    "custom",
    "videos",
    "contacts",
})


@dataclass(frozen=True)
class Block:
    """
    One editable section of the site.

    Blocks are values: changing any field means building a new Block
    (see ``with_order``), never mutating an existing one.

    ``extra`` carries every other JSON field the editor stores on the
    block (subtitles, images, feature lists...) so it survives a
    load/save cycle untouched.
    """

    id: str
    type: str
    title: str = ""
    price: Optional[str] = None
    order: int = 0
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_custom(self) -> bool:
        return self.type == "custom"

    def with_order(self, order: int) -> "Block":
        if order == self.order:
            return self
        return replace(self, order=order)


@dataclass(frozen=True)
class ContentSnapshot:
    """
    The entire editable state of the site at one point in time.

    Read and written wholesale. ``metadata`` holds every top-level key
    other than ``blocks``.
    """

    blocks: Tuple[Block, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def block_ids(self) -> Tuple[str, ...]:
        return tuple(block.id for block in self.blocks)

    def get_block(self, block_id: str) -> Optional[Block]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def with_blocks(self, blocks) -> "ContentSnapshot":
        return replace(self, blocks=tuple(blocks))
