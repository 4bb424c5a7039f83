from sitecontent.domain.content import ContentSnapshot
from sitecontent.domain.invariants.block import (
    FIRST_CUSTOM_ORDER,
    RESERVED_ORDERS,
    TRAILING_ORDERS,
)


def normalize_order(snapshot: ContentSnapshot) -> ContentSnapshot:
    """
    Re-assigns display orders for a snapshot.

    - reserved system blocks get 1..6
    - custom blocks get 7, 8, ... in their current position order
    - videos and contacts get 50 and 51
    - anything else keeps its order
    """
    next_custom = FIRST_CUSTOM_ORDER
    blocks = []

    for block in snapshot.blocks:
        if block.id in RESERVED_ORDERS:
            block = block.with_order(RESERVED_ORDERS[block.id])
        elif block.is_custom:
            block = block.with_order(next_custom)
            next_custom += 1
        elif block.id in TRAILING_ORDERS:
            block = block.with_order(TRAILING_ORDERS[block.id])

        blocks.append(block)

    return snapshot.with_blocks(blocks)
