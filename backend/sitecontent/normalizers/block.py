from typing import Any, Dict, Mapping

from sitecontent.domain.content import BLOCK_TYPES, Block
from sitecontent.domain.invariants.exceptions import InvalidContentFormat

BLOCK_FIELDS = ("id", "type", "title", "price", "order")


def normalize_block(block: Block) -> Dict[str, Any]:
    base = dict(block.extra)
    base.update({
        "id": block.id,
        "type": block.type,
        "title": block.title,
        "order": block.order,
    })

    if block.price is not None:
        base["price"] = block.price

    return base


def parse_block(data: Mapping[str, Any]) -> Block:
    if not isinstance(data, Mapping):
        raise InvalidContentFormat("Block must be a JSON object")

    block_id = data.get("id")
    if not isinstance(block_id, str) or not block_id:
        raise InvalidContentFormat("Block id must be a non-empty string")

    block_type = data.get("type")
    if block_type not in BLOCK_TYPES:
        raise InvalidContentFormat(
            f"Block '{block_id}' has unknown type: {block_type!r}"
        )

    title = data.get("title", "")
    if not isinstance(title, str):
        raise InvalidContentFormat(f"Block '{block_id}' title must be a string")

    price = data.get("price")
    if price is not None:
        # Prices are edited as text; numbers coming from hand-written JSON are accepted
        if isinstance(price, bool) or not isinstance(price, (str, int, float)):
            raise InvalidContentFormat(f"Block '{block_id}' price must be a string")
        if isinstance(price, float) and price.is_integer():
            price = int(price)
        price = str(price)

    order = data.get("order", 0)
    if isinstance(order, bool) or not isinstance(order, int):
        raise InvalidContentFormat(f"Block '{block_id}' order must be an integer")

    return Block(
        id=block_id,
        type=block_type,
        title=title,
        price=price,
        order=order,
        extra={k: v for k, v in data.items() if k not in BLOCK_FIELDS},
    )
