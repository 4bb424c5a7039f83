from collections import Counter

from .exceptions import InvariantViolation

RESERVED_ORDERS = {
    "hero": 1,
    "features": 2,
    "modules": 3,
    "can-module": 4,
    "analog-module": 5,
    "ops-module": 6,
}

TRAILING_ORDERS = {
    "videos": 50,
    "contacts": 51,
}

FIRST_CUSTOM_ORDER = 7


def assert_unique_block_ids(blocks):
    counts = Counter(block.id for block in blocks)
    duplicates = sorted(block_id for block_id, count in counts.items() if count > 1)
    if duplicates:
        raise InvariantViolation(
            f"Block ids must be unique, duplicated: {duplicates}"
        )


def assert_block_order(blocks):
    """
    Checks that blocks carry the display orders produced by
    ``normalize_order``.
    """
    custom_orders = []

    for block in blocks:
        if block.id in RESERVED_ORDERS:
            expected = RESERVED_ORDERS[block.id]
        elif block.is_custom:
            custom_orders.append(block.order)
            continue
        elif block.id in TRAILING_ORDERS:
            expected = TRAILING_ORDERS[block.id]
        else:
            continue

        if block.order != expected:
            raise InvariantViolation(
                f"Block '{block.id}' must have order {expected}, got {block.order}"
            )

    expected_custom = list(range(FIRST_CUSTOM_ORDER, FIRST_CUSTOM_ORDER + len(custom_orders)))
    if custom_orders != expected_custom:
        raise InvariantViolation(
            f"Custom block orders are not consecutive starting from "
            f"{FIRST_CUSTOM_ORDER}: {custom_orders}"
        )
