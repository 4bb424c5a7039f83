"""Tests for sitecontent.utils.order: fixed display ordering."""

from __future__ import annotations

import pytest

from sitecontent.domain.content import Block, ContentSnapshot
from sitecontent.domain.invariants.block import assert_block_order
from sitecontent.domain.invariants.exceptions import InvariantViolation
from sitecontent.utils.order import normalize_order


def _orders(snapshot: ContentSnapshot) -> dict[str, int]:
    return {b.id: b.order for b in snapshot.blocks}


def _scrambled() -> ContentSnapshot:
    return ContentSnapshot(blocks=(
        Block("contacts", "contacts", order=3),
        Block("custom-a", "custom", title="A", order=40),
        Block("hero", "hero", order=9),
        Block("videos", "videos", order=1),
        Block("custom-b", "custom", title="B", order=2),
        Block("ops-module", "module", order=0),
        Block("features", "features", order=12),
        Block("custom-c", "custom", title="C", order=2),
        Block("modules", "modules", order=5),
        Block("can-module", "module", order=8),
        Block("analog-module", "module", order=4),
    ))


class TestNormalizeOrder:
    def test_fixed_orders(self) -> None:
        result = _orders(normalize_order(_scrambled()))
        assert result["hero"] == 1
        assert result["features"] == 2
        assert result["modules"] == 3
        assert result["can-module"] == 4
        assert result["analog-module"] == 5
        assert result["ops-module"] == 6
        assert result["videos"] == 50
        assert result["contacts"] == 51

    def test_custom_blocks_contiguous_in_input_order(self) -> None:
        result = _orders(normalize_order(_scrambled()))
        assert [result["custom-a"], result["custom-b"], result["custom-c"]] == [7, 8, 9]

    def test_result_passes_order_invariant(self, user_content) -> None:
        assert_block_order(normalize_order(_scrambled()).blocks)
        assert_block_order(normalize_order(user_content).blocks)

    def test_idempotent(self, user_content) -> None:
        once = normalize_order(user_content)
        assert normalize_order(once) == once

    def test_does_not_touch_input(self) -> None:
        snapshot = _scrambled()
        normalize_order(snapshot)
        assert _orders(snapshot)["hero"] == 9

    def test_keeps_block_position_and_fields(self, user_content) -> None:
        result = normalize_order(user_content)
        assert result.block_ids == user_content.block_ids
        abs_block = result.get_block("custom-abs")
        assert abs_block is not None
        assert abs_block.order == 7
        assert abs_block.title == "ABS Block"
        assert abs_block.extra == {"body": "Ремонт блоків ABS"}
        assert result.metadata == user_content.metadata

    def test_unknown_non_custom_block_keeps_order(self) -> None:
        snapshot = ContentSnapshot(blocks=(Block("banner", "features", order=33),))
        assert _orders(normalize_order(snapshot)) == {"banner": 33}

    def test_reserved_id_wins_over_custom_type(self) -> None:
        snapshot = ContentSnapshot(blocks=(
            Block("hero", "custom", order=0),
            Block("custom-a", "custom", order=0),
        ))
        assert _orders(normalize_order(snapshot)) == {"hero": 1, "custom-a": 7}

    def test_empty_snapshot(self) -> None:
        assert normalize_order(ContentSnapshot()) == ContentSnapshot()


class TestOrderInvariant:
    def test_rejects_wrong_reserved_order(self) -> None:
        with pytest.raises(InvariantViolation):
            assert_block_order([Block("hero", "hero", order=2)])

    def test_rejects_gap_in_custom_orders(self) -> None:
        with pytest.raises(InvariantViolation):
            assert_block_order([
                Block("a", "custom", order=7),
                Block("b", "custom", order=9),
            ])
