# sitecontent/normalizers/content.py
from __future__ import annotations

from typing import Any, Dict, Mapping

from sitecontent.domain.content import ContentSnapshot
from sitecontent.domain.invariants.block import assert_unique_block_ids
from sitecontent.domain.invariants.exceptions import InvalidContentFormat, InvariantViolation
from .block import normalize_block, parse_block


def normalize_content(snapshot: ContentSnapshot) -> Dict[str, Any]:
    """
    Turns a snapshot into its JSON-ready interchange form.

    Notes:
    - metadata keys are emitted first, ``blocks`` last
    - blocks keep their stored position (not sorted by order)
    """
    data: Dict[str, Any] = dict(snapshot.metadata)
    data["blocks"] = [normalize_block(b) for b in snapshot.blocks]
    return data


def parse_content(data: Mapping[str, Any]) -> ContentSnapshot:
    """
    Builds a snapshot from its interchange form.

    Raises:
    - InvalidContentFormat if the structure is not site content
      (missing blocks list, malformed block, duplicated block ids)

    Nothing is returned unless every block parses.
    """
    if not isinstance(data, Mapping):
        raise InvalidContentFormat("Content must be a JSON object")

    raw_blocks = data.get("blocks")
    if not isinstance(raw_blocks, list):
        raise InvalidContentFormat("Content must contain a 'blocks' list")

    blocks = tuple(parse_block(b) for b in raw_blocks)

    try:
        assert_unique_block_ids(blocks)
    except InvariantViolation as exc:
        raise InvalidContentFormat(str(exc)) from exc

    return ContentSnapshot(
        blocks=blocks,
        metadata={k: v for k, v in data.items() if k != "blocks"},
    )
