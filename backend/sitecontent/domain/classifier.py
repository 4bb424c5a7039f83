# sitecontent/domain/classifier.py
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional, Sequence, Union

from .content import ContentSnapshot
from .defaults import DEFAULT_HERO_TITLE, DEFAULT_MODULE_PRICES

logger = logging.getLogger(__name__)


class FallbackPolicy(str, enum.Enum):
    """What ``is_default`` answers when a rule blows up."""

    # Treat as default: block the save, never overwrite user data
    STRICT = "strict"
    # Treat as user content: let the save through
    PERMISSIVE = "permissive"

    @property
    def value_on_error(self) -> bool:
        return self is FallbackPolicy.STRICT


@dataclass(frozen=True)
class BlockFieldRule:
    """Matches when block ``block_id`` has ``field`` equal to ``expected``."""

    block_id: str
    field: str
    expected: Any
    weight: int = 1

    def matches(self, snapshot: ContentSnapshot) -> bool:
        block = snapshot.get_block(self.block_id)
        if block is None:
            return False
        # Unknown field names raise AttributeError on purpose
        return getattr(block, self.field) == self.expected


@dataclass(frozen=True)
class BlockSetRule:
    """Matches when every id in ``block_ids`` is present."""

    block_ids: FrozenSet[str]
    weight: int = 1

    def matches(self, snapshot: ContentSnapshot) -> bool:
        present = [b for b in snapshot.blocks if b.id in self.block_ids]
        return len(present) == len(self.block_ids)


Rule = Union[BlockFieldRule, BlockSetRule]


DEFAULT_RULES: tuple[Rule, ...] = (
    BlockFieldRule("hero", "title", DEFAULT_HERO_TITLE),
    BlockFieldRule("can-module", "price", DEFAULT_MODULE_PRICES["can-module"]),
    BlockFieldRule("analog-module", "price", DEFAULT_MODULE_PRICES["analog-module"]),
    BlockFieldRule("ops-module", "price", DEFAULT_MODULE_PRICES["ops-module"]),
    BlockSetRule(frozenset(DEFAULT_MODULE_PRICES)),
)

DEFAULT_THRESHOLD = 3


class DefaultContentClassifier:
    """
    Decides whether a snapshot is still the shipped placeholder content.

    Every rule that matches adds its weight to a score; the snapshot is
    default when the score reaches ``threshold``. A ``None`` threshold
    requires every rule to match.

    Partial matching is intentional: a baseline with one unrelated edit
    is still flagged, a heavily customised site is not.
    """

    def __init__(
        self,
        rules: Sequence[Rule] = DEFAULT_RULES,
        *,
        threshold: Optional[int] = DEFAULT_THRESHOLD,
        fallback: FallbackPolicy = FallbackPolicy.STRICT,
    ) -> None:
        if not rules:
            raise ValueError("At least one rule is required")

        self.rules = tuple(rules)
        self.total_weight = sum(rule.weight for rule in self.rules)
        self.threshold = self.total_weight if threshold is None else threshold
        self.fallback = FallbackPolicy(fallback)

        if not 0 < self.threshold <= self.total_weight:
            raise ValueError(
                f"Threshold must be between 1 and {self.total_weight}, got {self.threshold}"
            )

    @classmethod
    def from_config(cls, config) -> "DefaultContentClassifier":
        raw = str(config.get("DEFAULT_DETECTION_THRESHOLD", DEFAULT_THRESHOLD)).strip().lower()
        threshold = None if raw == "all" else int(raw)
        fallback = FallbackPolicy(
            str(config.get("DEFAULT_DETECTION_FALLBACK", FallbackPolicy.STRICT.value)).lower()
        )
        return cls(threshold=threshold, fallback=fallback)

    def score(self, snapshot: ContentSnapshot) -> int:
        return sum(rule.weight for rule in self.rules if rule.matches(snapshot))

    def is_default(self, snapshot: ContentSnapshot) -> bool:
        try:
            score = self.score(snapshot)
        except Exception:
            logger.exception(
                "Default-content check failed, falling back to %s",
                self.fallback.value,
            )
            return self.fallback.value_on_error

        if score >= self.threshold:
            logger.warning(
                "Default content detected (%s/%s indicators)",
                score,
                self.total_weight,
            )
            return True

        return False
