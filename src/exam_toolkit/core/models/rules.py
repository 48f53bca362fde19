"""
Module: rules

Purpose:
    Provides RuleDescriptor - the declarative target shape of a paper
    (total item count, per-difficulty and per-category counts, knowledge
    point and tag filters, exclusions). Distributions are targets: the
    selector under-fills and reports rather than failing.

Key Functions:
    - RuleDescriptor.required_knowledge_points: Filter set used by selection
    - RuleDescriptor.to_dict() / RuleDescriptor.from_dict(): Serialization
    - counts_from_ratios(): Turn {key: fraction} targets into integer counts

Dependencies:
    - dataclasses (std)
    - .kinds.QuestionCategory, .kinds.DifficultyTier

Used By:
    - builder.selection.selector
    - builder.controller
    - core.utils.serialization
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, Mapping, Optional, TypeVar

from .kinds import DifficultyTier, QuestionCategory

K = TypeVar("K", bound=Hashable)

# Fractions given to counts_from_ratios must sum to 1 within this margin
RATIO_SUM_TOLERANCE = 0.01


def _parse_counts(raw: Mapping, parse, label: str) -> dict:
    """Parse distribution keys and check counts are non-negative integers."""
    parsed = {}
    for key, count in (raw or {}).items():
        member = parse(key)
        if isinstance(count, bool) or not isinstance(count, int):
            if isinstance(count, float) and count.is_integer():
                count = int(count)
            else:
                raise ValueError(f"{label}[{key}] must be an integer: {count!r}")
        if count < 0:
            raise ValueError(f"{label}[{key}] must be non-negative: {count}")
        parsed[member] = parsed.get(member, 0) + count
    return parsed


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Declarative paper rule (immutable).

    Attributes:
        target_count: Total number of items wanted on the paper
        difficulty_distribution: Tier -> desired count
        category_distribution: Category -> desired count
        knowledge_points: Required knowledge points (empty = no filter)
        tags: Required tags (empty = no filter)
        excluded_question_ids: Question ids that must never be selected
        knowledge_point_weights: Knowledge point -> weight, as drafted by
            rule authoring tools. Positively weighted points join the filter.
        rule_id: Identifier of the stored rule, if any
        name: Human-readable rule name

    Invariants:
        - Distribution counts are non-negative integers
        - Distribution keys are enum members (strings/levels are parsed)
        - target_count is NOT checked here; the selector rejects <= 0 so
          that malformed upstream rules still round-trip
        - Hashable; equal rules hash equal

    Example:
        >>> rule = RuleDescriptor(
        ...     target_count=10,
        ...     difficulty_distribution={"EASY": 4, "MEDIUM": 6},
        ...     category_distribution={QuestionCategory.SINGLE_CHOICE: 5},
        ... )
        >>> rule.difficulty_distribution[DifficultyTier.EASY]
        4
    """

    target_count: int
    difficulty_distribution: Dict[DifficultyTier, int] = field(default_factory=dict)
    category_distribution: Dict[QuestionCategory, int] = field(default_factory=dict)
    knowledge_points: FrozenSet[str] = field(default_factory=frozenset)
    tags: FrozenSet[str] = field(default_factory=frozenset)
    excluded_question_ids: FrozenSet[str] = field(default_factory=frozenset)
    knowledge_point_weights: Dict[str, float] = field(default_factory=dict)
    rule_id: Optional[str] = None
    name: str = ""

    def __post_init__(self) -> None:
        """Validate and coerce fields on construction."""
        if isinstance(self.target_count, bool) or not isinstance(self.target_count, int):
            raise TypeError(f"target_count must be an integer: {self.target_count!r}")

        object.__setattr__(
            self,
            "difficulty_distribution",
            _parse_counts(self.difficulty_distribution, DifficultyTier.parse, "difficulty_distribution"),
        )
        object.__setattr__(
            self,
            "category_distribution",
            _parse_counts(self.category_distribution, QuestionCategory.parse, "category_distribution"),
        )
        object.__setattr__(self, "knowledge_points", frozenset(self.knowledge_points))
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(
            self, "excluded_question_ids", frozenset(str(i) for i in self.excluded_question_ids)
        )
        object.__setattr__(
            self,
            "knowledge_point_weights",
            {str(k): float(v) for k, v in (self.knowledge_point_weights or {}).items()},
        )

    def __hash__(self) -> int:
        return hash((
            self.target_count,
            frozenset(self.difficulty_distribution.items()),
            frozenset(self.category_distribution.items()),
            self.knowledge_points,
            self.tags,
            self.excluded_question_ids,
            frozenset(self.knowledge_point_weights.items()),
            self.rule_id,
            self.name,
        ))

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def required_knowledge_points(self) -> FrozenSet[str]:
        """Knowledge points a question must intersect (empty = no filter)."""
        weighted = {kp for kp, weight in self.knowledge_point_weights.items() if weight > 0}
        return self.knowledge_points | weighted

    @property
    def difficulty_total(self) -> int:
        return sum(self.difficulty_distribution.values())

    @property
    def category_total(self) -> int:
        return sum(self.category_distribution.values())

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to a key-value document.

        Distributions are keyed by enum value in declaration order; sets
        become sorted lists. from_dict(to_dict()) reproduces an equal rule.
        """
        d = {
            "target_count": self.target_count,
            "difficulty_distribution": {
                tier.value: self.difficulty_distribution[tier]
                for tier in DifficultyTier
                if tier in self.difficulty_distribution
            },
            "category_distribution": {
                category.value: self.category_distribution[category]
                for category in QuestionCategory
                if category in self.category_distribution
            },
            "knowledge_points": sorted(self.knowledge_points),
            "tags": sorted(self.tags),
            "excluded_question_ids": sorted(self.excluded_question_ids),
        }
        if self.knowledge_point_weights:
            d["knowledge_point_weights"] = dict(sorted(self.knowledge_point_weights.items()))
        if self.rule_id is not None:
            d["rule_id"] = self.rule_id
        if self.name:
            d["name"] = self.name
        return d

    @classmethod
    def from_dict(cls, data: dict) -> RuleDescriptor:
        """Deserialize from a key-value document."""
        rule_id = data.get("rule_id")
        return cls(
            target_count=data["target_count"],
            difficulty_distribution=data.get("difficulty_distribution") or {},
            category_distribution=data.get("category_distribution") or {},
            knowledge_points=frozenset(data.get("knowledge_points") or ()),
            tags=frozenset(data.get("tags") or ()),
            excluded_question_ids=frozenset(data.get("excluded_question_ids") or ()),
            knowledge_point_weights=data.get("knowledge_point_weights") or {},
            rule_id=str(rule_id) if rule_id is not None else None,
            name=data.get("name", ""),
        )

    def __repr__(self) -> str:
        return (
            f"RuleDescriptor(target={self.target_count}, "
            f"difficulty={self.difficulty_total}, category={self.category_total})"
        )


def counts_from_ratios(ratios: Mapping[K, float], total: int) -> Dict[K, int]:
    """
    Convert fractional targets into integer counts summing to total.

    Uses largest-remainder rounding: every key first gets the floor of its
    share, then the leftover units go to the largest fractional parts
    (ties broken by mapping order).

    Args:
        ratios: Key -> fraction; fractions must sum to 1 (±0.01)
        total: Number of items to distribute (>= 0)

    Returns:
        Key -> count, same key order as ratios

    Raises:
        ValueError: If a fraction is negative, the fractions do not sum
            to 1, or total is negative

    Example:
        >>> counts_from_ratios({"EASY": 0.3, "MEDIUM": 0.5, "HARD": 0.2}, 10)
        {'EASY': 3, 'MEDIUM': 5, 'HARD': 2}
    """
    if total < 0:
        raise ValueError(f"total must be non-negative: {total}")
    if any(r < 0 for r in ratios.values()):
        raise ValueError(f"ratios must be non-negative: {dict(ratios)}")
    ratio_sum = sum(ratios.values())
    if abs(ratio_sum - 1.0) > RATIO_SUM_TOLERANCE:
        raise ValueError(f"ratios must sum to 1, got {ratio_sum:.3f}")

    shares = {key: ratio / ratio_sum * total for key, ratio in ratios.items()}
    counts = {key: math.floor(share) for key, share in shares.items()}
    leftover = total - sum(counts.values())

    keys = list(ratios)
    by_remainder = sorted(keys, key=lambda k: (-(shares[k] - counts[k]), keys.index(k)))
    for key in by_remainder[:leftover]:
        counts[key] += 1
    return counts
