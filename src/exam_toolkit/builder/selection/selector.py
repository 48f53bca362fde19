"""
Module: builder.selection.selector

Purpose:
    Main question selection algorithm. Picks a subset of a pool that
    meets a RuleDescriptor's difficulty, category and total-count targets
    as closely as supply allows, reporting every unmet target.

Key Functions:
    - select_questions(): Main entry point for selection

Key Classes:
    - Selector: Orchestrates the selection passes
    - SelectionError: Raised for invalid calls (never for scarce data)

Algorithm:
    1. Reject invalid calls (no pool, no rule, target_count <= 0)
    2. Filter by exclusions, knowledge points and tags
    3. Partition the filtered pool
    4. Difficulty pass: sample each tier's target
    5. Category pass: top up each category to its target
    6. Reconcile to target_count: top up from anything left, or
       down-sample uniformly when the passes overshot
    7. Return SelectionResult with diagnostics in discovery order

Overshoot policy:
    When the difficulty and category targets together exceed
    target_count, the surplus is removed by uniform random sampling over
    the whole working selection. No bucket is protected or preferred.

Dependencies:
    - exam_toolkit.core.models: Question, RuleDescriptor, SelectionResult
    - builder.selection.partition: Pool indexing
    - builder.selection.sampling: Shared take-up-to helper

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from exam_toolkit.core.models import (
    DifficultyTier,
    Question,
    QuestionCategory,
    RuleDescriptor,
    SelectionResult,
)

from .partition import PoolPartition, partition_pool
from .sampling import shortfall_message, take_up_to

logger = logging.getLogger(__name__)

EMPTY_POOL_MESSAGE = "No questions available: the question pool is empty"
NO_MATCH_MESSAGE = (
    "No questions matched the rule filters (excluded ids, knowledge points, tags)"
)
TOTAL_LABEL = "total question count"


class SelectionError(ValueError):
    """Invalid selection request (missing pool/rule, non-positive target)."""
    pass


def select_questions(
    pool: Optional[Sequence[Question]],
    rule: Optional[RuleDescriptor],
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SelectionResult:
    """
    Select questions from a pool to satisfy a rule.

    Main entry point for the selection algorithm. Scarce or unbalanced
    pools never raise: the result is under-filled and each unmet target
    is reported in `diagnostics`.

    Args:
        pool: Candidate questions (may be empty, must not be None)
        rule: Target shape of the paper
        seed: Seed for a fresh random source (None = OS entropy)
        rng: Random source to use instead of seeding a new one

    Returns:
        SelectionResult with selected questions and diagnostics

    Raises:
        SelectionError: If pool or rule is None, or rule.target_count <= 0

    Invariants:
        - No excluded question is ever selected
        - len(result.selected_questions) <= rule.target_count
        - No duplicate questions in selection

    Example:
        >>> result = select_questions(pool, RuleDescriptor(target_count=5), seed=7)
        >>> result.question_count
        5
    """
    selector = Selector(pool, rule, seed=seed, rng=rng)
    return selector.run()


@dataclass
class Selector:
    """
    Question selection orchestrator.

    One Selector serves one call: it owns its random source and working
    selection, so concurrent calls never share state.

    Attributes:
        pool: Candidate questions
        rule: Selection rule
        seed: Seed used when no rng is supplied
        rng: Optional caller-supplied random source
    """

    pool: Optional[Sequence[Question]]
    rule: Optional[RuleDescriptor]
    seed: Optional[int] = None
    rng: Optional[random.Random] = None

    # Internal state
    _rng: random.Random = field(init=False)
    _filtered: List[Question] = field(init=False, default_factory=list)
    _partition: Optional[PoolPartition] = field(init=False, default=None)
    _selected: List[Question] = field(init=False, default_factory=list)
    _selected_ids: Set[str] = field(init=False, default_factory=set)
    _diagnostics: List[str] = field(init=False, default_factory=list)
    _reported_deficit: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Check the request and set up the random source."""
        if self.pool is None:
            raise SelectionError("A question pool is required")
        if self.rule is None:
            raise SelectionError("A selection rule is required")
        if self.rule.target_count <= 0:
            raise SelectionError(
                f"target_count must be positive: {self.rule.target_count}"
            )
        self._rng = self.rng if self.rng is not None else random.Random(self.seed)

    def run(self) -> SelectionResult:
        """
        Execute the selection algorithm.

        Returns:
            SelectionResult with selected questions and diagnostics
        """
        self._selected = []
        self._selected_ids = set()
        self._diagnostics = []
        self._reported_deficit = 0

        # Step 1: Filter
        self._filter_pool()
        if not self._filtered:
            message = EMPTY_POOL_MESSAGE if not self.pool else NO_MATCH_MESSAGE
            logger.warning(message)
            return SelectionResult(
                selected_questions=(),
                diagnostics=(message,),
                target_count=self.rule.target_count,
            )

        # Step 2: Partition
        self._partition = partition_pool(self._filtered)

        # Step 3-5: Passes
        self._difficulty_pass()
        self._category_pass()
        self._reconcile_total()

        return self._build_result()

    # ─────────────────────────────────────────────────────────────────────────
    # Step 1: Filtering
    # ─────────────────────────────────────────────────────────────────────────

    def _filter_pool(self) -> None:
        """Apply exclusions, then knowledge point and tag filters."""
        excluded = self.rule.excluded_question_ids
        knowledge_points = self.rule.required_knowledge_points
        tags = self.rule.tags

        filtered = []
        seen: Set[str] = set()
        for q in self.pool:
            if q.id in excluded or q.id in seen:
                continue
            if knowledge_points and not (q.knowledge_points & knowledge_points):
                continue
            if tags and not (q.tags & tags):
                continue
            seen.add(q.id)
            filtered.append(q)
        self._filtered = filtered

        logger.debug(
            f"Filtered to {len(self._filtered)}/{len(self.pool)} questions "
            f"(excluded={len(excluded)}, knowledge_points={len(knowledge_points)}, tags={len(tags)})"
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Step 3: Difficulty Pass
    # ─────────────────────────────────────────────────────────────────────────

    def _difficulty_pass(self) -> None:
        """Sample each tier's target from its bucket."""
        distribution = self.rule.difficulty_distribution
        for tier in DifficultyTier:
            target = distribution.get(tier, 0)
            if target <= 0:
                continue
            self._take(tier.value, self._partition.by_difficulty[tier], target, target)

    # ─────────────────────────────────────────────────────────────────────────
    # Step 4: Category Pass
    # ─────────────────────────────────────────────────────────────────────────

    def _category_pass(self) -> None:
        """Top up each category to its target with not-yet-selected questions."""
        distribution = self.rule.category_distribution
        for category in QuestionCategory:
            target = distribution.get(category, 0)
            if target <= 0:
                continue
            already = sum(1 for q in self._selected if q.category is category)
            if already >= target:
                continue
            self._take(
                category.value,
                self._partition.by_category[category],
                target - already,
                target,
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Step 5: Total-Count Reconciliation
    # ─────────────────────────────────────────────────────────────────────────

    def _reconcile_total(self) -> None:
        """Top up to target_count, or down-sample uniformly if over it."""
        target = self.rule.target_count
        current = len(self._selected)

        if current < target:
            self._take(
                TOTAL_LABEL,
                self._filtered,
                target - current,
                target,
                already_reported=self._reported_deficit,
            )
        elif current > target:
            surplus = current - target
            self._selected = self._rng.sample(self._selected, target)
            self._selected_ids = {q.id for q in self._selected}
            logger.debug(f"Dropped {surplus} surplus questions to meet target of {target}")

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _take(
        self,
        label: str,
        candidates: Sequence[Question],
        needed: int,
        target: int,
        already_reported: int = 0,
    ) -> None:
        """
        Draw `needed` questions from candidates and record any shortfall.

        Only the part of the deficit beyond `already_reported` is reported,
        so a gap already named by an earlier pass is not listed twice.
        """
        draw = take_up_to(candidates, needed, self._rng, self._selected_ids)
        for question in draw.picked:
            self._selected.append(question)
            self._selected_ids.add(question.id)

        logger.debug(f"{label}: picked {len(draw.picked)}/{needed}")

        unreported = draw.deficit - already_reported
        if unreported > 0:
            filled = target - draw.deficit
            message = shortfall_message(label, unreported, target, filled=filled)
            self._diagnostics.append(message)
            self._reported_deficit += unreported
            logger.warning(message)

    def _build_result(self) -> SelectionResult:
        """Build final SelectionResult."""
        return SelectionResult(
            selected_questions=tuple(self._selected),
            diagnostics=tuple(self._diagnostics),
            target_count=self.rule.target_count,
        )
