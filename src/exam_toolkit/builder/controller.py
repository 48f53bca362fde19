"""
Module: builder.controller

Purpose:
    Orchestrate the complete paper building pipeline.
    Select → Assemble → Metadata

Key Functions:
    - build_paper(): Main entry point for building a paper

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.selection: Question selection
    - builder.assembly: Paper assembly

Used By:
    - Applications generating papers from a question bank
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from exam_toolkit.core.models import Paper, PaperMeta, Question, RuleDescriptor, SelectionResult

from .assembly import assemble_paper
from .config import BuilderConfig
from .selection import SelectionError, select_questions

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        paper: The assembled paper
        selection: Selection result the paper was assembled from
        metadata: Build metadata dictionary
        warnings: Selection shortfalls, in discovery order

    Example:
        >>> result = build_paper(pool, rule, meta)
        >>> print(f"Built {result.paper.question_count} questions")
        >>> print(f"Build timestamp: {result.metadata['generated_at']}")
    """
    paper: Paper
    selection: SelectionResult
    metadata: dict
    warnings: tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        """True when every selection target was met."""
        return not self.warnings


def build_paper(
    pool: Sequence[Question],
    rule: RuleDescriptor,
    meta: PaperMeta,
    config: Optional[BuilderConfig] = None,
) -> BuildResult:
    """
    Build a paper from start to finish.

    Pipeline:
    1. Select questions from the pool to satisfy the rule
    2. Assemble the selection into an ordered, weighted paper
    3. Record build metadata

    Args:
        pool: Candidate questions
        rule: Target shape of the paper
        meta: Title, total score and duration
        config: Build configuration (defaults to BuilderConfig())

    Returns:
        BuildResult with paper, selection and metadata

    Raises:
        BuildError: If the request is invalid, or nothing was selected and
            config.allow_empty_paper is False

    Example:
        >>> result = build_paper(pool, rule, PaperMeta("Mock", 100, 90),
        ...                      BuilderConfig(seed=7))
        >>> result.metadata["selected_count"]
        20
    """
    config = config or BuilderConfig()
    start_time = time.perf_counter()

    requested = rule.target_count if rule is not None else None
    logger.info(
        f"Starting build for {meta.title!r} targeting {requested} questions "
        f"from a pool of {len(pool) if pool is not None else 0}"
    )

    # 1. Select questions
    try:
        selection = select_questions(pool, rule, seed=config.seed)
    except SelectionError as e:
        raise BuildError(f"Invalid selection request: {e}") from e

    if selection.is_empty and not config.allow_empty_paper:
        reason = "; ".join(selection.diagnostics) or "no questions selected"
        raise BuildError(f"No questions selected for {meta.title!r}: {reason}")

    # 2. Assemble paper
    paper = assemble_paper(selection, meta)

    elapsed = time.perf_counter() - start_time
    metadata = _build_metadata(config, rule, selection, elapsed)

    logger.info(
        f"Built {meta.title!r}: {selection.question_count}/{rule.target_count} questions "
        f"in {elapsed:.3f}s with {len(selection.diagnostics)} warnings"
    )

    return BuildResult(
        paper=paper,
        selection=selection,
        metadata=metadata,
        warnings=tuple(selection.diagnostics),
    )


def _build_metadata(
    config: BuilderConfig,
    rule: RuleDescriptor,
    selection: SelectionResult,
    elapsed: float,
) -> dict:
    """
    Build metadata dictionary for a generated paper.

    Returns:
        Metadata dictionary ready for JSON serialization

    Example:
        >>> metadata = _build_metadata(config, rule, selection, 0.01)
        >>> metadata['requested_count']
        20
    """
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "seed": config.seed,
        "rule_id": rule.rule_id,
        "requested_count": rule.target_count,
        "selected_count": selection.question_count,
        "category_breakdown": {
            category.value: count for category, count in selection.category_counts().items()
        },
        "difficulty_breakdown": {
            tier.value: count for tier, count in selection.difficulty_counts().items()
        },
        "elapsed_ms": round(elapsed * 1000, 3),
    }
