"""
Module: grading.scorer

Purpose:
    Grade a whole paper against a student's submission and aggregate the
    per-item verdicts into a GradeResult.

Key Functions:
    - score_paper(): Main entry point for grading

Scoring:
    - Each item is worth its own weight, or ScoringConfig.default_weight
      when it has none
    - CORRECT earns the weight; INCORRECT and MANUAL_REVIEW earn 0
    - Unanswered items are INCORRECT, never an error
    - Grading the same inputs twice gives equal results

Dependencies:
    - grading.checkers: Per-item verdicts
    - grading.normalizer: Submission coercion

Used By:
    - Applications grading submitted papers
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from exam_toolkit.core.models import GradeResult, ItemGrade, Paper, Verdict

from .checkers import check_answer
from .config import ScoringConfig
from .normalizer import coerce_submission

logger = logging.getLogger(__name__)


def score_paper(
    paper: Paper,
    submissions: Optional[Mapping[Any, Any]],
    config: Optional[ScoringConfig] = None,
) -> GradeResult:
    """
    Grade a submission against a paper.

    Args:
        paper: Assembled paper with canonical answers
        submissions: Question id -> answer (RawAnswer or any value
            coerce_answer() accepts); ids not on the paper are ignored
        config: Scoring configuration (defaults to ScoringConfig())

    Returns:
        GradeResult with totals and per-item details in paper order

    Raises:
        TypeError: If a submitted value has an unsupported type

    Example:
        >>> result = score_paper(paper, {"q1": "B", "q2": ["A", "C"]})
        >>> result.correct_count, result.total_count
        (2, 2)
    """
    config = config or ScoringConfig()
    answers = coerce_submission(submissions)

    details: List[ItemGrade] = []
    total_score = 0.0
    max_score = 0.0
    correct_count = 0

    for item in paper.items:
        question = item.question
        weight = item.weight if item.weight is not None else config.default_weight
        verdict = check_answer(question, answers.get(question.id))

        is_correct = verdict is Verdict.CORRECT
        score = float(weight) if is_correct else 0.0

        details.append(
            ItemGrade(
                question_id=question.id,
                is_correct=is_correct,
                score=score,
                verdict=verdict,
            )
        )
        total_score += score
        max_score += weight
        if is_correct:
            correct_count += 1

    unknown = set(answers) - set(paper.question_ids)
    if unknown:
        logger.debug(f"Ignoring {len(unknown)} answers for questions not on the paper")

    result = GradeResult(
        total_score=total_score,
        correct_count=correct_count,
        total_count=paper.question_count,
        details=tuple(details),
        max_score=float(max_score),
    )

    pending = result.pending_review_ids
    if pending:
        logger.info(f"{len(pending)} items on {paper.title!r} need manual review")
    logger.debug(f"Graded {paper.title!r}: {result!r}")
    return result
