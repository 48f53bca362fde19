"""
Module: builder.selection.partition

Purpose:
    Index a question pool by difficulty tier and by category. Pure
    indexing step consumed by the selector.

Key Functions:
    - partition_pool(): Build both indexes in one pass

Used By:
    - builder.selection.selector
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple

from exam_toolkit.core.models import DifficultyTier, Question, QuestionCategory


class PoolPartition(NamedTuple):
    """Both pool indexes; unpacks as (by_difficulty, by_category)."""

    by_difficulty: Dict[DifficultyTier, List[Question]]
    by_category: Dict[QuestionCategory, List[Question]]


def partition_pool(pool: Iterable[Question]) -> PoolPartition:
    """
    Group questions by difficulty tier and by category.

    Every tier and category gets a bucket (possibly empty), and every
    question appears in exactly one bucket of each mapping. Pool order is
    kept inside each bucket. The pool itself is not modified.

    Args:
        pool: Questions to index

    Returns:
        PoolPartition(by_difficulty, by_category)

    Example:
        >>> by_difficulty, by_category = partition_pool(questions)
        >>> len(by_difficulty[DifficultyTier.EASY])
        3
    """
    by_difficulty: Dict[DifficultyTier, List[Question]] = {tier: [] for tier in DifficultyTier}
    by_category: Dict[QuestionCategory, List[Question]] = {
        category: [] for category in QuestionCategory
    }

    for question in pool:
        by_difficulty[question.difficulty].append(question)
        by_category[question.category].append(question)

    return PoolPartition(by_difficulty, by_category)
