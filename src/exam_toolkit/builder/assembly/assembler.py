"""
Module: builder.assembly.assembler

Purpose:
    Turn a SelectionResult into a Paper: copy the paper metadata, put the
    selected questions into a stable display order and split the paper's
    total score across the items.

Key Functions:
    - assemble_paper(): Build a Paper from a selection
    - display_sort_key(): Display order for one question
    - split_score(): Per-item weights for a paper total

Ordering:
    Category (enum order), then difficulty level, then question id in
    natural order ("q2" before "q10"). The order never depends on the
    order the selector returned the questions in.

Dependencies:
    - exam_toolkit.core.models: SelectionResult, Paper, PaperItem, PaperMeta

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple, Union

from exam_toolkit.core.models import (
    Paper,
    PaperItem,
    PaperMeta,
    Question,
    QuestionCategory,
    SelectionResult,
)

logger = logging.getLogger(__name__)

_CATEGORY_RANK = {category: rank for rank, category in enumerate(QuestionCategory)}
_ID_CHUNKS = re.compile(r"(\d+)")

Number = Union[int, float]


def _natural_key(question_id: str) -> Tuple[Tuple[int, int, str], ...]:
    """Split an id into text and number chunks so numbers compare numerically."""
    key = []
    for chunk in _ID_CHUNKS.split(question_id):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk), chunk))
        else:
            key.append((1, 0, chunk))
    return tuple(key)


def display_sort_key(question: Question) -> tuple:
    """Sort key placing a question in paper display order."""
    return (
        _CATEGORY_RANK[question.category],
        question.difficulty.level,
        _natural_key(question.id),
    )


def split_score(total: Number, count: int) -> List[Number]:
    """
    Split a paper total evenly across `count` items.

    Integral totals are split into whole points, with the remainder going
    one point each to the first items. Fractional totals are split evenly.

    Example:
        >>> split_score(100, 3)
        [34, 33, 33]
        >>> split_score(7.5, 3)
        [2.5, 2.5, 2.5]
    """
    if count <= 0:
        return []

    if float(total).is_integer():
        base, remainder = divmod(int(total), count)
        return [base + 1 if i < remainder else base for i in range(count)]
    return [total / count] * count


def assemble_paper(selection: SelectionResult, meta: PaperMeta) -> Paper:
    """
    Assemble a paper from selected questions.

    Args:
        selection: Output of select_questions()
        meta: Title, total score and duration for the paper

    Returns:
        Paper with 1-based ordered items, per-item weights and the
        selection's diagnostics passed through

    Example:
        >>> paper = assemble_paper(result, PaperMeta("Unit test", 100, 90))
        >>> [item.order for item in paper.items]
        [1, 2, 3]
    """
    ordered = sorted(selection.selected_questions, key=display_sort_key)
    weights = split_score(meta.total_score, len(ordered))

    items = tuple(
        PaperItem(question=question, order=position, weight=weight)
        for position, (question, weight) in enumerate(zip(ordered, weights), start=1)
    )

    if not items:
        logger.warning(f"Assembling empty paper {meta.title!r}")
    else:
        logger.debug(f"Assembled {len(items)} items for {meta.title!r}")

    return Paper(
        title=meta.title,
        total_score=meta.total_score,
        duration_minutes=meta.duration_minutes,
        items=items,
        diagnostics=selection.diagnostics,
        description=meta.description,
        rule_id=meta.rule_id,
    )
