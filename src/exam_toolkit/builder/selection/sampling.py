"""
Module: builder.selection.sampling

Purpose:
    The "take up to N, else take all and report" step shared by the
    difficulty, category and total-count passes of the selector, so all
    three report shortfalls identically.

Key Functions:
    - take_up_to(): Uniform sample without replacement, capped by supply
    - shortfall_message(): Diagnostic text for an unmet target
"""

from __future__ import annotations

import random
from typing import Collection, List, NamedTuple, Optional, Sequence

from exam_toolkit.core.models import Question


class Draw(NamedTuple):
    """Questions drawn by take_up_to and how many were missing."""

    picked: List[Question]
    deficit: int


def take_up_to(
    candidates: Sequence[Question],
    count: int,
    rng: random.Random,
    exclude_ids: Collection[str] = (),
) -> Draw:
    """
    Draw up to `count` questions uniformly at random, without replacement.

    Candidates whose id is in `exclude_ids` are skipped. If fewer than
    `count` remain, all of them are returned and `deficit` says how many
    were missing.

    Args:
        candidates: Questions to draw from (not modified)
        count: Number wanted (<= 0 draws nothing)
        rng: Random source owned by the caller
        exclude_ids: Ids already taken

    Returns:
        Draw(picked, deficit)
    """
    if count <= 0:
        return Draw([], 0)

    available = [q for q in candidates if q.id not in exclude_ids]
    if len(available) <= count:
        return Draw(available, count - len(available))
    return Draw(rng.sample(available, count), 0)


def shortfall_message(label: str, deficit: int, target: int, filled: Optional[int] = None) -> str:
    """
    Format a shortfall diagnostic.

    `filled` defaults to target - deficit; pass it when the reported
    deficit is only the part not already reported elsewhere.

    Example:
        >>> shortfall_message("EASY", 2, 5)
        'EASY has shortfall of 2 (target 5, filled 3)'
        >>> shortfall_message("total question count", 2, 6, filled=3)
        'total question count has shortfall of 2 (target 6, filled 3)'
    """
    if filled is None:
        filled = target - deficit
    return f"{label} has shortfall of {deficit} (target {target}, filled {filled})"
