"""
Module: grading

Purpose:
    Grading outcome records: Verdict (per-item outcome), ItemGrade and
    GradeResult (paper-level totals). Built once per grading call and
    never mutated.

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - grading.checkers
    - grading.scorer
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Verdict(str, Enum):
    """Outcome of checking one answer."""
    CORRECT = "CORRECT"
    INCORRECT = "INCORRECT"
    MANUAL_REVIEW = "MANUAL_REVIEW"  # Not auto-gradable (free response)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ItemGrade:
    """Grade for a single paper item."""

    question_id: str
    is_correct: bool
    score: float
    verdict: Verdict

    def to_dict(self) -> dict:
        return {
            "question_id": self.question_id,
            "is_correct": self.is_correct,
            "score": self.score,
            "verdict": self.verdict.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ItemGrade:
        return cls(
            question_id=str(data["question_id"]),
            is_correct=bool(data["is_correct"]),
            score=data["score"],
            verdict=Verdict(data["verdict"]),
        )


@dataclass(frozen=True)
class GradeResult:
    """
    Paper-level grading result.

    Attributes:
        total_score: Sum of item scores
        correct_count: Items graded CORRECT
        total_count: Items on the paper (unanswered items included)
        details: Per-item grades in paper order
        max_score: Sum of item weights (score for a perfect paper)

    Example:
        >>> result.correct_count, result.total_count
        (7, 10)
        >>> result.accuracy
        0.7
    """

    total_score: float
    correct_count: int
    total_count: int
    details: Tuple[ItemGrade, ...] = ()
    max_score: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", tuple(self.details))

    @property
    def accuracy(self) -> float:
        """Fraction of items correct; 0.0 for an empty paper."""
        if self.total_count == 0:
            return 0.0
        return self.correct_count / self.total_count

    @property
    def pending_review_ids(self) -> Tuple[str, ...]:
        """Question ids that need a human grader."""
        return tuple(
            d.question_id for d in self.details if d.verdict is Verdict.MANUAL_REVIEW
        )

    def get_detail(self, question_id: str) -> Optional[ItemGrade]:
        for detail in self.details:
            if detail.question_id == question_id:
                return detail
        return None

    def to_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "correct_count": self.correct_count,
            "total_count": self.total_count,
            "max_score": self.max_score,
            "details": [d.to_dict() for d in self.details],
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeResult:
        return cls(
            total_score=data["total_score"],
            correct_count=data["correct_count"],
            total_count=data["total_count"],
            details=tuple(ItemGrade.from_dict(d) for d in data.get("details", [])),
            max_score=data.get("max_score", 0.0),
        )

    def __repr__(self) -> str:
        return (
            f"GradeResult(score={self.total_score}/{self.max_score}, "
            f"correct={self.correct_count}/{self.total_count})"
        )
