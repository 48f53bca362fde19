"""
Module: selection

Purpose:
    Provides SelectionResult - the output of the selection algorithm:
    the chosen questions plus one human-readable diagnostic per
    constraint that could not be met.

Key Functions:
    - SelectionResult.is_complete: True when no constraint fell short
    - SelectionResult.category_counts(): Selected items per category
    - SelectionResult.difficulty_counts(): Selected items per tier

Dependencies:
    - dataclasses (std)
    - .questions.Question

Used By:
    - builder.selection.selector
    - builder.assembly.assembler
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .kinds import DifficultyTier, QuestionCategory
from .questions import Question


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of the selection algorithm.

    Attributes:
        selected_questions: Chosen questions. Order carries no meaning.
        diagnostics: Shortage messages in the order they were discovered
        target_count: Requested total item count

    Invariants:
        - No duplicate question ids
        - len(selected_questions) <= target_count when target_count > 0

    Example:
        >>> result.question_count
        3
        >>> result.diagnostics
        ('EASY has shortfall of 2 (target 5, filled 3)',)
    """

    selected_questions: Tuple[Question, ...] = ()
    diagnostics: Tuple[str, ...] = ()
    target_count: int = 0

    def __post_init__(self) -> None:
        """Validate selection result on construction."""
        object.__setattr__(self, "selected_questions", tuple(self.selected_questions))
        object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

        question_ids = [q.id for q in self.selected_questions]
        if len(question_ids) != len(set(question_ids)):
            raise ValueError("Duplicate questions in selection result")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def question_count(self) -> int:
        """Number of selected questions."""
        return len(self.selected_questions)

    @property
    def question_ids(self) -> Tuple[str, ...]:
        return tuple(q.id for q in self.selected_questions)

    @property
    def is_complete(self) -> bool:
        """True if every constraint was met."""
        return not self.diagnostics

    @property
    def is_empty(self) -> bool:
        return not self.selected_questions

    def category_counts(self) -> Dict[QuestionCategory, int]:
        """Count selected questions per category."""
        return dict(Counter(q.category for q in self.selected_questions))

    def difficulty_counts(self) -> Dict[DifficultyTier, int]:
        """Count selected questions per difficulty tier."""
        return dict(Counter(q.difficulty for q in self.selected_questions))

    def get_question(self, question_id: str) -> Optional[Question]:
        for question in self.selected_questions:
            if question.id == question_id:
                return question
        return None

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"SelectionResult(questions={self.question_count}/{self.target_count}, "
            f"diagnostics={len(self.diagnostics)})"
        )
