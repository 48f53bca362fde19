"""
Module: questions

Purpose:
    Provides the Question dataclass - the record shared by the assembly
    and grading paths. Questions come from whatever storage or import
    layer the caller uses and are never mutated by the toolkit.

Key Functions:
    - Question.is_select: Whether the answer indexes into options
    - Question.option_letters: Letters valid for this question's options
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .kinds.QuestionCategory, .kinds.DifficultyTier

Used By:
    - core.models.selection.SelectionResult
    - core.models.papers.PaperItem
    - builder.selection.selector
    - grading.checkers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from .kinds import DifficultyTier, QuestionCategory


@dataclass(frozen=True)
class Question:
    """
    Question record (immutable).

    Attributes:
        id: Unique identifier, always a string ("1024", "q-7")
        category: Question kind, decides answer comparison
        difficulty: Difficulty tier
        canonical_answer: Stored ground truth. Interpretation depends on
            category: option letters for select kinds, delimiter-joined
            blanks for fill blank, a boolean synonym for true/false.
        options: Ordered option texts (select categories only)
        knowledge_points: Free-text knowledge point labels
        tags: Free-text tags
        title: Question stem, carried for the caller's benefit
        explanation: Worked explanation, carried for the caller's benefit

    Invariants:
        - id is a non-empty string
        - options is a tuple, knowledge_points/tags are frozensets
          (lists and sets are coerced on construction)

    Example:
        >>> q = Question(
        ...     id="101",
        ...     category=QuestionCategory.SINGLE_CHOICE,
        ...     difficulty=DifficultyTier.EASY,
        ...     canonical_answer="A",
        ...     options=("Paris", "London", "Rome"),
        ... )
        >>> q.option_letters
        ('A', 'B', 'C')
    """

    id: str
    category: QuestionCategory
    difficulty: DifficultyTier
    canonical_answer: str = ""
    options: Tuple[str, ...] = ()
    knowledge_points: FrozenSet[str] = field(default_factory=frozenset)
    tags: FrozenSet[str] = field(default_factory=frozenset)
    title: str = ""
    explanation: str = ""

    def __post_init__(self) -> None:
        """Validate and coerce fields on construction."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError(f"Question id must be a non-empty string: {self.id!r}")
        if not isinstance(self.category, QuestionCategory):
            raise TypeError(f"category must be a QuestionCategory: {self.category!r}")
        if not isinstance(self.difficulty, DifficultyTier):
            raise TypeError(f"difficulty must be a DifficultyTier: {self.difficulty!r}")
        if self.canonical_answer is None:
            object.__setattr__(self, "canonical_answer", "")

        # Frozen dataclass: coerce collections via object.__setattr__
        object.__setattr__(self, "options", tuple(str(o) for o in self.options))
        object.__setattr__(self, "knowledge_points", frozenset(self.knowledge_points))
        object.__setattr__(self, "tags", frozenset(self.tags))

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_select(self) -> bool:
        """True if answers are option letters (single or multiple choice)."""
        return self.category.is_select

    @property
    def option_letters(self) -> Tuple[str, ...]:
        """Letters A, B, C, ... one per option."""
        return tuple(chr(ord("A") + i) for i in range(len(self.options)))

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Sets are written as sorted lists so output is stable.
        """
        d = {
            "id": self.id,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "canonical_answer": self.canonical_answer,
            "knowledge_points": sorted(self.knowledge_points),
            "tags": sorted(self.tags),
        }
        if self.options:
            d["options"] = list(self.options)
        if self.title:
            d["title"] = self.title
        if self.explanation:
            d["explanation"] = self.explanation
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """
        Deserialize from dictionary.

        Numeric ids are converted to strings; category and difficulty are
        parsed leniently (names in any case, Chinese labels, tier levels).
        """
        return cls(
            id=str(data["id"]),
            category=QuestionCategory.parse(data["category"]),
            difficulty=DifficultyTier.parse(data["difficulty"]),
            canonical_answer=str(data.get("canonical_answer") or ""),
            options=tuple(data.get("options") or ()),
            knowledge_points=frozenset(data.get("knowledge_points") or ()),
            tags=frozenset(data.get("tags") or ()),
            title=data.get("title", ""),
            explanation=data.get("explanation", ""),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Question({self.id!r}, {self.category.value}, "
            f"{self.difficulty.value})"
        )
