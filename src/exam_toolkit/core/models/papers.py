"""
Module: papers

Purpose:
    Provides the paper envelope produced by the assembler and consumed by
    the scorer: PaperMeta (title, total score, duration copied from the
    rule), PaperItem (one question at a display position with its weight)
    and Paper.

Key Functions:
    - Paper.question_ids: Ids in display order
    - Paper.get_item(question_id): Find an item
    - Paper.to_dict() / Paper.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .questions.Question

Used By:
    - builder.assembly.assembler
    - grading.scorer
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .questions import Question

Number = Union[int, float]


@dataclass(frozen=True)
class PaperMeta:
    """
    Paper-level settings copied from a rule onto the assembled paper.

    Attributes:
        title: Paper title (non-blank)
        total_score: Full marks for the paper (> 0)
        duration_minutes: Time limit in minutes (> 0)
        description: Free text shown to candidates
        rule_id: Id of the rule the paper was generated from
    """

    title: str
    total_score: Number
    duration_minutes: int
    description: str = ""
    rule_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate metadata on construction."""
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError(f"title must be a non-empty string: {self.title!r}")
        if isinstance(self.total_score, bool) or not isinstance(self.total_score, (int, float)):
            raise TypeError(f"total_score must be a number: {self.total_score!r}")
        if self.total_score <= 0:
            raise ValueError(f"total_score must be positive: {self.total_score}")
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise TypeError(f"duration_minutes must be an integer: {self.duration_minutes!r}")
        if self.duration_minutes <= 0:
            raise ValueError(f"duration_minutes must be positive: {self.duration_minutes}")


@dataclass(frozen=True)
class PaperItem:
    """
    One question on a paper.

    Attributes:
        question: The question
        order: 1-based display position
        weight: Points for a correct answer; None defers to the scorer's
            default weight
    """

    question: Question
    order: int
    weight: Optional[float] = None

    def __post_init__(self) -> None:
        if self.order < 1:
            raise ValueError(f"order must be >= 1: {self.order}")
        if self.weight is not None and self.weight < 0:
            raise ValueError(f"weight must be non-negative: {self.weight}")

    @property
    def question_id(self) -> str:
        return self.question.id

    def to_dict(self) -> dict:
        d = {"order": self.order, "question": self.question.to_dict()}
        if self.weight is not None:
            d["weight"] = self.weight
        return d

    @classmethod
    def from_dict(cls, data: dict) -> PaperItem:
        return cls(
            question=Question.from_dict(data["question"]),
            order=data["order"],
            weight=data.get("weight"),
        )


@dataclass(frozen=True)
class Paper:
    """
    Assembled exam paper (immutable).

    Attributes:
        title: Paper title
        total_score: Full marks
        duration_minutes: Time limit in minutes
        items: Items in display order
        diagnostics: Selection shortfalls, passed through for display
        description: Free text
        rule_id: Source rule id, if any

    Invariants:
        - No duplicate question ids among items
        - items are sorted by order

    Example:
        >>> paper.question_count
        20
        >>> paper.items[0].order
        1
    """

    title: str
    total_score: Number
    duration_minutes: int
    items: Tuple[PaperItem, ...] = ()
    diagnostics: Tuple[str, ...] = ()
    description: str = ""
    rule_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate paper on construction."""
        object.__setattr__(self, "items", tuple(sorted(self.items, key=lambda i: i.order)))
        object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

        question_ids = [item.question.id for item in self.items]
        if len(question_ids) != len(set(question_ids)):
            raise ValueError("Duplicate questions on paper")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def question_count(self) -> int:
        return len(self.items)

    @property
    def question_ids(self) -> Tuple[str, ...]:
        """Question ids in display order."""
        return tuple(item.question.id for item in self.items)

    @property
    def questions(self) -> Tuple[Question, ...]:
        return tuple(item.question for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get_item(self, question_id: str) -> Optional[PaperItem]:
        """
        Find an item by question id.

        Args:
            question_id: Question id to search for

        Returns:
            Matching PaperItem or None
        """
        for item in self.items:
            if item.question.id == question_id:
                return item
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        d = {
            "title": self.title,
            "total_score": self.total_score,
            "duration_minutes": self.duration_minutes,
            "items": [item.to_dict() for item in self.items],
            "diagnostics": list(self.diagnostics),
        }
        if self.description:
            d["description"] = self.description
        if self.rule_id is not None:
            d["rule_id"] = self.rule_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Paper:
        """Deserialize from dictionary."""
        rule_id = data.get("rule_id")
        return cls(
            title=data["title"],
            total_score=data["total_score"],
            duration_minutes=data["duration_minutes"],
            items=tuple(PaperItem.from_dict(item) for item in data.get("items", [])),
            diagnostics=tuple(data.get("diagnostics", [])),
            description=data.get("description", ""),
            rule_id=str(rule_id) if rule_id is not None else None,
        )

    def __repr__(self) -> str:
        return (
            f"Paper({self.title!r}, items={self.question_count}, "
            f"score={self.total_score}, minutes={self.duration_minutes})"
        )
