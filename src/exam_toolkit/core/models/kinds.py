"""
Module: kinds

Purpose:
    Closed vocabularies shared by every part of the toolkit: the question
    category (single choice, multiple choice, fill blank, true/false,
    short answer) and the ordered difficulty tier.

Key Classes:
    - QuestionCategory: Question kind, decides how answers are compared
    - DifficultyTier: Ordered difficulty scale (EASY < ... < EXPERT)

Dependencies:
    - enum (std)

Used By:
    - core.models.questions.Question
    - core.models.rules.RuleDescriptor
    - builder.selection.partition
    - grading.checkers
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class QuestionCategory(str, Enum):
    """Kind of question. Values are the serialized names."""
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    FILL_BLANK = "FILL_BLANK"
    TRUE_FALSE = "TRUE_FALSE"
    SHORT_ANSWER = "SHORT_ANSWER"  # Free response, routed to manual review

    def __str__(self) -> str:
        return self.value

    @property
    def is_select(self) -> bool:
        """True for categories whose answers index into options."""
        return self in (QuestionCategory.SINGLE_CHOICE, QuestionCategory.MULTIPLE_CHOICE)

    @property
    def display_name(self) -> str:
        """Chinese display name used by imported question banks."""
        return _CATEGORY_DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: Union[str, "QuestionCategory"]) -> "QuestionCategory":
        """
        Parse a category from its value, name or display name.

        Args:
            value: Enum member, "SINGLE_CHOICE"/"single_choice", or "单选题"

        Returns:
            Matching QuestionCategory

        Raises:
            ValueError: If value names no category

        Example:
            >>> QuestionCategory.parse("判断题")
            <QuestionCategory.TRUE_FALSE: 'TRUE_FALSE'>
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        key = text.upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        for member, display in _CATEGORY_DISPLAY_NAMES.items():
            if text == display:
                return member
        raise ValueError(f"Unknown question category: {value!r}")


_CATEGORY_DISPLAY_NAMES = {
    QuestionCategory.SINGLE_CHOICE: "单选题",
    QuestionCategory.MULTIPLE_CHOICE: "多选题",
    QuestionCategory.FILL_BLANK: "填空题",
    QuestionCategory.TRUE_FALSE: "判断题",
    QuestionCategory.SHORT_ANSWER: "简答题",
}


class DifficultyTier(str, Enum):
    """
    Ordered difficulty scale.

    Members are declared in ascending order; `level` gives the ordinal
    used for sorting (EASY=1 ... EXPERT=4).
    """
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    EXPERT = "EXPERT"

    def __str__(self) -> str:
        return self.value

    @property
    def level(self) -> int:
        """Ordinal of the tier, starting at 1."""
        return list(DifficultyTier).index(self) + 1

    @property
    def display_name(self) -> str:
        return _DIFFICULTY_DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: Union[str, int, "DifficultyTier"]) -> "DifficultyTier":
        """
        Parse a tier from its name, level number or display name.

        Args:
            value: Enum member, "EASY"/"easy", 1 / "1", or "简单"

        Returns:
            Matching DifficultyTier

        Raises:
            ValueError: If value names no tier
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls._from_level(value)
        text = str(value).strip()
        if text.isdigit():
            return cls._from_level(int(text))
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        for member, display in _DIFFICULTY_DISPLAY_NAMES.items():
            if text == display:
                return member
        raise ValueError(f"Unknown difficulty tier: {value!r}")

    @classmethod
    def _from_level(cls, level: int) -> "DifficultyTier":
        tiers = list(cls)
        if not (1 <= level <= len(tiers)):
            raise ValueError(f"Difficulty level must be 1-{len(tiers)}: {level}")
        return tiers[level - 1]


_DIFFICULTY_DISPLAY_NAMES = {
    DifficultyTier.EASY: "简单",
    DifficultyTier.MEDIUM: "中等",
    DifficultyTier.HARD: "困难",
    DifficultyTier.EXPERT: "专家",
}
