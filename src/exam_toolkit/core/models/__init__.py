"""
Core Models Package

Immutable, validated data models shared by the assembly and grading paths.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. Selection and grading never mutate the caller's pool, rule or answers
2. Safe to hand the same records to concurrent grading calls
3. Easier to reason about data flow

| Record | Produced by | Consumed by |
|--------|-------------|-------------|
| `Question` | caller (storage/import) | selector, checkers |
| `RuleDescriptor` | caller (rule editor/AI draft) | selector |
| `SelectionResult` | selector | assembler |
| `Paper` | assembler | scorer, caller |
| `RawAnswer` | caller (answer input) | checkers |
| `GradeResult` | scorer | caller |
"""

from .kinds import QuestionCategory, DifficultyTier
from .questions import Question
from .rules import RuleDescriptor, counts_from_ratios
from .selection import SelectionResult
from .papers import Paper, PaperItem, PaperMeta
from .answers import SingleAnswer, MultiAnswer, RawAnswer, AnswerSubmission
from .grading import Verdict, ItemGrade, GradeResult

__all__ = [
    "QuestionCategory",
    "DifficultyTier",
    "Question",
    "RuleDescriptor",
    "counts_from_ratios",
    "SelectionResult",
    "Paper",
    "PaperItem",
    "PaperMeta",
    "SingleAnswer",
    "MultiAnswer",
    "RawAnswer",
    "AnswerSubmission",
    "Verdict",
    "ItemGrade",
    "GradeResult",
]
