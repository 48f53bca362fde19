"""
Exam Toolkit Core Package

Shared data models, schema validation and serialization. These models are
the single source of truth for the builder and grading packages.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; new instances are created for any change

2. **Explicit Parameters**
   - No module-level state: pools, rules and answers are always passed in

3. **Tagged Answers**
   - `SingleAnswer | MultiAnswer` instead of inspecting loose values at
     every call site
"""

from .models import (
    QuestionCategory,
    DifficultyTier,
    Question,
    RuleDescriptor,
    SelectionResult,
    Paper,
    PaperItem,
    PaperMeta,
    SingleAnswer,
    MultiAnswer,
    Verdict,
    GradeResult,
)

__all__ = [
    "QuestionCategory",
    "DifficultyTier",
    "Question",
    "RuleDescriptor",
    "SelectionResult",
    "Paper",
    "PaperItem",
    "PaperMeta",
    "SingleAnswer",
    "MultiAnswer",
    "Verdict",
    "GradeResult",
]
