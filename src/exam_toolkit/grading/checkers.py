"""
Module: grading.checkers

Purpose:
    Decide whether one submitted answer matches a question's canonical
    answer. One checker per question category; check_answer() dispatches
    on the category and converts the outcome to a Verdict.

Key Functions:
    - check_answer(): Main entry point (Question, answer) -> Verdict

Rules by category:
    - SINGLE_CHOICE: option letter or option text, case-insensitive
    - MULTIPLE_CHOICE: unordered set comparison
    - FILL_BLANK: positional, "|" separates accepted synonyms per blank
    - TRUE_FALSE: English/Chinese synonym sets
    - SHORT_ANSWER: never auto-graded (MANUAL_REVIEW)

Dependencies:
    - grading.normalizer: All text handling

Used By:
    - grading.scorer
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from exam_toolkit.core.models import (
    Question,
    QuestionCategory,
    RawAnswer,
    SingleAnswer,
    Verdict,
)

from .normalizer import (
    coerce_answer,
    normalize,
    parse_list_answer,
    resolve_option,
    split_tokens,
)

logger = logging.getLogger(__name__)

SYNONYM_SEPARATOR = "|"

TRUE_TOKENS: FrozenSet[str] = frozenset({"true", "yes", "correct", "正确", "是", "对"})
FALSE_TOKENS: FrozenSet[str] = frozenset({"false", "no", "incorrect", "错误", "否", "错"})


def _single_token(answer: RawAnswer) -> Optional[str]:
    """The one submitted token, or None if a list holds zero or several."""
    if isinstance(answer, SingleAnswer):
        return answer.token
    if len(answer.tokens) == 1:
        return answer.tokens[0]
    return None


def _truth_value(token: str) -> Optional[bool]:
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Per-Category Checkers
# ─────────────────────────────────────────────────────────────────────────────

def _check_single_choice(question: Question, answer: RawAnswer) -> bool:
    token = _single_token(answer)
    if token is None:
        return False
    return resolve_option(token, question.options) == resolve_option(
        question.canonical_answer, question.options
    )


def _check_multiple_choice(question: Question, answer: RawAnswer) -> bool:
    options = question.options
    expected = {
        resolve_option(t, options)
        for t in parse_list_answer(question.canonical_answer, options)
    }

    if isinstance(answer, SingleAnswer):
        submitted_tokens = parse_list_answer(answer.token, options)
    else:
        submitted_tokens = [t for element in answer.tokens for t in split_tokens(element)]
    submitted = {resolve_option(t, options) for t in submitted_tokens}

    return submitted == expected


def _blank_alternatives(canonical: str) -> List[FrozenSet[str]]:
    """Accepted tokens for each blank, in blank order. Blanks with no tokens are skipped."""
    blanks = []
    for blank in split_tokens(canonical):
        accepted = frozenset(
            t for t in (normalize(s) for s in blank.split(SYNONYM_SEPARATOR)) if t
        )
        if accepted:
            blanks.append(accepted)
    return blanks


def _check_fill_blank(question: Question, answer: RawAnswer) -> bool:
    blanks = _blank_alternatives(question.canonical_answer)

    if not blanks:
        if isinstance(answer, SingleAnswer):
            return not split_tokens(answer.token)
        return answer.is_blank

    if len(blanks) == 1:
        token = _single_token(answer)
        return token is not None and normalize(token) in blanks[0]

    if isinstance(answer, SingleAnswer):
        submitted = split_tokens(answer.token)
    else:
        submitted = [normalize(t) for t in answer.tokens]

    if len(submitted) != len(blanks):
        return False
    return all(token in accepted for token, accepted in zip(submitted, blanks))


def _check_true_false(question: Question, answer: RawAnswer) -> bool:
    token = _single_token(answer)
    if token is None:
        return False

    submitted = normalize(token)
    expected = normalize(question.canonical_answer)
    if submitted == expected:
        return True

    submitted_value = _truth_value(submitted)
    return submitted_value is not None and submitted_value == _truth_value(expected)


_CHECKERS: Dict[QuestionCategory, Callable[[Question, RawAnswer], bool]] = {
    QuestionCategory.SINGLE_CHOICE: _check_single_choice,
    QuestionCategory.MULTIPLE_CHOICE: _check_multiple_choice,
    QuestionCategory.FILL_BLANK: _check_fill_blank,
    QuestionCategory.TRUE_FALSE: _check_true_false,
}


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def check_answer(question: Question, answer: Any) -> Verdict:
    """
    Check one submitted answer against a question's canonical answer.

    Args:
        question: Question being answered
        answer: RawAnswer, or any value coerce_answer() accepts;
            None means unanswered

    Returns:
        Verdict.CORRECT / INCORRECT, or MANUAL_REVIEW for short answers

    Raises:
        TypeError: If answer has an unsupported type

    Example:
        >>> q = Question("q1", QuestionCategory.SINGLE_CHOICE, DifficultyTier.EASY,
        ...              canonical_answer="B", options=("Red", "Blue"))
        >>> check_answer(q, "blue")
        <Verdict.CORRECT: 'CORRECT'>
    """
    if question.category is QuestionCategory.SHORT_ANSWER:
        return Verdict.MANUAL_REVIEW

    raw = coerce_answer(answer)
    if raw is None:
        return Verdict.INCORRECT

    matched = _CHECKERS[question.category](question, raw)
    logger.debug(f"{question.id} ({question.category}): {'match' if matched else 'no match'}")
    return Verdict.CORRECT if matched else Verdict.INCORRECT
