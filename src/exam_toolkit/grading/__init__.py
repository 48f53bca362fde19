"""
Module: grading

Purpose:
    Answer grading: normalizes submitted answers, checks each against its
    question's canonical answer and totals the paper score.

Key Functions:
    - score_paper(): Grade a whole paper
    - check_answer(): Verdict for one answer
    - normalize(), split_tokens(), parse_list_answer(): Text handling
    - coerce_answer(), coerce_submission(): Loose values -> RawAnswer

Key Classes:
    - ScoringConfig: Configuration for scoring

Dependencies:
    - exam_toolkit.core.models: Question, Paper, RawAnswer, GradeResult

Used By:
    - Applications grading submitted papers
"""

from .config import ScoringConfig
from .normalizer import (
    coerce_answer,
    coerce_submission,
    normalize,
    parse_list_answer,
    resolve_option,
    split_tokens,
)
from .checkers import check_answer
from .scorer import score_paper

__all__ = [
    # Config
    "ScoringConfig",
    # Normalizer
    "normalize",
    "split_tokens",
    "parse_list_answer",
    "resolve_option",
    "coerce_answer",
    "coerce_submission",
    # Checking
    "check_answer",
    # Scoring
    "score_paper",
]
