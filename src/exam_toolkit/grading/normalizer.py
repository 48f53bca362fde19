"""
Module: grading.normalizer

Purpose:
    Text normalization and answer coercion applied before any comparison.
    Both the canonical answer and the submission pass through the same
    functions, so formatting noise (case, spacing, delimiter style,
    option letter vs option text) never decides a grade.

Key Functions:
    - normalize(): Trim, lower-case, collapse whitespace
    - split_tokens(): Split on any supported delimiter
    - parse_list_answer(): Read a multi-select answer in any accepted form
    - resolve_option(): Map an option letter to its option text
    - coerce_answer(): Loose Python value -> RawAnswer
    - coerce_submission(): Loose mapping -> {question id: RawAnswer}

Used By:
    - grading.checkers
    - grading.scorer
"""

from __future__ import annotations

import json
import logging
import re
from numbers import Number
from typing import Any, Dict, List, Mapping, Optional, Sequence

from exam_toolkit.core.models import MultiAnswer, RawAnswer, SingleAnswer

logger = logging.getLogger(__name__)

# ASCII and full-width comma/semicolon, plus the enumeration comma
DELIMITERS = (",", "，", ";", "；", "、")

_WHITESPACE = re.compile(r"\s+")
_DELIMITER_PATTERN = re.compile("|".join(re.escape(d) for d in DELIMITERS))
_LETTER_RUN = re.compile(r"[a-z]+")
_QUOTES = "\"'"


def normalize(token: Any) -> str:
    """
    Normalize a token for comparison.

    Example:
        >>> normalize("  Hello   World ")
        'hello world'
    """
    return _WHITESPACE.sub(" ", str(token).strip().lower())


def split_tokens(text: Any) -> List[str]:
    """
    Split text on every supported delimiter into normalized tokens.

    Empty tokens are dropped, so "A,,C" and "A, C" both give ["a", "c"].
    """
    return [t for t in (normalize(part) for part in _DELIMITER_PATTERN.split(str(text))) if t]


def _option_texts(options: Sequence[str]) -> List[str]:
    return [normalize(o) for o in options]


def _is_letter_run(token: str, options: Sequence[str]) -> bool:
    """True if token is two or more option letters and not an option's own text."""
    if len(token) < 2 or not _LETTER_RUN.fullmatch(token):
        return False
    if not all(ord(ch) - ord("a") < len(options) for ch in token):
        return False
    return token not in _option_texts(options)


def parse_list_answer(text: Any, options: Sequence[str] = ()) -> List[str]:
    """
    Parse a multi-select answer into normalized tokens.

    Accepted forms:
        - JSON list: '["A", "C"]'
        - Bracketed list without quotes: '[A, C]'
        - Delimiter-joined string: 'A,C' / 'A；C' / 'A、C'
        - Run of option letters: 'AC' (only when every letter names an
          existing option and the run is not itself an option's text)

    Args:
        text: Raw answer text
        options: Option texts of the question, used for letter runs

    Returns:
        Normalized tokens in the order given
    """
    raw = str(text).strip()

    if raw.startswith("[") and raw.endswith("]"):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [t for t in (normalize(v) for v in parsed) if t]
        tokens = [t.strip(_QUOTES).strip() for t in split_tokens(raw[1:-1])]
        return [t for t in tokens if t]

    tokens = split_tokens(raw)
    if len(tokens) == 1 and options and _is_letter_run(tokens[0], options):
        return list(tokens[0])
    return tokens


def resolve_option(token: Any, options: Sequence[str]) -> str:
    """
    Resolve an option letter to its normalized option text.

    A single letter A.. within the option range maps to that option's
    text; anything else is returned normalized, so "B", "b" and the text
    of option B all compare equal.

    Example:
        >>> resolve_option("b", ["Red", "Blue"])
        'blue'
        >>> resolve_option("Blue", ["Red", "Blue"])
        'blue'
    """
    value = normalize(token)
    if len(value) == 1 and "a" <= value <= "z":
        index = ord(value) - ord("a")
        if index < len(options):
            return normalize(options[index])
    return value


def _as_token(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_answer(value: Any) -> Optional[RawAnswer]:
    """
    Coerce a loose Python value into a RawAnswer.

    Args:
        value: None, a RawAnswer, str, bool, number, or list/tuple/set

    Returns:
        RawAnswer, or None for a missing answer

    Raises:
        TypeError: For any other type
    """
    if value is None:
        return None
    if isinstance(value, (SingleAnswer, MultiAnswer)):
        return value
    if isinstance(value, str):
        return SingleAnswer(value)
    if isinstance(value, (bool, Number)):
        return SingleAnswer(_as_token(value))
    if isinstance(value, (set, frozenset)):
        return MultiAnswer(tuple(sorted(_as_token(v) for v in value if v is not None)))
    if isinstance(value, (list, tuple)):
        return MultiAnswer(tuple(_as_token(v) for v in value if v is not None))
    raise TypeError(f"Unsupported answer type: {type(value).__name__}")


def coerce_submission(submissions: Optional[Mapping[Any, Any]]) -> Dict[str, RawAnswer]:
    """
    Coerce a mapping of question id -> loose answer.

    Keys are stringified; entries whose value is None are dropped (they
    grade as unanswered).

    Raises:
        TypeError: If any value has an unsupported type
    """
    coerced: Dict[str, RawAnswer] = {}
    if not submissions:
        return coerced

    for question_id, value in submissions.items():
        answer = coerce_answer(value)
        if answer is not None:
            coerced[str(question_id)] = answer

    logger.debug(f"Coerced {len(coerced)}/{len(submissions)} submitted answers")
    return coerced
