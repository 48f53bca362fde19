"""
Module: answers

Purpose:
    Tagged variant for a student's raw answer. Input widgets hand back a
    single value for most questions and an ordered list for multi-select
    and multi-blank questions; the variant makes that shape explicit.
    Coercion from loose Python values lives in grading.normalizer.

Key Classes:
    - SingleAnswer: One token
    - MultiAnswer: Ordered tokens
    - RawAnswer: Union of the two
    - AnswerSubmission: Question id -> RawAnswer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple, Union


@dataclass(frozen=True)
class SingleAnswer:
    """A single submitted token, e.g. "B" or "red; blue"."""

    token: str

    def __post_init__(self) -> None:
        if not isinstance(self.token, str):
            raise TypeError(f"token must be a string: {self.token!r}")

    @property
    def is_blank(self) -> bool:
        return not self.token.strip()

    def to_dict(self) -> dict:
        return {"kind": "single", "token": self.token}


@dataclass(frozen=True)
class MultiAnswer:
    """An ordered list of submitted tokens, e.g. ("C", "A")."""

    tokens: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        if not all(isinstance(t, str) for t in self.tokens):
            raise TypeError(f"tokens must be strings: {self.tokens!r}")

    @property
    def is_blank(self) -> bool:
        return not any(t.strip() for t in self.tokens)

    def to_dict(self) -> dict:
        return {"kind": "multi", "tokens": list(self.tokens)}


RawAnswer = Union[SingleAnswer, MultiAnswer]
AnswerSubmission = Mapping[str, RawAnswer]


def raw_answer_from_dict(data: dict) -> RawAnswer:
    """Rebuild a RawAnswer written by its to_dict()."""
    kind = data.get("kind")
    if kind == "single":
        return SingleAnswer(data["token"])
    if kind == "multi":
        return MultiAnswer(tuple(data["tokens"]))
    raise ValueError(f"Unknown raw answer kind: {kind!r}")
