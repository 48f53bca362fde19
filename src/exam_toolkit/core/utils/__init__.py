"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_question,
    deserialize_question,
    serialize_rule,
    deserialize_rule,
    serialize_paper,
    deserialize_paper,
    serialize_grade_result,
    deserialize_grade_result,
    load_questions_jsonl,
    save_questions_jsonl,
    load_rule_json,
    save_rule_json,
    load_paper_json,
    save_paper_json,
)

__all__ = [
    "serialize_question",
    "deserialize_question",
    "serialize_rule",
    "deserialize_rule",
    "serialize_paper",
    "deserialize_paper",
    "serialize_grade_result",
    "deserialize_grade_result",
    "load_questions_jsonl",
    "save_questions_jsonl",
    "load_rule_json",
    "save_rule_json",
    "load_paper_json",
    "save_paper_json",
]
