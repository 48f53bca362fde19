"""
Serialization Utilities

Provides to/from JSON utilities for the toolkit's records.

- Clean separation: `serialize_*` and `deserialize_*` functions
- All models have `to_dict()` and `from_dict()` methods
- Validation via schemas before deserialization
- Rules and papers carry a `schema_version`; questions in a JSONL bank
  may omit it
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.grading import GradeResult
from ..models.papers import Paper
from ..models.questions import Question
from ..models.rules import RuleDescriptor
from ..schemas.validator import (
    PAPER_SCHEMA_VERSION,
    RULE_SCHEMA_VERSION,
    ValidationError,
    validate_paper,
    validate_question,
    validate_rule,
)


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_question(question: Question) -> dict[str, Any]:
    """
    Serialize a Question to a dictionary.

    Args:
        question: Question instance to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return question.to_dict()


def deserialize_question(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Question:
    """
    Deserialize a Question from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before parsing
        strict: Use full JSON Schema validation

    Returns:
        Question instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_question(data, strict=strict)
    return Question.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Rule Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_rule(rule: RuleDescriptor) -> dict[str, Any]:
    """
    Serialize a RuleDescriptor to a versioned key-value document.

    Distribution maps are keyed by category/difficulty name with plain
    integer counts, so the document can be stored by any key-value store
    and rebuilt with deserialize_rule() without loss.
    """
    return {"schema_version": RULE_SCHEMA_VERSION, **rule.to_dict()}


def deserialize_rule(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> RuleDescriptor:
    """
    Deserialize a RuleDescriptor from a dictionary.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_rule(data, strict=strict)
    return RuleDescriptor.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Paper / Grade Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_paper(paper: Paper) -> dict[str, Any]:
    """Serialize a Paper (with embedded questions) to a dictionary."""
    return {"schema_version": PAPER_SCHEMA_VERSION, **paper.to_dict()}


def deserialize_paper(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Paper:
    """
    Deserialize a Paper from a dictionary.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_paper(data, strict=strict)
    return Paper.from_dict(data)


def serialize_grade_result(result: GradeResult) -> dict[str, Any]:
    return result.to_dict()


def deserialize_grade_result(data: dict[str, Any]) -> GradeResult:
    return GradeResult.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# JSONL / JSON Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_questions_jsonl(path: Path, *, validate: bool = True) -> list[Question]:
    """
    Load a question bank from a JSONL file (one question per line).

    Args:
        path: Path to the .jsonl file
        validate: Whether to validate each question

    Returns:
        List of Question instances, in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any line is invalid (message names the line)
    """
    if not path.exists():
        raise FileNotFoundError(f"Questions file not found: {path}")

    questions = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                data = json.loads(line)
                questions.append(deserialize_question(data, validate=validate))
            except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
                raise ValidationError(
                    f"Error parsing line {line_no}: {e}",
                    path=str(path),
                    errors=[str(e)],
                ) from e

    return questions


def save_questions_jsonl(questions: list[Question], path: Path) -> None:
    """
    Save questions to a JSONL file.

    Args:
        questions: Questions to save
        path: Output path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for question in questions:
            f.write(json.dumps(serialize_question(question), ensure_ascii=False))
            f.write("\n")


def _read_json(path: Path, kind: str) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}", path=str(path)) from e


def _write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_rule_json(path: Path, *, validate: bool = True) -> RuleDescriptor:
    """Load a rule document from a JSON file."""
    return deserialize_rule(_read_json(path, "Rule"), validate=validate)


def save_rule_json(rule: RuleDescriptor, path: Path) -> None:
    """Save a rule document to a JSON file."""
    _write_json(path, serialize_rule(rule))


def load_paper_json(path: Path, *, validate: bool = True) -> Paper:
    """Load a paper from a JSON file."""
    return deserialize_paper(_read_json(path, "Paper"), validate=validate)


def save_paper_json(paper: Paper, path: Path) -> None:
    """Save a paper to a JSON file."""
    _write_json(path, serialize_paper(paper))
