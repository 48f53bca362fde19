"""
Schema Validation Utilities

Validates JSON documents for questions, rules and papers before they are
turned into model objects.

Two levels:
- Basic checks (always): required fields, field types, enum names and
  non-negative distribution counts. Cheap enough to run per record when
  loading a large question bank.
- Strict checks (`strict=True`): full JSON Schema validation against the
  bundled `*.schema.json` files using `jsonschema`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.kinds import DifficultyTier, QuestionCategory


# Schema version constants
QUESTION_SCHEMA_VERSION = 1
RULE_SCHEMA_VERSION = 1
PAPER_SCHEMA_VERSION = 1


# Loaded lazily, keyed by schema name
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _require(data: Any, required: list[str], path: str = "") -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Expected an object, got {type(data).__name__}", path=path)
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )


def _check_strict(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def _check_version(data: dict[str, Any], expected: int, kind: str) -> None:
    """Documents without schema_version are accepted as the current version."""
    version = data.get("schema_version", expected)
    if version != expected:
        raise ValidationError(
            f"Unsupported {kind} schema version: {version} (expected {expected})",
            path="schema_version",
        )


def _check_string_list(data: dict[str, Any], key: str, path: str) -> None:
    value = data.get(key)
    if value is None:
        return
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{key} must be a list of strings", path=f"{path}{key}")


# ─────────────────────────────────────────────────────────────────────────────
# Questions
# ─────────────────────────────────────────────────────────────────────────────

def validate_question(data: dict[str, Any], *, strict: bool = False, path: str = "") -> None:
    """
    Validate a question document.

    Args:
        data: Question dictionary to validate
        strict: If True, also validate against question.schema.json
        path: Prefix for error paths when nested in a larger document

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, ["id", "category", "difficulty"], path)
    _check_version(data, QUESTION_SCHEMA_VERSION, "question")

    qid = data["id"]
    if isinstance(qid, bool) or not isinstance(qid, (str, int)) or not str(qid).strip():
        raise ValidationError(f"Invalid id: {qid!r}", path=f"{path}id")

    try:
        QuestionCategory.parse(data["category"])
    except ValueError as e:
        raise ValidationError(str(e), path=f"{path}category") from e
    try:
        DifficultyTier.parse(data["difficulty"])
    except ValueError as e:
        raise ValidationError(str(e), path=f"{path}difficulty") from e

    answer = data.get("canonical_answer")
    if answer is not None and not isinstance(answer, (str, int, float)):
        raise ValidationError(
            f"canonical_answer must be a string: {answer!r}",
            path=f"{path}canonical_answer",
        )

    for key in ("options", "knowledge_points", "tags"):
        _check_string_list(data, key, path)

    if strict:
        _check_strict(data, "question")


# ─────────────────────────────────────────────────────────────────────────────
# Rules
# ─────────────────────────────────────────────────────────────────────────────

def _validate_distribution(raw: Any, parse, path: str) -> None:
    if not isinstance(raw, dict):
        raise ValidationError("distribution must be an object", path=path)
    for key, count in raw.items():
        try:
            parse(key)
        except ValueError as e:
            raise ValidationError(str(e), path=f"{path}.{key}") from e
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationError(
                f"Invalid count for {key!r}: {count!r} (must be non-negative integer)",
                path=f"{path}.{key}",
            )


def validate_rule(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a rule document.

    target_count must be an integer but may be <= 0; the selector reports
    that as a rejected request rather than the loader.

    Args:
        data: Rule dictionary to validate
        strict: If True, also validate against rule.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, ["target_count"])
    _check_version(data, RULE_SCHEMA_VERSION, "rule")

    target = data["target_count"]
    if isinstance(target, bool) or not isinstance(target, int):
        raise ValidationError(
            f"Invalid target_count: {target!r} (must be integer)",
            path="target_count",
        )

    if "difficulty_distribution" in data:
        _validate_distribution(
            data["difficulty_distribution"], DifficultyTier.parse, "difficulty_distribution"
        )
    if "category_distribution" in data:
        _validate_distribution(
            data["category_distribution"], QuestionCategory.parse, "category_distribution"
        )

    for key in ("knowledge_points", "tags"):
        _check_string_list(data, key, "")

    excluded = data.get("excluded_question_ids", [])
    if not isinstance(excluded, list):
        raise ValidationError("excluded_question_ids must be a list", path="excluded_question_ids")

    weights = data.get("knowledge_point_weights", {})
    if not isinstance(weights, dict) or not all(
        isinstance(w, (int, float)) and not isinstance(w, bool) for w in weights.values()
    ):
        raise ValidationError(
            "knowledge_point_weights must map names to numbers",
            path="knowledge_point_weights",
        )

    if strict:
        _check_strict(data, "rule")


# ─────────────────────────────────────────────────────────────────────────────
# Papers
# ─────────────────────────────────────────────────────────────────────────────

def validate_paper(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a paper document, including every embedded question.

    Args:
        data: Paper dictionary to validate
        strict: If True, also validate against paper.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, ["title", "total_score", "duration_minutes", "items"])
    _check_version(data, PAPER_SCHEMA_VERSION, "paper")

    items = data["items"]
    if not isinstance(items, list):
        raise ValidationError("items must be a list", path="items")

    for i, item in enumerate(items):
        item_path = f"items[{i}]"
        _require(item, ["order", "question"], item_path)
        order = item["order"]
        if isinstance(order, bool) or not isinstance(order, int) or order < 1:
            raise ValidationError(
                f"Invalid order: {order!r} (must be integer >= 1)",
                path=f"{item_path}.order",
            )
        weight = item.get("weight")
        if weight is not None and (
            isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight < 0
        ):
            raise ValidationError(
                f"Invalid weight: {weight!r} (must be non-negative number)",
                path=f"{item_path}.weight",
            )
        validate_question(item["question"], path=f"{item_path}.question.")

    if strict:
        _check_strict(data, "paper")
