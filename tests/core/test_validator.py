"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from exam_toolkit.core.schemas.validator import (
    RULE_SCHEMA_VERSION,
    ValidationError,
    validate_paper,
    validate_question,
    validate_rule,
)


class TestValidateQuestion:
    """Tests for validate_question function."""

    @pytest.fixture
    def valid_question_data(self) -> dict:
        """Create valid question data for testing."""
        return {
            "id": "q1",
            "category": "SINGLE_CHOICE",
            "difficulty": "EASY",
            "canonical_answer": "B",
            "options": ["Red", "Blue", "Green"],
            "knowledge_points": ["colour"],
            "tags": ["unit1"],
        }

    def test_validate_when_valid_data_then_no_error(self, valid_question_data):
        validate_question(valid_question_data)
        validate_question(valid_question_data, strict=True)

    def test_validate_when_missing_id_then_raises_error(self, valid_question_data):
        del valid_question_data["id"]
        with pytest.raises(ValidationError, match="Missing required fields") as exc_info:
            validate_question(valid_question_data)
        assert "Missing field: id" in exc_info.value.errors

    def test_validate_when_unknown_category_then_raises_error(self, valid_question_data):
        valid_question_data["category"] = "ESSAY"
        with pytest.raises(ValidationError) as exc_info:
            validate_question(valid_question_data)
        assert exc_info.value.path == "category"

    def test_validate_when_options_not_strings_then_raises_error(self, valid_question_data):
        valid_question_data["options"] = ["Red", 2]
        with pytest.raises(ValidationError, match="options"):
            validate_question(valid_question_data)

    def test_validate_when_not_object_then_raises_error(self):
        with pytest.raises(ValidationError, match="Expected an object"):
            validate_question(["q1"])

    def test_validate_when_strict_and_bad_title_then_raises_error(self, valid_question_data):
        """Fields without a basic check are still caught by the JSON Schema."""
        valid_question_data["title"] = 42
        validate_question(valid_question_data)
        with pytest.raises(ValidationError, match="Schema validation failed"):
            validate_question(valid_question_data, strict=True)


class TestValidateRule:
    """Tests for validate_rule function."""

    def test_validate_when_valid_then_no_error(self):
        data = {
            "schema_version": RULE_SCHEMA_VERSION,
            "target_count": 10,
            "difficulty_distribution": {"EASY": 5, "HARD": 5},
            "category_distribution": {"TRUE_FALSE": 2},
            "excluded_question_ids": ["q1"],
            "knowledge_point_weights": {"algebra": 0.5},
        }
        validate_rule(data)
        validate_rule(data, strict=True)

    def test_validate_when_target_count_zero_then_accepted(self):
        """A zero target is a selection error, not a document error."""
        validate_rule({"target_count": 0})

    def test_validate_when_target_count_string_then_raises_error(self):
        with pytest.raises(ValidationError, match="target_count"):
            validate_rule({"target_count": "10"})

    def test_validate_when_negative_count_then_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_rule({"target_count": 5, "difficulty_distribution": {"EASY": -1}})
        assert exc_info.value.path == "difficulty_distribution.EASY"

    def test_validate_when_unknown_tier_then_raises_error(self):
        with pytest.raises(ValidationError, match="Unknown difficulty tier"):
            validate_rule({"target_count": 5, "difficulty_distribution": {"TRIVIAL": 1}})

    def test_validate_when_future_version_then_raises_error(self):
        with pytest.raises(ValidationError, match="Unsupported rule schema version"):
            validate_rule({"schema_version": 99, "target_count": 5})


class TestValidatePaper:
    """Tests for validate_paper function."""

    @pytest.fixture
    def valid_paper_data(self) -> dict:
        return {
            "title": "Quiz",
            "total_score": 10,
            "duration_minutes": 30,
            "items": [
                {
                    "order": 1,
                    "weight": 10,
                    "question": {"id": "q1", "category": "TRUE_FALSE", "difficulty": "EASY"},
                }
            ],
        }

    def test_validate_when_valid_then_no_error(self, valid_paper_data):
        validate_paper(valid_paper_data)
        validate_paper(valid_paper_data, strict=True)

    def test_validate_when_order_zero_then_raises_error(self, valid_paper_data):
        valid_paper_data["items"][0]["order"] = 0
        with pytest.raises(ValidationError) as exc_info:
            validate_paper(valid_paper_data)
        assert exc_info.value.path == "items[0].order"

    def test_validate_when_embedded_question_invalid_then_path_nested(self, valid_paper_data):
        valid_paper_data["items"][0]["question"]["difficulty"] = "TRIVIAL"
        with pytest.raises(ValidationError) as exc_info:
            validate_paper(valid_paper_data)
        assert exc_info.value.path == "items[0].question.difficulty"
