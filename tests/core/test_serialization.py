"""
Unit Tests for Serialization

Tests for JSON/JSONL load and save helpers.
"""

import json

import pytest

from exam_toolkit.core.models import (
    DifficultyTier,
    GradeResult,
    ItemGrade,
    Paper,
    PaperItem,
    QuestionCategory,
    RuleDescriptor,
    Verdict,
)
from exam_toolkit.core.schemas.validator import ValidationError
from exam_toolkit.core.utils.serialization import (
    deserialize_grade_result,
    deserialize_rule,
    load_paper_json,
    load_questions_jsonl,
    load_rule_json,
    save_paper_json,
    save_questions_jsonl,
    save_rule_json,
    serialize_grade_result,
    serialize_rule,
)


class TestRuleSerialization:
    """Tests for rule documents."""

    def test_serialize_when_rule_then_versioned_document(self):
        data = serialize_rule(RuleDescriptor(target_count=3))
        assert data["schema_version"] == 1
        assert data["target_count"] == 3

    def test_deserialize_when_serialized_then_equal(self):
        rule = RuleDescriptor(
            target_count=8,
            difficulty_distribution={DifficultyTier.MEDIUM: 4},
            category_distribution={QuestionCategory.SHORT_ANSWER: 1},
            excluded_question_ids={"q2"},
        )
        assert deserialize_rule(serialize_rule(rule)) == rule

    def test_deserialize_when_invalid_then_raises_validation_error(self):
        with pytest.raises(ValidationError):
            deserialize_rule({"difficulty_distribution": {}})

    def test_save_and_load_when_json_file_then_equal(self, tmp_path):
        rule = RuleDescriptor(target_count=4, knowledge_points={"函数"}, name="单元测试")
        path = tmp_path / "rules" / "rule.json"
        save_rule_json(rule, path)
        assert "单元测试" in path.read_text(encoding="utf-8")
        assert load_rule_json(path) == rule

    def test_load_when_missing_file_then_raises_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_rule_json(tmp_path / "missing.json")

    def test_load_when_bad_json_then_raises_validation_error(self, tmp_path):
        path = tmp_path / "rule.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError, match="Invalid JSON"):
            load_rule_json(path)


class TestQuestionsJsonl:
    """Tests for question bank JSONL files."""

    def test_save_and_load_when_questions_then_same_order(self, tmp_path, mixed_pool):
        path = tmp_path / "bank.jsonl"
        save_questions_jsonl(mixed_pool, path)
        assert load_questions_jsonl(path) == mixed_pool

    def test_load_when_blank_lines_then_skipped(self, tmp_path):
        path = tmp_path / "bank.jsonl"
        line = json.dumps({"id": 1, "category": "判断题", "difficulty": "简单", "canonical_answer": "对"})
        path.write_text(f"\n{line}\n\n", encoding="utf-8")
        questions = load_questions_jsonl(path)
        assert [q.id for q in questions] == ["1"]

    def test_load_when_bad_line_then_error_names_line(self, tmp_path):
        path = tmp_path / "bank.jsonl"
        good = json.dumps({"id": "q1", "category": "FILL_BLANK", "difficulty": "EASY"})
        bad = json.dumps({"id": "q2", "category": "FILL_BLANK"})
        path.write_text(f"{good}\n{bad}\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="line 2"):
            load_questions_jsonl(path)


class TestPaperAndGradeSerialization:
    """Tests for paper and grade result documents."""

    def test_save_and_load_when_paper_then_equal(self, tmp_path, make_question):
        paper = Paper(
            "期中考试",
            100,
            90,
            items=(PaperItem(make_question("q1"), 1, 50), PaperItem(make_question("q2"), 2, 50)),
            diagnostics=("HARD has shortfall of 1 (target 1, filled 0)",),
        )
        path = tmp_path / "paper.json"
        save_paper_json(paper, path)
        assert json.loads(path.read_text(encoding="utf-8"))["schema_version"] == 1
        assert load_paper_json(path) == paper

    def test_grade_result_when_round_trip_then_equal(self):
        result = GradeResult(
            2.0,
            1,
            2,
            details=(
                ItemGrade("q1", True, 2.0, Verdict.CORRECT),
                ItemGrade("q2", False, 0.0, Verdict.MANUAL_REVIEW),
            ),
            max_score=4.0,
        )
        assert deserialize_grade_result(serialize_grade_result(result)) == result
