"""
Unit tests for answer normalization and coercion.
"""

import pytest

from exam_toolkit.core.models import MultiAnswer, SingleAnswer
from exam_toolkit.grading import (
    coerce_answer,
    coerce_submission,
    normalize,
    parse_list_answer,
    resolve_option,
    split_tokens,
)

OPTIONS = ("Paris", "London", "Rome", "Berlin")


class TestNormalize:
    """Tests for normalize / split_tokens."""

    def test_normalize_when_padded_mixed_case_then_trimmed_lower(self):
        assert normalize("  Hello \t  World\n") == "hello world"

    def test_normalize_when_number_then_string(self):
        assert normalize(3) == "3"

    @pytest.mark.parametrize(
        "text",
        ["a,b;c", "a，b；c", "a、b、c", " A , B ; C ", "a,,b,c,"],
    )
    def test_split_when_any_delimiter_then_same_tokens(self, text):
        assert split_tokens(text) == ["a", "b", "c"]

    def test_split_when_empty_then_no_tokens(self):
        assert split_tokens("  ") == []


class TestParseListAnswer:
    """Tests for parse_list_answer function."""

    def test_parse_when_json_list_then_tokens(self):
        assert parse_list_answer('["A", "C"]') == ["a", "c"]

    def test_parse_when_bracketed_without_quotes_then_tokens(self):
        assert parse_list_answer("[A, C]") == ["a", "c"]

    def test_parse_when_bracketed_single_quotes_then_tokens(self):
        assert parse_list_answer("['A', 'C']") == ["a", "c"]

    def test_parse_when_delimited_then_tokens(self):
        assert parse_list_answer("A；C") == ["a", "c"]

    def test_parse_when_letter_run_in_range_then_split(self):
        assert parse_list_answer("ACD", OPTIONS) == ["a", "c", "d"]

    def test_parse_when_letter_run_out_of_range_then_kept(self):
        assert parse_list_answer("AF", OPTIONS) == ["af"]

    def test_parse_when_letter_run_without_options_then_kept(self):
        assert parse_list_answer("AC") == ["ac"]

    def test_parse_when_run_is_option_text_then_kept(self):
        options = ("ab", "cd", "ef")
        assert parse_list_answer("ab", options) == ["ab"]


class TestResolveOption:
    """Tests for resolve_option function."""

    def test_resolve_when_letter_in_range_then_option_text(self):
        assert resolve_option("b", OPTIONS) == "london"
        assert resolve_option(" B ", OPTIONS) == "london"

    def test_resolve_when_letter_out_of_range_then_token(self):
        assert resolve_option("E", OPTIONS) == "e"

    def test_resolve_when_text_then_normalized_text(self):
        assert resolve_option("  ROME", OPTIONS) == "rome"


class TestCoerceAnswer:
    """Tests for coerce_answer / coerce_submission."""

    def test_coerce_when_none_then_none(self):
        assert coerce_answer(None) is None

    def test_coerce_when_raw_answer_then_unchanged(self):
        answer = MultiAnswer(("A",))
        assert coerce_answer(answer) is answer

    def test_coerce_when_str_then_single(self):
        assert coerce_answer("B") == SingleAnswer("B")

    def test_coerce_when_bool_then_true_false_token(self):
        assert coerce_answer(True) == SingleAnswer("true")
        assert coerce_answer(False) == SingleAnswer("false")

    def test_coerce_when_number_then_string_token(self):
        assert coerce_answer(42) == SingleAnswer("42")

    def test_coerce_when_list_then_multi_in_order(self):
        assert coerce_answer(["C", "A"]) == MultiAnswer(("C", "A"))

    def test_coerce_when_set_then_multi_sorted(self):
        assert coerce_answer({"C", "A"}) == MultiAnswer(("A", "C"))

    def test_coerce_when_unsupported_type_then_raises_type_error(self):
        with pytest.raises(TypeError, match="Unsupported answer type"):
            coerce_answer({"A": 1})

    def test_coerce_submission_when_mixed_then_keys_stringified_and_none_dropped(self):
        coerced = coerce_submission({1: "A", "q2": None, "q3": ["A", "B"]})
        assert coerced == {"1": SingleAnswer("A"), "q3": MultiAnswer(("A", "B"))}

    def test_coerce_submission_when_none_then_empty(self):
        assert coerce_submission(None) == {}
