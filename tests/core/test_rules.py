"""
Unit Tests for RuleDescriptor and counts_from_ratios.
"""

import pytest

from exam_toolkit.core.models import (
    DifficultyTier,
    QuestionCategory,
    RuleDescriptor,
    counts_from_ratios,
)


class TestRuleDescriptor:
    """Tests for RuleDescriptor dataclass."""

    def test_init_when_string_keys_then_parsed_to_enums(self):
        rule = RuleDescriptor(
            target_count=10,
            difficulty_distribution={"EASY": 4, "medium": 6},
            category_distribution={"单选题": 5},
        )
        assert rule.difficulty_distribution == {
            DifficultyTier.EASY: 4,
            DifficultyTier.MEDIUM: 6,
        }
        assert rule.category_distribution == {QuestionCategory.SINGLE_CHOICE: 5}

    def test_init_when_negative_count_then_raises_error(self):
        with pytest.raises(ValueError, match="non-negative"):
            RuleDescriptor(target_count=5, difficulty_distribution={"EASY": -1})

    def test_init_when_fractional_count_then_raises_error(self):
        with pytest.raises(ValueError, match="integer"):
            RuleDescriptor(target_count=5, difficulty_distribution={"EASY": 1.5})

    def test_init_when_integral_float_count_then_accepted(self):
        rule = RuleDescriptor(target_count=5, difficulty_distribution={"EASY": 2.0})
        assert rule.difficulty_distribution[DifficultyTier.EASY] == 2

    def test_init_when_same_tier_twice_then_counts_summed(self):
        """"EASY" and level 1 name the same tier."""
        rule = RuleDescriptor(target_count=5, difficulty_distribution={"EASY": 2, 1: 1})
        assert rule.difficulty_distribution[DifficultyTier.EASY] == 3

    def test_init_when_target_count_not_int_then_raises_type_error(self):
        with pytest.raises(TypeError):
            RuleDescriptor(target_count="10")

    def test_init_when_target_count_zero_then_allowed(self):
        """Non-positive targets are rejected by the selector, not here."""
        assert RuleDescriptor(target_count=0).target_count == 0

    def test_required_knowledge_points_when_weights_then_positive_weights_included(self):
        rule = RuleDescriptor(
            target_count=5,
            knowledge_points={"algebra"},
            knowledge_point_weights={"geometry": 0.5, "calculus": 0},
        )
        assert rule.required_knowledge_points == frozenset({"algebra", "geometry"})

    def test_totals_when_distributions_then_summed(self):
        rule = RuleDescriptor(
            target_count=10,
            difficulty_distribution={"EASY": 3, "HARD": 2},
            category_distribution={"TRUE_FALSE": 4},
        )
        assert rule.difficulty_total == 5
        assert rule.category_total == 4

    def test_hash_when_equal_rules_then_equal_hashes(self):
        """Rules built from different key spellings are equal and hash alike."""
        first = RuleDescriptor(
            target_count=5,
            difficulty_distribution={"EASY": 2},
            knowledge_point_weights={"algebra": 1},
        )
        second = RuleDescriptor(
            target_count=5,
            difficulty_distribution={DifficultyTier.EASY: 2},
            knowledge_point_weights={"algebra": 1.0},
        )
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_hash_when_counts_differ_then_not_equal(self):
        first = RuleDescriptor(target_count=5, difficulty_distribution={"EASY": 2})
        second = RuleDescriptor(target_count=5, difficulty_distribution={"EASY": 3})
        assert first != second
        assert len({first, second}) == 2

    def test_from_dict_when_round_trip_then_equal(self):
        rule = RuleDescriptor(
            target_count=12,
            difficulty_distribution={DifficultyTier.HARD: 2, DifficultyTier.EASY: 5},
            category_distribution={QuestionCategory.FILL_BLANK: 3},
            knowledge_points={"b", "a"},
            tags={"unit1"},
            excluded_question_ids={"q9", "q3"},
            knowledge_point_weights={"a": 0.7},
            rule_id="r-1",
            name="Midterm",
        )
        d = rule.to_dict()
        assert list(d["difficulty_distribution"]) == ["EASY", "HARD"]
        assert d["excluded_question_ids"] == ["q3", "q9"]
        assert RuleDescriptor.from_dict(d) == rule


class TestCountsFromRatios:
    """Tests for counts_from_ratios."""

    def test_counts_when_exact_shares_then_floor_counts(self):
        counts = counts_from_ratios({"EASY": 0.3, "MEDIUM": 0.5, "HARD": 0.2}, 10)
        assert counts == {"EASY": 3, "MEDIUM": 5, "HARD": 2}

    def test_counts_when_remainders_then_sum_equals_total(self):
        counts = counts_from_ratios({"a": 1 / 3, "b": 1 / 3, "c": 1 / 3}, 10)
        assert sum(counts.values()) == 10
        # Ties go to the earliest key
        assert counts == {"a": 4, "b": 3, "c": 3}

    def test_counts_when_largest_remainder_then_gets_extra(self):
        counts = counts_from_ratios({"a": 0.25, "b": 0.75}, 3)
        # shares 0.75 / 2.25 -> floors 0 / 2, leftover 1 goes to "a" (.75 > .25)
        assert counts == {"a": 1, "b": 2}

    def test_counts_when_sum_within_tolerance_then_accepted(self):
        counts = counts_from_ratios({"a": 0.5, "b": 0.495}, 100)
        assert sum(counts.values()) == 100

    def test_counts_when_sum_off_then_raises_error(self):
        with pytest.raises(ValueError, match="sum to 1"):
            counts_from_ratios({"a": 0.5, "b": 0.4}, 10)

    def test_counts_when_negative_ratio_then_raises_error(self):
        with pytest.raises(ValueError, match="non-negative"):
            counts_from_ratios({"a": 1.5, "b": -0.5}, 10)
