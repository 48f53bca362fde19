"""
Module: grading.config

Purpose:
    Configuration dataclass for scoring. Immutable configuration with
    validation on construction.

Key Classes:
    - ScoringConfig: Settings for score_paper()

Used By:
    - grading.scorer
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration for scoring papers (immutable).

    Attributes:
        default_weight: Points for a correct answer on an item that has
            no weight of its own

    Example:
        >>> config = ScoringConfig(default_weight=2.0)
    """

    default_weight: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if isinstance(self.default_weight, bool) or not isinstance(self.default_weight, (int, float)):
            raise ValueError(f"default_weight must be a number: {self.default_weight!r}")
        if self.default_weight <= 0:
            raise ValueError(f"default_weight must be positive: {self.default_weight}")
