"""
Module: builder.config

Purpose:
    Configuration dataclass for the paper building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building papers

Dependencies:
    - dataclasses (std)

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building papers (immutable).

    Attributes:
        seed: Random seed for selection reproducibility (None = unseeded)
        allow_empty_paper: If False, a build that selects no questions
            raises BuildError instead of returning an empty paper

    Example:
        >>> config = BuilderConfig(seed=42, allow_empty_paper=False)
    """

    seed: Optional[int] = None
    allow_empty_paper: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed must be an integer or None: {self.seed!r}")
        if not isinstance(self.allow_empty_paper, bool):
            raise ValueError(f"allow_empty_paper must be a bool: {self.allow_empty_paper!r}")
