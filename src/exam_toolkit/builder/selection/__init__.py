"""
Module: builder.selection

Purpose:
    Question selection algorithm for building papers. Selects questions
    from a pool to meet a rule's difficulty, category and total-count
    targets, reporting every target the pool could not satisfy.

Key Functions:
    - select_questions(): Main entry point for selection
    - partition_pool(): Index a pool by difficulty and category
    - take_up_to(): Shared capped sampling step

Key Classes:
    - Selector: Main selection orchestrator
    - SelectionError: Invalid selection request

Dependencies:
    - exam_toolkit.core.models: Question, RuleDescriptor, SelectionResult

Used By:
    - builder.controller: Main build controller
"""

from .partition import PoolPartition, partition_pool
from .sampling import Draw, shortfall_message, take_up_to
from .selector import SelectionError, Selector, select_questions

__all__ = [
    "select_questions",
    "Selector",
    "SelectionError",
    "partition_pool",
    "PoolPartition",
    "take_up_to",
    "shortfall_message",
    "Draw",
]
