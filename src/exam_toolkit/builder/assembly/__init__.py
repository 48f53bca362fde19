"""
Module: builder.assembly

Purpose:
    Paper assembly: ordering, numbering and score weighting of selected
    questions.
"""

from .assembler import assemble_paper, display_sort_key, split_score

__all__ = ["assemble_paper", "display_sort_key", "split_score"]
