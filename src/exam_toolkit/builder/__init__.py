"""
Module: builder

Purpose:
    Paper building pipeline: selects questions from a pool to satisfy a
    rule, assembles them into an ordered, weighted paper and records build
    metadata.

Key Functions:
    - select_questions(): Select questions to satisfy a rule
    - assemble_paper(): Turn a selection into a paper
    - build_paper(): Main entry point for paper generation

Key Classes:
    - BuilderConfig: Configuration for building
    - BuildResult: Paper plus selection and metadata

Dependencies:
    - exam_toolkit.core.models: Data models (Question, RuleDescriptor, Paper)

Used By:
    - Applications generating papers from a question bank
"""

from .config import BuilderConfig
from .selection import SelectionError, select_questions
from .assembly import assemble_paper
from .controller import build_paper, BuildResult, BuildError

__all__ = [
    # Config
    "BuilderConfig",
    # Selection
    "select_questions",
    "SelectionError",
    # Assembly
    "assemble_paper",
    # Controller
    "build_paper",
    "BuildResult",
    "BuildError",
]
