"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_question,
    validate_rule,
    validate_paper,
    ValidationError,
    QUESTION_SCHEMA_VERSION,
    RULE_SCHEMA_VERSION,
    PAPER_SCHEMA_VERSION,
)

__all__ = [
    "validate_question",
    "validate_rule",
    "validate_paper",
    "ValidationError",
    "QUESTION_SCHEMA_VERSION",
    "RULE_SCHEMA_VERSION",
    "PAPER_SCHEMA_VERSION",
]
