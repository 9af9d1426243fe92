"""Validation framework for trip memos.

This package provides:
- ValidationReport: Collects and formats validation issues
- MemoFieldValidators: Field-level checks on memo text values
- MemoValidator / validate_memo: Validation run before a memo is saved
"""

from transport_billing.validators.memo_validator import (
    MemoFieldValidators,
    MemoValidator,
    validate_memo,
)
from transport_billing.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
    "MemoFieldValidators",
    "MemoValidator",
    "validate_memo",
]
