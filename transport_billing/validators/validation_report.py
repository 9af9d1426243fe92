"""Validation report for collecting and formatting memo validation issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single validation issue.

    Attributes:
        severity: The severity level of the issue
        field: The memo field that has the issue
        message: Human-readable description of the issue
        value: The value that caused the issue
        context: Optional context information (e.g., memo_no)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            context_str = f" ({', '.join(context_parts)})"

        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues.

    Only errors make a report invalid; warnings and info messages are
    advisory and shown alongside a successful save.

    Example:
        >>> report = ValidationReport()
        >>> report.add_warning("toll_amount", "Not a number, counted as 0", "abc")
        >>> report.is_valid()
        True
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def _of(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(ValidationSeverity.INFO)

    def is_valid(self) -> bool:
        """True when no error-level issue was recorded."""
        return self.error_count == 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record an issue.

        Args:
            severity: Issue severity
            field: The field name with the issue
            message: Human-readable description
            value: The offending value
            context: Optional context information
        """
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.WARNING, field, message, value, context)

    def add_info(self, field: str, message: str, value: Any, context=None) -> None:
        self.add(ValidationSeverity.INFO, field, message, value, context)

    def get_errors(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.WARNING)

    def get_info(self) -> List[ValidationIssue]:
        return self._of(ValidationSeverity.INFO)

    def merge(self, other: "ValidationReport") -> None:
        """Merge another validation report into this one."""
        self.issues.extend(other.issues)

    def summary(self) -> str:
        """Counts of errors, warnings and info messages, or 'No issues found'."""
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        if self.info_count > 0:
            parts.append(f"{self.info_count} info message(s)")

        return ", ".join(parts) if parts else "No issues found"

    def format(self) -> str:
        """Format the report for display, grouped by severity."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        for title, issues in (
            ("ERRORS", self.get_errors()),
            ("WARNINGS", self.get_warnings()),
            ("INFO", self.get_info()),
        ):
            if issues:
                lines.append(f"\n{title}:")
                lines.extend(f"  - {issue}" for issue in issues)

        return "\n".join(lines)
