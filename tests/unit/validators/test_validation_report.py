"""Unit tests for the validation report."""

from transport_billing.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)


class TestValidationIssue:
    """Test ValidationIssue."""

    def test_str_with_context(self):
        issue = ValidationIssue(
            severity=ValidationSeverity.WARNING,
            field="toll_amount",
            message="Not a number, counted as 0",
            value="abc",
            context={"memo_no": "SVS-001"},
        )
        assert str(issue) == (
            "[WARNING] toll_amount: Not a number, counted as 0 (memo_no=SVS-001)"
        )

    def test_severity_ordering(self):
        assert ValidationSeverity.ERROR > ValidationSeverity.WARNING
        assert ValidationSeverity.WARNING > ValidationSeverity.INFO


class TestValidationReport:
    """Test ValidationReport."""

    def test_empty_report(self):
        report = ValidationReport()

        assert report.is_valid()
        assert report.summary() == "No issues found"
        assert report.format() == "Validation successful - no issues found"

    def test_warnings_do_not_invalidate(self):
        report = ValidationReport()
        report.add_warning("customer_name", "No customer selected", "")
        report.add_info("closing_time1", "Crosses midnight", "02:00")

        assert report.is_valid()
        assert not report.has_errors()
        assert report.warning_count == 1
        assert report.info_count == 1

    def test_errors_invalidate(self):
        report = ValidationReport()
        report.add_error("memo_no", "Memo number is required", "")

        assert not report.is_valid()
        assert [i.field for i in report.get_errors()] == ["memo_no"]

    def test_summary_and_format(self):
        report = ValidationReport()
        report.add_error("memo_no", "Memo number is required", "")
        report.add_warning("toll_amount", "Not a number, counted as 0", "abc")
        report.add_warning("permit_amount", "Not a number, counted as 0", "x")

        assert report.summary() == "1 error(s), 2 warning(s)"
        text = report.format()
        assert text.startswith("Validation Report - 1 error(s), 2 warning(s)")
        assert "ERRORS:" in text
        assert "WARNINGS:" in text
        assert "INFO:" not in text

    def test_merge(self):
        first = ValidationReport()
        first.add_warning("a", "w", "")
        second = ValidationReport()
        second.add_error("b", "e", "")

        first.merge(second)
        assert first.error_count == 1
        assert first.warning_count == 1
