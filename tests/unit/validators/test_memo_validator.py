"""Unit tests for the memo validator."""

import pytest

from transport_billing.models.memo import TripMemo
from transport_billing.validators.memo_validator import (
    MemoFieldValidators,
    MemoValidator,
    validate_memo,
)
from transport_billing.validators.validation_report import ValidationReport


def _fields(issues):
    return [issue.field for issue in issues]


class TestMemoFieldValidators:
    """Test field-level checks."""

    @pytest.mark.parametrize("value", ["", "12", "1,250.50", "-3"])
    def test_valid_numbers(self, value):
        report = ValidationReport()
        MemoFieldValidators.validate_number(value, "toll_amount", report)
        assert report.issues == []

    @pytest.mark.parametrize("value", ["abc", "12a", "NaN"])
    def test_invalid_numbers(self, value):
        report = ValidationReport()
        MemoFieldValidators.validate_number(value, "toll_amount", report)
        assert report.get_warnings()[0].message == "Not a number, counted as 0"

    def test_clock_time(self):
        report = ValidationReport()

        assert MemoFieldValidators.validate_clock_time("", "t", report) is None
        assert MemoFieldValidators.validate_clock_time("25:00", "t", report) is None
        assert report.warning_count == 1

    def test_date(self):
        report = ValidationReport()
        MemoFieldValidators.validate_date("2024-07-28", "operated_date", report)
        MemoFieldValidators.validate_date("28/07/2024", "operated_date", report)

        assert report.warning_count == 1


class TestMemoValidator:
    """Test MemoValidator.validate."""

    def test_sample_memo_is_clean(self, sample_memo):
        report = validate_memo(sample_memo)
        assert report.issues == []

    def test_missing_memo_number_is_error(self):
        report = MemoValidator().validate(TripMemo(customer_name="John Doe"))

        assert not report.is_valid()
        assert _fields(report.get_errors()) == ["memo_no"]

    def test_missing_customer_is_warning(self):
        report = validate_memo(TripMemo(memo_no="SVS-001"))

        assert report.is_valid()
        assert _fields(report.get_warnings()) == ["customer_name"]

    def test_bad_number_is_warning(self, sample_memo):
        memo = sample_memo.model_copy(update={"toll_amount": "abc"})
        report = validate_memo(memo)

        assert report.is_valid()
        assert _fields(report.get_warnings()) == ["toll_amount"]
        assert report.get_warnings()[0].context == {"memo_no": "SVS-001"}

    def test_shift_with_one_time(self, sample_memo):
        memo = sample_memo.model_copy(update={"starting_time2": "18:00"})
        report = validate_memo(memo)

        assert _fields(report.get_warnings()) == ["closing_time2"]

    def test_midnight_crossing_is_info(self, sample_memo):
        memo = sample_memo.model_copy(
            update={"starting_time1": "22:00", "closing_time1": "02:00"}
        )
        report = validate_memo(memo)

        assert report.warning_count == 0
        assert _fields(report.get_info()) == ["closing_time1"]
        assert "crossing midnight" in report.get_info()[0].message

    def test_negative_kilometres(self, sample_memo):
        memo = sample_memo.model_copy(update={"closing_km1": "900"})
        report = validate_memo(memo)

        assert _fields(report.get_warnings()) == ["total_km"]
        assert report.get_warnings()[0].value == "-100"
