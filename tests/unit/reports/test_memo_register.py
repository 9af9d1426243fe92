"""Unit tests for the memo register reports."""

import pandas as pd
import pytest

from transport_billing.models.memo import MemoStatus, TripMemo
from transport_billing.reports.memo_register import (
    OUTSTANDING_COLUMNS,
    REGISTER_COLUMNS,
    build_memo_register,
    summarize_outstanding,
)


@pytest.fixture
def memos():
    return [
        TripMemo(
            memo_no="SVS-001",
            customer_name="John Doe",
            total_amount="1000.00",
            balance="500.00",
        ),
        TripMemo(
            memo_no="SVS-002",
            customer_name="Jane Smith",
            total_amount="1,530.00",
            balance="1030.00",
        ),
        TripMemo(
            memo_no="SVS-003",
            customer_name="John Doe",
            total_amount="250.50",
            balance="250.50",
        ),
        TripMemo(
            memo_no="SVS-004",
            customer_name="John Doe",
            total_amount="999.00",
            balance="0.00",
            status=MemoStatus.COMPLETED,
        ),
    ]


class TestBuildMemoRegister:
    """Test build_memo_register function."""

    def test_one_row_per_memo(self, memos):
        register = build_memo_register(memos)

        assert list(register.columns) == REGISTER_COLUMNS
        assert list(register["Memo No"]) == [
            "SVS-001",
            "SVS-002",
            "SVS-003",
            "SVS-004",
        ]

    def test_amounts_are_numeric(self, memos):
        register = build_memo_register(memos)

        assert pd.api.types.is_numeric_dtype(register["Total Amount"])
        assert register["Total Amount"].sum() == pytest.approx(3779.50)

    def test_unparseable_amount_counts_as_zero(self):
        register = build_memo_register([TripMemo(memo_no="SVS-001", balance="n/a")])
        assert register.loc[0, "Balance"] == 0

    def test_filters(self, memos):
        by_customer = build_memo_register(memos, customer=" john doe")
        completed = build_memo_register(memos, status=MemoStatus.COMPLETED)

        assert list(by_customer["Memo No"]) == ["SVS-001", "SVS-003", "SVS-004"]
        assert list(completed["Memo No"]) == ["SVS-004"]

    def test_empty(self):
        register = build_memo_register([])

        assert register.empty
        assert list(register.columns) == REGISTER_COLUMNS


class TestSummarizeOutstanding:
    """Test summarize_outstanding function."""

    def test_pending_totals_per_customer(self, memos):
        summary = summarize_outstanding(build_memo_register(memos))

        assert list(summary.columns) == OUTSTANDING_COLUMNS
        assert list(summary["Customer"]) == ["Jane Smith", "John Doe"]
        john = summary[summary["Customer"] == "John Doe"].iloc[0]
        assert john["Pending Memos"] == 2
        assert john["Total Amount"] == pytest.approx(1250.50)
        assert john["Balance"] == pytest.approx(750.50)

    def test_nothing_pending(self, memos):
        register = build_memo_register(memos, status=MemoStatus.COMPLETED)
        summary = summarize_outstanding(register)

        assert summary.empty
        assert list(summary.columns) == OUTSTANDING_COLUMNS
