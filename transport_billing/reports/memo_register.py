"""Memo register and outstanding balance reports as pandas DataFrames."""

import logging
from typing import List, Optional, Sequence

import pandas as pd

from transport_billing.models.memo import MemoStatus, TripMemo

logger = logging.getLogger(__name__)

REGISTER_COLUMNS: List[str] = [
    "Memo No",
    "Date",
    "Customer",
    "Vehicle No",
    "Vehicle Type",
    "Total Hours",
    "Total Km",
    "Total Amount",
    "Less Advance",
    "Balance",
    "Status",
]

NUMERIC_COLUMNS: List[str] = [
    "Total Hours",
    "Total Km",
    "Total Amount",
    "Less Advance",
    "Balance",
]

OUTSTANDING_COLUMNS: List[str] = [
    "Customer",
    "Pending Memos",
    "Total Amount",
    "Balance",
]


def build_memo_register(
    memos: Sequence[TripMemo],
    customer: Optional[str] = None,
    status: Optional[MemoStatus] = None,
) -> pd.DataFrame:
    """
    Tabulate memos, one row per memo in storage order.

    Amount columns are numeric; text that does not parse counts as 0.

    Args:
        memos: Memos to include
        customer: Only memos of this customer (case-insensitive)
        status: Only memos in this status

    Returns:
        DataFrame with REGISTER_COLUMNS
    """
    rows = []
    for memo in memos:
        if customer and memo.customer_name.strip().lower() != customer.strip().lower():
            continue
        if status is not None and memo.status != status:
            continue
        rows.append(
            [
                memo.memo_no,
                memo.operated_date,
                memo.customer_name,
                memo.vehicle_no,
                memo.vehicle_type,
                memo.total_hours,
                memo.total_km,
                memo.total_amount,
                memo.less_advance,
                memo.balance,
                memo.status.value,
            ]
        )

    if not rows:
        return pd.DataFrame(columns=REGISTER_COLUMNS)

    df = pd.DataFrame(rows, columns=REGISTER_COLUMNS)
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(
            df[col].str.replace(",", "", regex=False), errors="coerce"
        ).fillna(0)

    logger.debug(f"Built memo register with {len(df)} rows")
    return df


def summarize_outstanding(register: pd.DataFrame) -> pd.DataFrame:
    """
    Per-customer summary of memos not yet invoiced.

    Args:
        register: DataFrame produced by build_memo_register

    Returns:
        DataFrame with OUTSTANDING_COLUMNS, one row per customer, sorted by name
    """
    pending = register[register["Status"] == MemoStatus.PENDING.value]
    if len(pending) == 0:
        return pd.DataFrame(columns=OUTSTANDING_COLUMNS)

    grouped = pending.groupby("Customer", as_index=False).agg(
        {"Memo No": "count", "Total Amount": "sum", "Balance": "sum"}
    )
    grouped = grouped.rename(columns={"Memo No": "Pending Memos"})
    grouped = grouped.sort_values("Customer").reset_index(drop=True)
    return grouped[OUTSTANDING_COLUMNS]
