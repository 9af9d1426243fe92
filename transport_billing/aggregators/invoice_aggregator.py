"""Invoice aggregator for combining memos into customer invoices.

This module sums the totals of a customer's selected memos, applies the
advance already received and renders the invoice's derived fields. Memo
order is never changed: line numbers follow the order of selection.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Sequence, Tuple

from transport_billing.calculators.amount_in_words import rupees_in_words
from transport_billing.calculators.trip_charge_calculator import (
    format_fixed,
    parse_amount,
)
from transport_billing.models.invoice import Invoice, MemoSummary
from transport_billing.models.memo import TripMemo

logger = logging.getLogger(__name__)


@dataclass
class InvoiceTotals:
    """Derived totals of an invoice.

    Attributes:
        total_amount: Sum of the memo totals
        less_advance: Advance deducted
        balance: total_amount − less_advance
        amount_in_words: Rounded total amount in words
        line_items: (1-based line number, memo summary) in input order

    Example:
        >>> totals = InvoiceAggregator().aggregate(
        ...     [MemoSummary(memo_no="SVS-001", total_amount="1000.00")], "200"
        ... )
        >>> totals.balance
        Decimal('800.00')
    """

    total_amount: Decimal
    less_advance: Decimal
    balance: Decimal
    amount_in_words: str
    line_items: List[Tuple[int, MemoSummary]] = field(default_factory=list)


def summarize_memo(memo: TripMemo) -> MemoSummary:
    """Build the invoice line for a memo."""
    return MemoSummary(
        memo_no=memo.memo_no,
        operated_date=memo.operated_date,
        vehicle_no=memo.vehicle_no,
        total_amount=memo.total_amount,
    )


class InvoiceAggregator:
    """Aggregates memo summaries into invoice totals.

    The aggregator is stateless; invoices are recomputed whenever their memo
    sequence or less-advance amount changes.

    Example:
        >>> aggregator = InvoiceAggregator()
        >>> invoice = aggregator.apply(invoice)
        >>> invoice.total_amount
        '2530.00'
    """

    def aggregate(
        self, memos: Sequence[MemoSummary], less_advance: Any = "0"
    ) -> InvoiceTotals:
        """Compute the totals of a memo sequence.

        Memo totals that are not numeric count as 0.

        Args:
            memos: Memo summaries in selection order
            less_advance: Advance received (text or Decimal)

        Returns:
            InvoiceTotals for the sequence
        """
        total_amount = sum(
            (parse_amount(memo.total_amount) for memo in memos), Decimal("0")
        )
        advance = parse_amount(less_advance)
        balance = total_amount - advance

        logger.debug(
            f"Aggregated {len(memos)} memos: total {total_amount}, balance {balance}"
        )

        return InvoiceTotals(
            total_amount=total_amount,
            less_advance=advance,
            balance=balance,
            amount_in_words=rupees_in_words(total_amount),
            line_items=[(position, memo) for position, memo in enumerate(memos, 1)],
        )

    def apply(self, invoice: Invoice) -> Invoice:
        """Return a copy of the invoice with its derived fields recomputed.

        Args:
            invoice: Invoice with memos and less-advance set

        Returns:
            New Invoice with total, balance and words rendered
        """
        totals = self.aggregate(invoice.memos, invoice.less_advance)
        return invoice.model_copy(
            update={
                "total_amount": format_fixed(totals.total_amount),
                "balance": format_fixed(totals.balance),
                "total_amount_in_words": totals.amount_in_words,
            }
        )
