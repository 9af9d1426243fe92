"""Invoice data models.

An invoice aggregates one customer's memos into a single billing document.
It keeps a summary of each memo (not the memo itself) in the order the
memos were selected.
"""

import json
from typing import Any, List

from pydantic import Field, field_validator, model_validator

from transport_billing.models.base import BaseDataModel
from transport_billing.models.memo import coerce_cells_to_text


class MemoSummary(BaseDataModel):
    """Summary line of a memo included in an invoice.

    Attributes:
        memo_no: Memo number
        operated_date: Operating date of the trip
        vehicle_no: Vehicle registration number
        total_amount: Memo total amount as rendered on the memo
    """

    memo_no: str = Field(..., min_length=1, description="Memo number")
    operated_date: str = ""
    vehicle_no: str = ""
    total_amount: str = "0"

    @model_validator(mode="before")
    @classmethod
    def coerce_cells(cls, data: Any) -> Any:
        return coerce_cells_to_text(data)


class Invoice(BaseDataModel):
    """Represents a customer invoice.

    Attributes:
        invoice_no: Invoice number, ``<PREFIX>-<NNN>``
        invoice_date: Invoice date (ISO date text)
        customer_name: Customer billed
        customer_address1: First address line
        customer_address2: Second address line
        memos: Memo summaries in selection order
        less_advance: Advance already received
        remark: Free text
        total_amount: Derived, sum of the memo totals
        balance: Derived, total minus less advance
        total_amount_in_words: Derived, rounded total in words

    Example:
        >>> invoice = Invoice(
        ...     invoice_no="INV-001",
        ...     customer_name="John Doe",
        ...     memos=[MemoSummary(memo_no="SVS-001", total_amount="1000.00")],
        ... )
        >>> [m.memo_no for m in invoice.memos]
        ['SVS-001']
    """

    invoice_no: str = ""
    invoice_date: str = ""
    customer_name: str = ""
    customer_address1: str = ""
    customer_address2: str = ""
    memos: List[MemoSummary] = Field(default_factory=list)
    less_advance: str = "0"
    remark: str = ""
    total_amount: str = "0.00"
    balance: str = "0.00"
    total_amount_in_words: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_cells(cls, data: Any) -> Any:
        return coerce_cells_to_text(data)

    @field_validator("memos", mode="before")
    @classmethod
    def parse_memo_cell(cls, v: Any) -> Any:
        """Accept the JSON text the memo list is stored as in a sheet cell.

        Args:
            v: List of summaries, or JSON text, or an empty cell

        Returns:
            A list the model can validate
        """
        if isinstance(v, str):
            if not v.strip():
                return []
            try:
                return json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"memos cell is not valid JSON: {e}")
        return v

    @classmethod
    def column_names(cls) -> List[str]:
        return list(cls.model_fields.keys())

    def to_row(self) -> List[str]:
        """Serialize the invoice as a row, the memo list as one JSON cell."""
        data = self.model_dump(mode="json")
        row = []
        for name in self.column_names():
            if name == "memos":
                row.append(json.dumps(data["memos"]))
            else:
                row.append(str(data[name]))
        return row
