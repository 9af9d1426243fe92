"""Memo and invoice workflows."""

from transport_billing.workflows.invoice_workflow import InvoiceWorkflow
from transport_billing.workflows.memo_workflow import MemoSaveResult, MemoWorkflow

__all__ = ["InvoiceWorkflow", "MemoSaveResult", "MemoWorkflow"]
