"""Transport billing: trip memos, customer invoices and flat lookup tables."""

__version__ = "1.0.0"
