"""Shared CRUD for the flat lookup tables.

The service-areas table, the rate calculation table and the lookup table
are all plain grids of text. They share this one implementation so that
every screen resolves a selected row the same way before updating or
deleting it.
"""

import logging
from typing import List, Optional, Sequence

from transport_billing.records.index_resolver import filter_records, resolve_index
from transport_billing.stores.record_store import (
    Record,
    RecordNotFoundError,
    RecordStore,
)
from transport_billing.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)


class TabularTable:
    """A flat table over a positional record store.

    Data indices exclude the header row; the store position of data row
    ``i`` is ``i + 1`` when the table keeps a header at position 0.

    Example:
        >>> table = TabularTable(store, has_header=True)
        >>> view = table.search("tata ace")
        >>> table.update(view[0], ["TATA ACE_Area 1", "2", "20", "650", ...])
    """

    def __init__(self, store: RecordStore, has_header: bool = False):
        """
        Initialize the table.

        Args:
            store: Backing record store
            has_header: Whether position 0 of the store is a header row
        """
        self.store = store
        self.has_header = has_header

    @property
    def name(self) -> str:
        return self.store.name

    @property
    def _offset(self) -> int:
        return 1 if self.has_header else 0

    def header(self) -> Optional[Record]:
        """Return the header row, or None for headerless or empty tables."""
        if not self.has_header:
            return None
        rows = self.store.list()
        return rows[0] if rows else None

    def records(self) -> List[Record]:
        """Return the data rows, header excluded, in storage order."""
        return self.store.list()[self._offset :]

    def search(
        self, search_term: Optional[str], collection: Optional[List[Record]] = None
    ) -> List[Record]:
        """Return the filtered view shown for a search term."""
        if collection is None:
            collection = self.records()
        return filter_records(collection, search_term)

    def resolve(
        self, selected: Sequence[str], collection: Optional[List[Record]] = None
    ) -> int:
        """Resolve a selected record to its data index.

        Args:
            selected: Record value taken from a view
            collection: The full collection the view was rendered from;
                        a fresh listing is used when omitted

        Returns:
            Data index (header excluded)

        Raises:
            RecordNotFoundError: If no record equals the selected value
        """
        if collection is None:
            collection = self.records()
        index = resolve_index(collection, selected)
        if index is None:
            raise RecordNotFoundError(
                f"Record {list(selected)} not found in '{self.name}'"
            )
        return index

    def add(self, record: Sequence[str]) -> str:
        """Append a new record."""
        with LogContext(table=self.name):
            logger.info(f"Adding record to '{self.name}'")
            return self.store.insert(list(record))

    def update(
        self,
        selected: Sequence[str],
        new_record: Sequence[str],
        collection: Optional[List[Record]] = None,
    ) -> str:
        """Replace the record matching a selected value.

        Raises:
            RecordNotFoundError: If the selected record cannot be resolved;
                                 the store is not called
        """
        with LogContext(table=self.name):
            index = self.resolve(selected, collection)
            logger.info(f"Updating record {index} of '{self.name}'")
            return self.store.update_at(index + self._offset, list(new_record))

    def delete(
        self, selected: Sequence[str], collection: Optional[List[Record]] = None
    ) -> str:
        """Delete the record matching a selected value.

        Raises:
            RecordNotFoundError: If the selected record cannot be resolved;
                                 the store is not called
        """
        with LogContext(table=self.name):
            index = self.resolve(selected, collection)
            logger.info(f"Deleting record {index} of '{self.name}'")
            return self.store.delete_at(index + self._offset)

    def blank_record(self) -> Record:
        """Empty record sized to the header, used when adding a new row."""
        header = self.header()
        if header is not None:
            return [""] * len(header)
        records = self.records()
        return [""] * (len(records[0]) if records else 0)
