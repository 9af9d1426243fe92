"""Record store abstraction and the in-memory implementation.

Every table of the system (memos, invoices, customers and the flat lookup
tables) is a list of rows of text cells. A store addresses rows only by
their position in that list; position 0 holds the header row for tables
that keep one.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

Record = List[str]


class StoreError(Exception):
    """Raised when a store operation fails.

    Carries a message fit to show the user; the table is left as it was
    before the failed operation.
    """

    pass


class RecordNotFoundError(StoreError):
    """Raised when a record cannot be located for an update or delete."""

    pass


class RecordStore(ABC):
    """Positional store of text rows.

    Implementations must apply each operation as a whole or not at all.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def list(self) -> List[Record]:
        """Return every row, header included, in storage order."""

    @abstractmethod
    def insert(self, record: Sequence[str]) -> str:
        """Append a row and return a confirmation message."""

    @abstractmethod
    def update_at(self, index: int, record: Sequence[str]) -> str:
        """Replace the row at a position.

        Raises:
            StoreError: If the position is out of bounds
        """

    @abstractmethod
    def delete_at(self, index: int) -> str:
        """Remove the row at a position.

        Raises:
            StoreError: If the position is out of bounds
        """

    def replace_all(self, rows: Iterable[Sequence[str]]) -> None:
        """Swap the whole table content (database import)."""
        for index in range(len(self.list()) - 1, -1, -1):
            self.delete_at(index)
        for row in rows:
            self.insert(list(row))

    def _check_index(self, index: int, size: int) -> None:
        if index < 0 or index >= size:
            raise StoreError(
                f"Row {index} is out of range for table '{self.name}' "
                f"({size} rows)"
            )


class InMemoryRecordStore(RecordStore):
    """List-backed record store.

    Rows are copied on the way in and out, so a listing held by a caller is
    a snapshot and never changes under it.

    Example:
        >>> store = InMemoryRecordStore("areas", [["Guindy", "Area 1"]])
        >>> store.insert(["Ambattur", "Area 2"])
        "Row added to 'areas'"
        >>> store.list()
        [['Guindy', 'Area 1'], ['Ambattur', 'Area 2']]
    """

    def __init__(self, name: str, rows: Optional[Iterable[Sequence[str]]] = None):
        super().__init__(name)
        self._rows: List[Record] = [list(row) for row in rows or []]

    def list(self) -> List[Record]:
        return [list(row) for row in self._rows]

    def insert(self, record: Sequence[str]) -> str:
        self._rows.append(list(record))
        logger.debug(f"Inserted row into '{self.name}' at {len(self._rows) - 1}")
        return f"Row added to '{self.name}'"

    def update_at(self, index: int, record: Sequence[str]) -> str:
        self._check_index(index, len(self._rows))
        self._rows[index] = list(record)
        logger.debug(f"Updated row {index} of '{self.name}'")
        return f"Row {index} of '{self.name}' updated"

    def delete_at(self, index: int) -> str:
        self._check_index(index, len(self._rows))
        del self._rows[index]
        logger.debug(f"Deleted row {index} of '{self.name}'")
        return f"Row {index} of '{self.name}' deleted"

    def replace_all(self, rows: Iterable[Sequence[str]]) -> None:
        """Swap the whole table content (database import)."""
        self._rows = [list(row) for row in rows]
