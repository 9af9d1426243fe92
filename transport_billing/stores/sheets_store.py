"""Record store backed by one tab of a Google spreadsheet."""

import logging
from typing import List, Optional, Sequence

from googleapiclient.errors import HttpError

from transport_billing.services.error_classifier import ErrorClassifier
from transport_billing.services.google_sheets_service import GoogleSheetsService
from transport_billing.services.retry_handler import (
    CircuitBreakerError,
    RetryExhaustedException,
)
from transport_billing.stores.record_store import Record, RecordStore, StoreError

logger = logging.getLogger(__name__)

# Failures of the Sheets API client that end up as StoreError
_API_ERRORS = (HttpError, RetryExhaustedException, CircuitBreakerError, KeyError)


class SheetsRecordStore(RecordStore):
    """
    Positional store over a sheet tab.

    Row ``i`` of the store is sheet row ``i + 1`` in A1 notation. Bounds
    are checked against a fresh listing before every update or delete, so a
    stale position never overwrites a neighbouring row past the end.

    Example:
        >>> service = GoogleSheetsService(config.get_google_service_account_info())
        >>> store = SheetsRecordStore(service, spreadsheet_id, "areas")
        >>> store.list()[0]
        ['Local Trip', 'Area 1']
    """

    def __init__(
        self,
        service: GoogleSheetsService,
        spreadsheet_id: str,
        sheet_title: str,
        classifier: Optional[ErrorClassifier] = None,
    ):
        super().__init__(sheet_title)
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.classifier = classifier or ErrorClassifier()

    def _fail(self, action: str, error: Exception) -> StoreError:
        cause = error
        if isinstance(error, RetryExhaustedException):
            cause = error.last_error
        if isinstance(cause, KeyError):
            description = str(cause.args[0]) if cause.args else str(cause)
        else:
            description = self.classifier.describe(cause or error)
        logger.error(f"Failed to {action} '{self.name}': {description}")
        return StoreError(f"Failed to {action} '{self.name}': {description}")

    def list(self) -> List[Record]:
        try:
            return self.service.read_values(self.spreadsheet_id, self.name)
        except _API_ERRORS as e:
            raise self._fail("read", e) from e

    def insert(self, record: Sequence[str]) -> str:
        try:
            self.service.append_rows(self.spreadsheet_id, self.name, [list(record)])
        except _API_ERRORS as e:
            raise self._fail("append to", e) from e
        return f"Row added to '{self.name}'"

    def update_at(self, index: int, record: Sequence[str]) -> str:
        """Overwrite a row; cells past the new record's end are blanked."""
        rows = self.list()
        self._check_index(index, len(rows))
        row = list(record)
        row += [""] * (len(rows[index]) - len(row))
        try:
            self.service.update_row(self.spreadsheet_id, self.name, index, row)
        except _API_ERRORS as e:
            raise self._fail("update", e) from e
        return f"Row {index} of '{self.name}' updated"

    def delete_at(self, index: int) -> str:
        self._check_index(index, len(self.list()))
        try:
            self.service.delete_row(self.spreadsheet_id, self.name, index)
        except _API_ERRORS as e:
            raise self._fail("delete from", e) from e
        return f"Row {index} of '{self.name}' deleted"

    def replace_all(self, rows: Sequence[Sequence[str]]) -> None:
        """Overwrite the tab with the given rows (database import)."""
        try:
            self.service.clear_sheet(self.spreadsheet_id, self.name)
            if rows:
                self.service.append_rows(
                    self.spreadsheet_id, self.name, [list(row) for row in rows]
                )
        except _API_ERRORS as e:
            raise self._fail("replace", e) from e
