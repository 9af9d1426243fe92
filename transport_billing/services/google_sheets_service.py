"""
Google Sheets service with service-account/ADC authentication and retry handling.
"""

import logging
from typing import Any, Dict, List, Optional

import google.auth
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from transport_billing.services.retry_handler import RetryHandler

logger = logging.getLogger(__name__)


def _quote_title(sheet_title: str) -> str:
    """Quote a sheet title for A1 notation."""
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'"


class GoogleSheetsService:
    """
    Row-level access to a Google spreadsheet.

    Each billing table lives in its own sheet (tab). Rows are addressed by
    0-based position within the sheet, matching the record stores built on
    top of this service.
    """

    def __init__(
        self,
        credentials: Optional[Dict[str, Any]] = None,
        retry_handler: Optional[RetryHandler] = None,
        scopes: Optional[List[str]] = None,
        service: Any = None,
    ):
        """
        Initialize Google Sheets service.

        Args:
            credentials: Service account credentials dict from
                        config.get_google_service_account_info().
                        If None, falls back to ADC (Application Default Credentials)
            retry_handler: Custom retry handler instance
            scopes: Custom OAuth scopes for authentication
            service: Prebuilt API client (tests pass a mock here)
        """
        self.credentials_info = credentials
        self.retry_handler = retry_handler or RetryHandler()
        self.scopes = scopes or ["https://www.googleapis.com/auth/spreadsheets"]
        self._sheet_ids: Dict[str, Dict[str, int]] = {}

        self._service = service if service is not None else self._create_service()

    def _create_service(self):
        """Create the Sheets API client from service account info or ADC."""
        try:
            if self.credentials_info:
                credentials = service_account.Credentials.from_service_account_info(
                    self.credentials_info, scopes=self.scopes
                )
                project = self.credentials_info.get("project_id", "unknown")
                logger.info(
                    f"Google Sheets service initialized with service account "
                    f"for project: {project}"
                )
            else:
                credentials, project = google.auth.default(scopes=self.scopes)
                logger.info(
                    f"Google Sheets service initialized with ADC for project: {project}"
                )

            return build("sheets", "v4", credentials=credentials)

        except Exception as e:
            logger.error(f"Failed to initialize Google Sheets service: {e}")
            raise

    def read_values(self, spreadsheet_id: str, sheet_title: str) -> List[List[str]]:
        """
        Read every row of a sheet as text cells.

        Raises:
            HttpError: If API request fails
        """

        def _read_operation():
            return (
                self._service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=spreadsheet_id,
                    range=_quote_title(sheet_title),
                    valueRenderOption="FORMATTED_VALUE",
                )
                .execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_read_operation)
        except HttpError as e:
            logger.error(f"Failed to read sheet {spreadsheet_id}:{sheet_title}: {e}")
            raise

        values = result.get("values", [])
        logger.debug(f"Read {len(values)} rows from {sheet_title}")
        return [["" if cell is None else str(cell) for cell in row] for row in values]

    def append_rows(
        self,
        spreadsheet_id: str,
        sheet_title: str,
        rows: List[List[str]],
        value_input_option: str = "RAW",
    ) -> Dict[str, Any]:
        """Append rows after the last row of a sheet."""

        def _append_operation():
            return (
                self._service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=_quote_title(sheet_title),
                    valueInputOption=value_input_option,
                    insertDataOption="INSERT_ROWS",
                    body={"values": rows},
                )
                .execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_append_operation)
        except HttpError as e:
            logger.error(f"Failed to append to {spreadsheet_id}:{sheet_title}: {e}")
            raise

        logger.info(f"Appended {len(rows)} rows to {sheet_title}")
        return result

    def update_row(
        self,
        spreadsheet_id: str,
        sheet_title: str,
        index: int,
        row: List[str],
        value_input_option: str = "RAW",
    ) -> Dict[str, Any]:
        """Overwrite the row at 0-based position ``index``."""
        range_name = f"{_quote_title(sheet_title)}!A{index + 1}"

        def _update_operation():
            return (
                self._service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=spreadsheet_id,
                    range=range_name,
                    valueInputOption=value_input_option,
                    body={"values": [row]},
                )
                .execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_update_operation)
        except HttpError as e:
            logger.error(f"Failed to update {spreadsheet_id}:{range_name}: {e}")
            raise

        logger.debug(
            f"Updated row {index} of {sheet_title}: "
            f"{result.get('updatedCells', 0)} cells"
        )
        return result

    def delete_row(
        self, spreadsheet_id: str, sheet_title: str, index: int
    ) -> Dict[str, Any]:
        """Remove the row at 0-based position ``index``, shifting later rows up."""
        sheet_id = self.get_sheet_id(spreadsheet_id, sheet_title)

        def _delete_operation():
            requests = [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet_id,
                            "dimension": "ROWS",
                            "startIndex": index,
                            "endIndex": index + 1,
                        }
                    }
                }
            ]
            return (
                self._service.spreadsheets()
                .batchUpdate(spreadsheetId=spreadsheet_id, body={"requests": requests})
                .execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_delete_operation)
        except HttpError as e:
            logger.error(
                f"Failed to delete row {index} of {spreadsheet_id}:{sheet_title}: {e}"
            )
            raise

        logger.info(f"Deleted row {index} of {sheet_title}")
        return result

    def clear_sheet(self, spreadsheet_id: str, sheet_title: str) -> Dict[str, Any]:
        """Clear every value of a sheet, keeping the tab itself."""

        def _clear_operation():
            return (
                self._service.spreadsheets()
                .values()
                .clear(
                    spreadsheetId=spreadsheet_id,
                    range=_quote_title(sheet_title),
                    body={},
                )
                .execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_clear_operation)
        except HttpError as e:
            logger.error(f"Failed to clear {spreadsheet_id}:{sheet_title}: {e}")
            raise

        logger.info(f"Cleared sheet {sheet_title}")
        return result

    def get_sheet_id(self, spreadsheet_id: str, sheet_title: str) -> int:
        """
        Resolve the numeric sheetId of a tab, cached per spreadsheet.

        Raises:
            KeyError: If the spreadsheet has no sheet with that title
        """
        if spreadsheet_id not in self._sheet_ids:
            metadata = self.get_sheet_metadata(spreadsheet_id)
            self._sheet_ids[spreadsheet_id] = {
                sheet["properties"]["title"]: sheet["properties"]["sheetId"]
                for sheet in metadata.get("sheets", [])
            }

        try:
            return self._sheet_ids[spreadsheet_id][sheet_title]
        except KeyError:
            raise KeyError(
                f"Sheet '{sheet_title}' not found in spreadsheet {spreadsheet_id}"
            ) from None

    def get_sheet_metadata(self, spreadsheet_id: str) -> Dict[str, Any]:
        """
        Get metadata about a spreadsheet.

        Raises:
            HttpError: If API request fails
        """

        def _metadata_operation():
            return (
                self._service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()
            )

        try:
            result = self.retry_handler.execute_with_retry(_metadata_operation)
        except HttpError as e:
            logger.error(f"Failed to get metadata for {spreadsheet_id}: {e}")
            raise

        logger.debug(f"Retrieved metadata for spreadsheet {spreadsheet_id}")
        return result
