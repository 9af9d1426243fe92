"""
Integration test fixtures.

These tests run against a real spreadsheet and are skipped unless the
sheets backend is configured. The spreadsheet needs one tab per table
(memos, invoices, customers, areas, calculations, lookup); the tests only
add rows they remove again.
"""

import os
from typing import Iterator

import pytest

from transport_billing.config import TransportBillingConfig, reload_config
from transport_billing.services import GoogleSheetsService
from transport_billing.stores.database import Database, open_database


@pytest.fixture(scope="session")
def integration_config() -> Iterator[TransportBillingConfig]:
    """
    Get configuration for integration tests.

    Credentials come from GOOGLE_PRIVATE_KEY/GOOGLE_CLIENT_EMAIL or, when
    unset, application default credentials.
    """
    if not os.getenv("SPREADSHEET_ID"):
        pytest.skip("Integration tests require SPREADSHEET_ID")

    patcher = pytest.MonkeyPatch()
    patcher.setenv("STORE_BACKEND", "sheets")
    yield reload_config()
    patcher.undo()


@pytest.fixture(scope="session")
def sheets_database(integration_config: TransportBillingConfig) -> Database:
    """Database backed by the configured spreadsheet."""
    return open_database(integration_config)


@pytest.fixture(scope="session")
def real_sheets_service(sheets_database: Database) -> GoogleSheetsService:
    """The Sheets service shared by every store of the database."""
    return sheets_database.stores["areas"].service
