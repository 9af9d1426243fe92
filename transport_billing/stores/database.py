"""The billing database: every table of the system behind one object.

A database is six positional tables. The memo, invoice and customer tables
are reached through repositories; the service-areas, rate calculation and
lookup tables through :class:`TabularTable`. The local backend keeps all
tables in memory and persists them to a JSON file on :meth:`Database.flush`;
the sheets backend keeps one spreadsheet tab per table.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from transport_billing.catalog import seed_data
from transport_billing.catalog.service_catalog import build_service_catalog
from transport_billing.config.settings import TransportBillingConfig
from transport_billing.models.customer import Customer, ServiceOffering
from transport_billing.models.memo import TripMemo
from transport_billing.records.tabular_table import TabularTable
from transport_billing.services.google_sheets_service import GoogleSheetsService
from transport_billing.services.retry_handler import RetryHandler
from transport_billing.stores.record_store import (
    InMemoryRecordStore,
    RecordStore,
    StoreError,
)
from transport_billing.stores.repositories import (
    CustomerRepository,
    InvoiceRepository,
    MemoRepository,
)
from transport_billing.stores.sheets_store import SheetsRecordStore

logger = logging.getLogger(__name__)

TABLE_NAMES = ("memos", "invoices", "customers", "areas", "calculations", "lookup")

INVALID_SNAPSHOT_MESSAGE = "Invalid database file format or missing data arrays."

Snapshot = Dict[str, List[List[str]]]


def _normalize_rows(rows: Any) -> Optional[List[List[str]]]:
    """Return rows as lists of text cells, or None if the shape is wrong."""
    if not isinstance(rows, list):
        return None
    normalized = []
    for row in rows:
        if not isinstance(row, list):
            return None
        normalized.append(["" if cell is None else str(cell) for cell in row])
    return normalized


def validate_snapshot(data: Any) -> Snapshot:
    """
    Check an exported database before it is imported.

    Args:
        data: Parsed JSON of an export file

    Returns:
        The snapshot with every cell as text

    Raises:
        StoreError: If a table is missing or is not a list of rows
    """
    if not isinstance(data, Mapping):
        raise StoreError(INVALID_SNAPSHOT_MESSAGE)

    snapshot: Snapshot = {}
    for name in TABLE_NAMES:
        rows = _normalize_rows(data.get(name))
        if rows is None:
            logger.warning(f"Snapshot table '{name}' is missing or malformed")
            raise StoreError(INVALID_SNAPSHOT_MESSAGE)
        snapshot[name] = rows
    return snapshot


class Database:
    """
    All tables of the billing system.

    Attributes:
        memos: Trip memo repository
        invoices: Invoice repository
        customers: Customer repository
        areas: Service areas, headerless (locality, category)
        calculations: Rate calculation table, header at position 0
        lookup: Free-form lookup table, header at position 0
    """

    def __init__(
        self,
        stores: Mapping[str, RecordStore],
        path: Optional[Path] = None,
        memo_prefix: str = "SVS",
        invoice_prefix: str = "INV",
        sequence_width: int = 3,
    ):
        """
        Initialize the database.

        Args:
            stores: One record store per name in TABLE_NAMES
            path: JSON file the local backend persists to; None for sheets
            memo_prefix: Prefix of issued memo numbers
            invoice_prefix: Prefix of issued invoice numbers
            sequence_width: Zero-padded width of issued numbers
        """
        missing = [name for name in TABLE_NAMES if name not in stores]
        if missing:
            raise ValueError(f"Missing stores for tables: {missing}")

        self.stores = dict(stores)
        self.path = path
        self.memos = MemoRepository(stores["memos"], memo_prefix, sequence_width)
        self.invoices = InvoiceRepository(
            stores["invoices"], invoice_prefix, sequence_width
        )
        self.customers = CustomerRepository(stores["customers"])
        self.areas = TabularTable(stores["areas"], has_header=False)
        self.calculations = TabularTable(stores["calculations"], has_header=True)
        self.lookup = TabularTable(stores["lookup"], has_header=True)

    def table(self, name: str) -> TabularTable:
        """
        Return one of the flat tables by name.

        Raises:
            KeyError: If name is not areas, calculations or lookup
        """
        tables = {
            "areas": self.areas,
            "calculations": self.calculations,
            "lookup": self.lookup,
        }
        if name not in tables:
            raise KeyError(f"Unknown table '{name}'. Choose from: {sorted(tables)}")
        return tables[name]

    def service_catalog(self) -> List[ServiceOffering]:
        return build_service_catalog(
            self.stores["areas"].list(), self.stores["calculations"].list()
        )

    def export_snapshot(self) -> Snapshot:
        """Return the raw rows of every table, headers included."""
        return {name: self.stores[name].list() for name in TABLE_NAMES}

    def import_snapshot(self, data: Any) -> str:
        """
        Replace every table with the content of an export.

        The whole snapshot is validated before any table is touched.

        Raises:
            StoreError: If the snapshot is malformed
        """
        snapshot = validate_snapshot(data)
        for name in TABLE_NAMES:
            self.stores[name].replace_all(snapshot[name])
            logger.info(f"Imported {len(snapshot[name])} rows into '{name}'")
        return "Database imported successfully."

    def flush(self) -> None:
        """
        Persist the local backend to its JSON file; no-op for sheets.

        The file is written to a temporary file and renamed over the old
        one, so an interrupted write leaves the previous file intact.

        Raises:
            StoreError: If the file cannot be written
        """
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(self.export_snapshot(), f, indent=2)
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            os.unlink(temp_path)
            raise StoreError(f"Cannot write database file {self.path}: {e}") from e

        logger.debug(f"Database written to {self.path}")


def seed(database: Database) -> None:
    """Fill an empty database with the sample reference data."""
    database.stores["areas"].replace_all(seed_data.SERVICE_AREAS)
    database.stores["calculations"].replace_all(seed_data.calculation_rows())
    database.stores["lookup"].replace_all(seed_data.LOOKUP_ROWS)
    for name, address1, address2 in seed_data.CUSTOMERS:
        database.customers.add(
            Customer(name=name, address1=address1, address2=address2)
        )
    database.memos.save(TripMemo(**seed_data.sample_memo_fields()))
    logger.info("Seeded database with sample data")


def open_local_database(path: Path, **options: Any) -> Database:
    """
    Open the JSON-file backed database, seeding it when the file is absent.

    Raises:
        StoreError: If the file exists but cannot be read as a snapshot
    """
    stores = {name: InMemoryRecordStore(name) for name in TABLE_NAMES}
    database = Database(stores, path=path, **options)

    if not path.exists():
        logger.info(f"No database at {path}, starting from sample data")
        seed(database)
        return database

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Cannot read database file {path}: {e}") from e

    database.import_snapshot(data)
    return database


def open_database(config: TransportBillingConfig) -> Database:
    """Open the database selected by the configured store backend."""
    options = {
        "memo_prefix": config.memo_number_prefix,
        "invoice_prefix": config.invoice_number_prefix,
        "sequence_width": config.sequence_width,
    }

    if config.store_backend == "local":
        return open_local_database(Path(config.database_file), **options)

    service = GoogleSheetsService(
        credentials=config.get_google_service_account_info(),
        retry_handler=RetryHandler(
            max_retries=config.max_retries, base_delay=config.retry_delay
        ),
        scopes=config.google_scopes,
    )
    stores = {
        name: SheetsRecordStore(service, config.spreadsheet_id, name)
        for name in TABLE_NAMES
    }
    logger.info(f"Opened sheets database {config.spreadsheet_id}")
    return Database(stores, **options)
