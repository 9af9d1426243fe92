"""
Global pytest configuration and fixtures.
"""
from typing import Dict

import pytest

from transport_billing.catalog import seed_data
from transport_billing.config import (
    TransportBillingConfig,
    reload_config,
    reset_logging,
)
from transport_billing.models.memo import TripMemo
from transport_billing.stores.database import TABLE_NAMES, Database, seed
from transport_billing.stores.record_store import InMemoryRecordStore


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "STORE_BACKEND": "local",
        "MEMO_NUMBER_PREFIX": "SVS",
        "INVOICE_NUMBER_PREFIX": "INV",
        "SEQUENCE_WIDTH": "3",
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def mock_env(test_env_vars, tmp_path, monkeypatch):
    """Mock environment variables; the local database lives in tmp_path."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("DATABASE_FILE", str(tmp_path / "billing.json"))
    for key in ("SPREADSHEET_ID", "GOOGLE_PRIVATE_KEY", "GOOGLE_CLIENT_EMAIL"):
        monkeypatch.delenv(key, raising=False)

    # Clear the global config to force reload with test values
    import transport_billing.config.settings
    transport_billing.config.settings._config = None

    yield test_env_vars

    transport_billing.config.settings._config = None
    reset_logging()


@pytest.fixture
def test_config(mock_env) -> TransportBillingConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def empty_database() -> Database:
    """Database with six empty in-memory tables and no backing file."""
    stores = {name: InMemoryRecordStore(name) for name in TABLE_NAMES}
    return Database(stores)


@pytest.fixture
def database(empty_database) -> Database:
    """In-memory database filled with the sample data."""
    seed(empty_database)
    return empty_database


@pytest.fixture
def sample_memo() -> TripMemo:
    """The seeded sample memo SVS-001 (John Doe, 4 hours, 50 km)."""
    return TripMemo(**seed_data.sample_memo_fields())


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as requiring Google Sheets access"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        path = str(item.fspath)
        if "tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.api)
