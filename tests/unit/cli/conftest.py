"""
Fixtures shared by the CLI tests.
"""

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_env(mock_env, tmp_path, monkeypatch):
    """Local backend in tmp_path with logging kept out of command output."""
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    return tmp_path / "billing.json"
