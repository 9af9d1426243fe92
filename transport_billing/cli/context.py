"""Shared state of a CLI invocation."""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from transport_billing.cli.error_handlers import ConfigurationError
from transport_billing.config.settings import TransportBillingConfig, get_config
from transport_billing.stores.database import Database, open_database
from transport_billing.workflows.invoice_workflow import InvoiceWorkflow
from transport_billing.workflows.memo_workflow import MemoWorkflow

logger = logging.getLogger(__name__)


class AppContext:
    """
    Lazily opened configuration and database for one command run.

    The database is only opened when a command first needs it, and is
    flushed when the click context closes.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._config: Optional[TransportBillingConfig] = None
        self._database: Optional[Database] = None

    @property
    def config(self) -> TransportBillingConfig:
        if self._config is None:
            try:
                self._config = get_config()
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid settings: {e.error_count()} problem(s)\n{e}",
                    recovery_hint="Check the environment variables and .env file",
                ) from e
        return self._config

    @property
    def database(self) -> Database:
        if self._database is None:
            self._database = open_database(self.config)
        return self._database

    def memo_workflow(self) -> MemoWorkflow:
        return MemoWorkflow(self.database)

    def invoice_workflow(self) -> InvoiceWorkflow:
        return InvoiceWorkflow(self.database)

    def close(self) -> None:
        """Persist the database if this run opened it."""
        if self._database is not None:
            self._database.flush()


pass_app = click.make_pass_decorator(AppContext)
