"""
Configuration module for the transport billing system.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import TransportBillingConfig, get_config, load_config, reload_config

__all__ = [
    "TransportBillingConfig",
    "get_config",
    "load_config",
    "reload_config",
    "LoggingConfig",
    "configure_logging",
    "reset_logging",
]
