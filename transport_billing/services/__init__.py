"""
Google API services for the transport billing system.

Provides the Sheets client used by the sheets record store, with
service account or ADC authentication, exponential backoff and a
circuit breaker around every call.
"""

from .error_classifier import ErrorClassifier, ErrorType
from .google_sheets_service import GoogleSheetsService
from .retry_handler import CircuitBreakerError, RetryExhaustedException, RetryHandler

__all__ = [
    "ErrorClassifier",
    "ErrorType",
    "RetryHandler",
    "RetryExhaustedException",
    "CircuitBreakerError",
    "GoogleSheetsService",
]
