"""
Error classification for Google API failures.

Separates transient failures (rate limiting, server errors, network drops)
that are worth retrying from fatal ones that should surface immediately.
"""

import socket
from enum import Enum

import requests.exceptions
from googleapiclient.errors import HttpError


class ErrorType(Enum):
    """Classification of error types."""

    RETRYABLE = "retryable"  # 429, 5xx, network errors
    FATAL = "fatal"  # 4xx except 429
    UNKNOWN = "unknown"


_NETWORK_ERRORS = (
    socket.timeout,
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


class ErrorClassifier:
    """Classifies exceptions raised while talking to Google Sheets."""

    def classify(self, exception: Exception) -> ErrorType:
        """
        Classify an exception into retryable, fatal, or unknown.

        Args:
            exception: The exception to classify

        Returns:
            ErrorType classification
        """
        if isinstance(exception, HttpError):
            status_code = exception.resp.status
            if status_code == 429 or 500 <= status_code < 600:
                return ErrorType.RETRYABLE
            if 400 <= status_code < 500:
                return ErrorType.FATAL

        if isinstance(exception, _NETWORK_ERRORS):
            return ErrorType.RETRYABLE

        return ErrorType.UNKNOWN

    def is_retryable(self, exception: Exception) -> bool:
        """Check if an exception should be retried."""
        return self.classify(exception) == ErrorType.RETRYABLE

    def describe(self, exception: Exception) -> str:
        """
        Get a human-readable error description for CLI and log output.

        Args:
            exception: The exception to describe

        Returns:
            Error description string
        """
        error_type = self.classify(exception)

        if isinstance(exception, HttpError):
            status_code = exception.resp.status
            if status_code == 429:
                return f"Rate limit error (HTTP 429) - {error_type.value}"
            if status_code == 403:
                return f"Permission denied (HTTP 403) - {error_type.value}"
            if status_code == 404:
                return f"Spreadsheet or sheet not found (HTTP 404) - {error_type.value}"
            if 500 <= status_code < 600:
                return f"Server error (HTTP {status_code}) - {error_type.value}"
            if 400 <= status_code < 500:
                return f"Client error (HTTP {status_code}) - {error_type.value}"

        if isinstance(exception, (socket.timeout, requests.exceptions.Timeout)):
            return f"Network timeout error - {error_type.value}"

        if isinstance(exception, requests.exceptions.ConnectionError):
            return f"Network connection error - {error_type.value}"

        return f"{type(exception).__name__}: {exception} - {error_type.value}"
