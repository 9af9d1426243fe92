"""
Retry handler with exponential backoff, jitter and a simple circuit breaker.
"""

import logging
import random
import threading
import time
from typing import Any, Callable, Optional

from transport_billing.services.error_classifier import ErrorClassifier

logger = logging.getLogger(__name__)


class RetryExhaustedException(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.last_error = last_error


class CircuitBreakerError(Exception):
    """Raised when the circuit breaker is open."""

    pass


class RetryHandler:
    """
    Runs Google API calls with retries.

    Transient failures (as judged by :class:`ErrorClassifier`) are retried
    with exponential backoff. After ``circuit_breaker_threshold`` exhausted
    calls in a row the breaker opens and calls fail fast until
    ``circuit_breaker_timeout`` has passed.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        jitter_factor: float = 0.1,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_timeout: float = 60.0,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize retry handler.

        Args:
            max_retries: Maximum number of retry attempts
            base_delay: Base delay for exponential backoff (seconds)
            max_delay: Maximum delay between retries (seconds)
            jitter_factor: Factor for random jitter (0.0 to 1.0)
            circuit_breaker_threshold: Exhausted calls before opening circuit
            circuit_breaker_timeout: Time to wait before trying again (seconds)
            retry_condition: Custom function deciding whether to retry
            sleep: Sleep function, replaced in tests
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter_factor = jitter_factor
        self.circuit_breaker_threshold = circuit_breaker_threshold
        self.circuit_breaker_timeout = circuit_breaker_timeout
        self.retry_condition = retry_condition or ErrorClassifier().is_retryable
        self._sleep = sleep

        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._lock = threading.Lock()

    def _calculate_delay(self, attempt: int) -> float:
        """Delay for the given 0-based attempt, capped and jittered."""
        delay = min(self.base_delay * (2**attempt), self.max_delay)
        jitter = random.uniform(-self.jitter_factor, self.jitter_factor) * delay
        return max(0.0, delay + jitter)

    @property
    def circuit_open(self) -> bool:
        with self._lock:
            if self._opened_at is None:
                return False
            if time.time() - self._opened_at >= self.circuit_breaker_timeout:
                logger.info("Circuit breaker transitioning to half-open state")
                return False
            return True

    def _record_success(self):
        with self._lock:
            self._failure_count = 0
            if self._opened_at is not None:
                logger.info("Circuit breaker closed after successful execution")
                self._opened_at = None

    def _record_failure(self):
        with self._lock:
            self._failure_count += 1
            if (
                self._opened_at is None
                and self._failure_count >= self.circuit_breaker_threshold
            ):
                logger.warning(
                    f"Circuit breaker opened after {self._failure_count} failures"
                )
                self._opened_at = time.time()

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with retry logic.

        Raises:
            CircuitBreakerError: If circuit breaker is open
            RetryExhaustedException: If all retries are exhausted
            Exception: Original exception if not retryable
        """
        if self.circuit_open:
            raise CircuitBreakerError("Circuit breaker is open")

        func_name = getattr(func, "__name__", repr(func))

        for attempt in range(self.max_retries + 1):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(f"Not retrying {func_name}: {type(e).__name__}")
                    raise

                if attempt >= self.max_retries:
                    logger.warning(
                        f"Max retries ({self.max_retries}) exceeded for {func_name}"
                    )
                    self._record_failure()
                    raise RetryExhaustedException(
                        f"Max retries ({self.max_retries}) exceeded. "
                        f"Last error: {type(e).__name__}: {e}",
                        last_error=e,
                    ) from e

                delay = self._calculate_delay(attempt)
                logger.debug(
                    f"Retrying {func_name} in {delay:.2f}s "
                    f"(attempt {attempt + 1}/{self.max_retries + 1}). "
                    f"Error: {type(e).__name__}: {e}"
                )
                self._sleep(delay)
                continue

            if attempt > 0:
                logger.info(f"Function {func_name} succeeded after {attempt} retries")
            self._record_success()
            return result

    def reset_circuit_breaker(self):
        """Manually reset the circuit breaker."""
        with self._lock:
            self._failure_count = 0
            self._opened_at = None

        logger.info("Circuit breaker manually reset")
