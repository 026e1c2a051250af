"""
Retry helpers with exponential backoff for HTTP calls.
"""
import time
import logging
from typing import Any, Callable, Optional, Tuple, Type

import requests

TRANSIENT_REQUEST_ERRORS: Tuple[Type[Exception], ...] = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        exponential_base: float = 2.0,
        max_delay: float = 60.0,
        retry_on: Tuple[Type[Exception], ...] = TRANSIENT_REQUEST_ERRORS,
        logger: Optional[logging.Logger] = None
    ):
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.exponential_base = exponential_base
        self.max_delay = max_delay
        self.retry_on = retry_on
        self.logger = logger or logging.getLogger(__name__)

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given zero-based attempt."""
        return min(self.base_delay * (self.exponential_base ** attempt), self.max_delay)


def call_with_backoff(config: RetryConfig, func: Callable, *args, **kwargs) -> Any:
    """
    Call func, retrying on the configured exceptions with exponential backoff.

    Exceptions outside ``config.retry_on`` propagate immediately; the last
    retryable exception is re-raised once attempts run out.
    """
    name = getattr(func, '__name__', repr(func))

    for attempt in range(config.max_attempts):
        try:
            return func(*args, **kwargs)
        except config.retry_on as e:
            if attempt == config.max_attempts - 1:
                config.logger.error(f"{name} failed after {config.max_attempts} attempts: {e}")
                raise

            delay = config.delay_for(attempt)
            config.logger.warning(
                f"{name} failed (attempt {attempt + 1}/{config.max_attempts}): {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            time.sleep(delay)
