"""
Retry policy for reminder store operations.

Failures of a retryable exception type are retried with a delay that grows
linearly with the attempt number (base_delay, 2 * base_delay, ...).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Type
import logging
import time


@dataclass
class RetryPolicy:
    """Calls a function, retrying on selected exceptions."""

    max_retries: int = 3
    base_delay: float = 1.0
    retry_on: Tuple[Type[BaseException], ...] = (ConnectionError,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    logger: Optional[logging.Logger] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.logger or logging.getLogger(__name__)

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (1-based)."""
        return self.base_delay * attempt

    def call(self, func: Callable[..., Any], *args: Any, operation: str = "operation", **kwargs: Any) -> Any:
        """
        Run ``func`` until it succeeds or no retries are left.

        Args:
            func: Callable to invoke
            operation: Human readable name used in log messages

        Returns:
            Whatever ``func`` returns

        Raises:
            The last retryable exception once ``max_retries`` retries failed,
            or any non-retryable exception immediately.
        """
        attempt = 0
        while True:
            try:
                return func(*args, **kwargs)
            except self.retry_on as exc:
                if attempt >= self.max_retries:
                    self.logger.error("Giving up on %s after %d retries: %s", operation, attempt, exc)
                    raise
                attempt += 1
                delay = self.delay_for(attempt)
                self.logger.warning(
                    "%s failed (%s); retry %d/%d in %.1fs",
                    operation, exc, attempt, self.max_retries, delay,
                )
                self.sleep(delay)
