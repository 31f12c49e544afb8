"""
Retry policy for wrapped operations, built on tenacity.
"""
import logging
import time
from typing import Callable, Optional

from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    stop_after_attempt,
)

from ghdispatch.pojos.RetryConfig import RetryConfig

logger = logging.getLogger(__name__)


def errorStatus(error: BaseException) -> Optional[int]:
    """HTTP status carried by an error object, if any."""
    for attribute in ('status', 'code'):
        value = getattr(error, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


class RetryPolicy:
    """
    Decides whether a failed attempt is retried and how long to back off.

    Any exception is retried until `retries` additional attempts have been
    made, unless its HTTP status is listed in `nonRetryableStatuses` or the
    error sets `retryable = False`.
    Backoff grows geometrically: minTimeout * factor ** (attempt - 1).
    """

    def __init__(self, retryConfig: Optional[RetryConfig] = None, sleep: Callable[[float], None] = time.sleep):
        self.config = RetryConfig.fromValue(retryConfig)
        self._sleep = sleep

    @property
    def maxAttempts(self) -> int:
        return self.config.retries + 1

    def shouldRetry(self, attemptNumber: int, error: BaseException) -> bool:
        """
        Args:
            attemptNumber: 1-based number of the attempt that just failed
            error: The exception it raised

        Returns:
            True if another attempt should be made
        """
        if attemptNumber > self.config.retries:
            return False
        if getattr(error, 'retryable', True) is False:
            logger.info("RETRY_POLICY :: Not retrying | Error marked non-retryable: %r", error)
            return False
        status = errorStatus(error)
        if status is not None and status in self.config.nonRetryableStatuses:
            logger.info("RETRY_POLICY :: Not retrying | Status: %d | Error: %s", status, error)
            return False
        return True

    def delayFor(self, attemptNumber: int) -> float:
        """Backoff in seconds after the given failed attempt."""
        delay = self.config.minTimeout * self.config.factor ** (attemptNumber - 1)
        if self.config.maxTimeout is not None:
            delay = min(delay, self.config.maxTimeout)
        return delay

    def newRetrying(self) -> Retrying:
        """
        Build a tenacity controller for one invocation.

        The controller re-raises the last error unchanged once the policy
        stops retrying.
        """
        return Retrying(
            stop=stop_after_attempt(self.maxAttempts),
            wait=self._wait,
            retry=self._shouldRetryState,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True
        )

    def _wait(self, retryState: RetryCallState) -> float:
        return self.delayFor(retryState.attempt_number)

    def _shouldRetryState(self, retryState: RetryCallState) -> bool:
        outcome = retryState.outcome
        if outcome is None or not outcome.failed:
            return False
        return self.shouldRetry(retryState.attempt_number, outcome.exception())
