"""
Throttled, retrying wrapper around a single remote operation.
"""
import logging
from collections import deque
from functools import update_wrapper
from typing import Any, Callable, List

from ghdispatch.enums.AttemptOutcome import AttemptOutcome
from ghdispatch.framework.RateLimitMetrics import RateLimitMetrics
from ghdispatch.framework.RetryPolicy import RetryPolicy
from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry
from ghdispatch.pojos.RetryAttempt import RetryAttempt

logger = logging.getLogger(__name__)

ATTEMPT_LOG_SIZE = 100


class CallWrapper:
    """
    Binds one operation to its group's throttle and to the retry policy.

    Every attempt, the first one and each retry, acquires a slot from the
    same group through the shared ThrottleRegistry. Between attempts the
    policy's backoff is slept first, then the throttle is waited on, so
    both delays apply. The last error is re-raised unchanged.
    """

    def __init__(
        self,
        operation: Callable[..., Any],
        namespace: str,
        name: str,
        groupId: str,
        throttleRegistry: ThrottleRegistry,
        retryPolicy: RetryPolicy
    ):
        update_wrapper(self, operation, updated=())
        self.operation = operation
        self.namespace = namespace
        self.name = name
        self.groupId = groupId
        self.throttleRegistry = throttleRegistry
        self.retryPolicy = retryPolicy
        self.attemptLog = deque(maxlen=ATTEMPT_LOG_SIZE)

    def __repr__(self) -> str:
        return f"<CallWrapper {self.namespace}.{self.name} group={self.groupId}>"

    def __call__(self, *args, **kwargs) -> Any:
        """
        Invoke the operation with throttling and retries.

        Arguments are passed through unchanged.

        Returns:
            Whatever the operation returns

        Raises:
            Exception: The last attempt's error, once retries are exhausted
        """
        attempts: List[RetryAttempt] = []
        RateLimitMetrics.incrementActiveCalls(self.groupId)

        try:
            result = self.retryPolicy.newRetrying()(self._attempt, attempts, args, kwargs)

        except Exception as e:
            RateLimitMetrics.recordExhausted(self.groupId)
            logger.error(
                "CALL_WRAPPER :: Call failed | Operation: %s.%s | Group: %s | Attempts: %d | Error: %s",
                self.namespace,
                self.name,
                self.groupId,
                len(attempts),
                str(e)
            )
            raise

        else:
            RateLimitMetrics.recordSuccess(self.groupId)
            return result

        finally:
            RateLimitMetrics.decrementActiveCalls(self.groupId)
            self.attemptLog.extend(attempts)

    def _attempt(self, attempts: List[RetryAttempt], args: tuple, kwargs: dict) -> Any:
        """One throttled attempt; records its outcome in `attempts`."""
        attemptNumber = len(attempts) + 1
        backoffDelay = 0.0
        if attemptNumber > 1:
            backoffDelay = self.retryPolicy.delayFor(attemptNumber - 1)
            RateLimitMetrics.recordRetry(self.groupId)

        throttleWait = self.throttleRegistry.acquire(self.groupId)

        logger.debug(
            "CALL_WRAPPER :: Invoking %s.%s | Group: %s | Attempt: %d | Throttled: %.3fs",
            self.namespace,
            self.name,
            self.groupId,
            attemptNumber,
            throttleWait
        )

        try:
            result = self.operation(*args, **kwargs)
        except Exception as e:
            attempts.append(RetryAttempt(
                attemptNumber=attemptNumber,
                backoffDelay=backoffDelay,
                throttleWait=throttleWait,
                outcome=AttemptOutcome.FAILED,
                error=repr(e)
            ))
            raise

        attempts.append(RetryAttempt(
            attemptNumber=attemptNumber,
            backoffDelay=backoffDelay,
            throttleWait=throttleWait,
            outcome=AttemptOutcome.SUCCEEDED
        ))
        return result
