"""
Centralized metrics collection for throttled dispatch.
"""
from prometheus_client import Counter, Histogram, Gauge


class RateLimitMetrics:
    """Centralized metrics collection for throttled dispatch."""

    dispatchCallsTotal = Counter(
        'dispatch_calls_total',
        'Total number of wrapped operation calls',
        ['group', 'status']
    )

    throttleWaitSeconds = Histogram(
        'throttle_wait_seconds',
        'Time spent waiting for a throttle slot',
        ['group']
    )

    quotaHits = Counter(
        'quota_hits_total',
        'Number of times a quota window was full',
        ['group']
    )

    retryAttempts = Counter(
        'retry_attempts_total',
        'Total number of retry attempts',
        ['group']
    )

    activeDispatchCalls = Gauge(
        'active_dispatch_calls',
        'Number of operation calls currently in flight',
        ['group']
    )

    @classmethod
    def recordSuccess(cls, groupId: str):
        """Record a call that eventually succeeded."""
        cls.dispatchCallsTotal.labels(group=groupId, status='success').inc()

    @classmethod
    def recordExhausted(cls, groupId: str):
        """Record a call whose last error was surfaced."""
        cls.dispatchCallsTotal.labels(group=groupId, status='exhausted').inc()

    @classmethod
    def recordThrottleWait(cls, groupId: str, seconds: float):
        cls.throttleWaitSeconds.labels(group=groupId).observe(seconds)

    @classmethod
    def recordQuotaHit(cls, groupId: str):
        cls.quotaHits.labels(group=groupId).inc()

    @classmethod
    def recordRetry(cls, groupId: str):
        cls.retryAttempts.labels(group=groupId).inc()

    @classmethod
    def incrementActiveCalls(cls, groupId: str):
        cls.activeDispatchCalls.labels(group=groupId).inc()

    @classmethod
    def decrementActiveCalls(cls, groupId: str):
        cls.activeDispatchCalls.labels(group=groupId).dec()
