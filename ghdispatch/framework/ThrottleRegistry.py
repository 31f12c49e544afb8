"""
Registry of pacing gates: one per rate limit group plus one global gate.
"""
import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from pyrate_limiter import Limiter, Rate
from pyrate_limiter.buckets import InMemoryBucket

from ghdispatch.enums.RateLimitGroup import RateLimitGroup
from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.PacingGate import PacingGate
from ghdispatch.framework.RateLimitConfig import RateLimitConfig
from ghdispatch.framework.RateLimitMetrics import RateLimitMetrics
from ghdispatch.pojos.RateSpec import RateSpec

logger = logging.getLogger(__name__)

GLOBAL_GATE_NAME = "_global"


class ThrottleRegistry:
    """
    Owns the pacing state for one client configuration.

    Group gates are created lazily on first use and live as long as the
    registry. acquire() reserves one slot that both the group gate and the
    global gate allow, waits for it, then passes the group's quota windows
    if any are configured.
    """

    _shared: Optional['ThrottleRegistry'] = None
    _sharedLock = threading.Lock()

    def __init__(
        self,
        rateLimits: Optional[Dict[str, float]] = None,
        globalRateLimit: float = RateLimitConfig.GLOBAL_RATE_LIMIT_SECONDS,
        quotas: Optional[Dict[str, List[RateSpec]]] = None,
        defaultGroup=RateLimitGroup.CORE,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the registry.

        Args:
            rateLimits: Group id -> minimum interval in seconds
            globalRateLimit: Minimum interval across all groups (0 disables it)
            quotas: Group id -> quota windows enforced with pyrate-limiter
            defaultGroup: Group whose interval applies to unconfigured groups
            clock: Monotonic clock used by the gates
            sleep: Sleep function used by the gates
        """
        if rateLimits is None:
            rateLimits = RateLimitConfig.defaultRateLimits()
        if globalRateLimit is None:
            globalRateLimit = 0.0
        if globalRateLimit < 0:
            raise ConfigurationError(f"globalRateLimit must be >= 0, got: {globalRateLimit}")

        self.rateLimits = {RateLimitGroup.toGroupId(group): float(interval) for group, interval in rateLimits.items()}
        self.defaultGroup = RateLimitGroup.toGroupId(defaultGroup)
        self.quotas = {RateLimitGroup.toGroupId(group): list(specs) for group, specs in (quotas or {}).items()}
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._gates: Dict[str, PacingGate] = {}
        self._quotaLimiters: Dict[str, Limiter] = {}
        self.globalGate = PacingGate(globalRateLimit, name=GLOBAL_GATE_NAME, clock=clock, sleep=sleep)

        logger.debug(
            "THROTTLE :: Registry initialized | Groups: %s | Global: %.3fs | Quotas: %s",
            self.rateLimits,
            self.globalGate.interval,
            {group: [str(spec) for spec in specs] for group, specs in self.quotas.items()}
        )

    def intervalFor(self, groupId: str) -> float:
        """Configured interval for a group, falling back to the default group."""
        if groupId in self.rateLimits:
            return self.rateLimits[groupId]
        return self.rateLimits.get(self.defaultGroup, 0.0)

    def getGate(self, groupId) -> PacingGate:
        """
        Get or create the pacing gate for a group.

        Args:
            groupId: Group id or RateLimitGroup member

        Returns:
            The group's PacingGate
        """
        groupId = RateLimitGroup.toGroupId(groupId)
        gate = self._gates.get(groupId)
        if gate is not None:
            return gate

        with self._lock:
            # Double-check after lock acquired
            gate = self._gates.get(groupId)
            if gate is None:
                gate = PacingGate(self.intervalFor(groupId), name=groupId, clock=self._clock, sleep=self._sleep)
                self._gates[groupId] = gate
                if groupId in self.quotas:
                    self._quotaLimiters[groupId] = self._createQuotaLimiter(groupId)

                logger.info(
                    "THROTTLE :: Created %s gate | Interval: %.3fs",
                    groupId,
                    gate.interval
                )
        return gate

    def _createQuotaLimiter(self, groupId: str) -> Limiter:
        rates = [Rate(spec.limit, spec.intervalMs) for spec in self.quotas[groupId]]
        bucket = InMemoryBucket(rates)
        limiter = Limiter(bucket, raise_when_fail=False)

        logger.info(
            "THROTTLE :: Created %s quota limiter | Windows: %s",
            groupId,
            ", ".join(str(spec) for spec in self.quotas[groupId])
        )
        return limiter

    def acquire(self, groupId) -> float:
        """
        Block until the call may proceed for this group.

        Never fails; only delays.

        Returns:
            Total seconds spent waiting
        """
        groupId = RateLimitGroup.toGroupId(groupId)
        gate = self.getGate(groupId)

        # Group lock before global lock, always
        waited = PacingGate.reserveTogether(gate, self.globalGate)
        if waited > 0:
            self._sleep(waited)

        limiter = self._quotaLimiters.get(groupId)
        if limiter is not None:
            while not limiter.try_acquire(groupId, weight=1):
                # Quota window full - wait a short time before retrying
                RateLimitMetrics.recordQuotaHit(groupId)
                self._sleep(RateLimitConfig.QUOTA_POLL_SECONDS)
                waited += RateLimitConfig.QUOTA_POLL_SECONDS

        RateLimitMetrics.recordThrottleWait(groupId, waited)
        if waited > 0:
            logger.debug("THROTTLE :: Waited %.3fs | Group: %s", waited, groupId)

        return waited

    def getStats(self) -> Dict[str, object]:
        """Snapshot of created gates and grant counts."""
        return {
            "groups": {
                groupId: {"interval": gate.interval, "grants": gate.grants}
                for groupId, gate in self._gates.items()
            },
            "global": {"interval": self.globalGate.interval, "grants": self.globalGate.grants},
            "quotas": sorted(self._quotaLimiters),
        }

    # ========================================================================
    # Process-wide registry (opt-in)
    # ========================================================================

    @classmethod
    def shared(cls, **kwargs) -> 'ThrottleRegistry':
        """
        Get or create the process-wide registry.

        The first call's arguments configure it; later calls return the same
        instance and ignore their arguments.
        """
        if cls._shared is not None:
            return cls._shared

        with cls._sharedLock:
            if cls._shared is None:
                cls._shared = cls(**kwargs)
                logger.info("THROTTLE :: Created process-wide registry")
        return cls._shared

    @classmethod
    def resetShared(cls) -> None:
        """Drop the process-wide registry (primarily for testing)."""
        with cls._sharedLock:
            cls._shared = None
