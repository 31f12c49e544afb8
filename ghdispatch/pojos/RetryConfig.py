"""
POJO for retry configuration.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.RateLimitConfig import RateLimitConfig


@dataclass(frozen=True)
class RetryConfig:
    """
    Retry settings for wrapped operations.

    Attributes:
        retries: Maximum number of additional attempts after the first one
        factor: Multiplicative backoff growth per attempt
        minTimeout: Backoff delay before the first retry, in seconds
        maxTimeout: Cap on a single backoff delay, in seconds (None = unbounded)
        nonRetryableStatuses: HTTP statuses that stop retrying immediately
    """
    retries: int = RateLimitConfig.MAX_RETRY_ATTEMPTS
    factor: float = RateLimitConfig.RETRY_BACKOFF_FACTOR
    minTimeout: float = RateLimitConfig.RETRY_MIN_WAIT_SECONDS
    maxTimeout: Optional[float] = RateLimitConfig.RETRY_MAX_WAIT_SECONDS
    nonRetryableStatuses: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.retries < 0:
            raise ConfigurationError(f"retries must be >= 0, got: {self.retries}")
        if self.factor <= 0:
            raise ConfigurationError(f"factor must be positive, got: {self.factor}")
        if self.minTimeout < 0:
            raise ConfigurationError(f"minTimeout must be >= 0, got: {self.minTimeout}")
        if self.maxTimeout is not None and self.maxTimeout < self.minTimeout:
            raise ConfigurationError(
                f"maxTimeout ({self.maxTimeout}) must be >= minTimeout ({self.minTimeout})"
            )
        # Accept any iterable of statuses
        object.__setattr__(self, 'nonRetryableStatuses', frozenset(self.nonRetryableStatuses))

    @classmethod
    def fromValue(cls, value: Any) -> 'RetryConfig':
        """Build from None, a RetryConfig, or a mapping of options."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls.fromDict(value)
        raise ConfigurationError(f"Unsupported retry configuration: {value!r}")

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> 'RetryConfig':
        unknown = set(data) - {'retries', 'factor', 'minTimeout', 'maxTimeout', 'nonRetryableStatuses'}
        if unknown:
            raise ConfigurationError(f"Unknown retry options: {sorted(unknown)}")
        return cls(**data)
