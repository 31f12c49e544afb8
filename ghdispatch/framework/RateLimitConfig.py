"""
Centralized rate limit configuration with environment variable support.
"""
import os


def _optionalFloat(name: str):
    value = os.getenv(name)
    return float(value) if value else None


class RateLimitConfig:
    """Centralized rate limit configuration with environment variable support."""

    # Minimum interval between two calls of the same group, in seconds.
    # Derived from the documented limits: core 5000 req/hour, search 30 req/minute
    CORE_RATE_LIMIT_SECONDS = float(os.getenv('CORE_RATE_LIMIT_SECONDS', str(3600 / 5000)))
    SEARCH_RATE_LIMIT_SECONDS = float(os.getenv('SEARCH_RATE_LIMIT_SECONDS', str(60 / 30)))

    # Minimum interval between any two calls, all groups combined
    GLOBAL_RATE_LIMIT_SECONDS = float(os.getenv('GLOBAL_RATE_LIMIT_SECONDS', '1'))

    # Retry configuration
    MAX_RETRY_ATTEMPTS = int(os.getenv('MAX_RETRY_ATTEMPTS', '3'))
    RETRY_BACKOFF_FACTOR = float(os.getenv('RETRY_BACKOFF_FACTOR', '2'))
    RETRY_MIN_WAIT_SECONDS = float(os.getenv('RETRY_MIN_WAIT_SECONDS', '1'))
    RETRY_MAX_WAIT_SECONDS = _optionalFloat('RETRY_MAX_WAIT_SECONDS')

    # Quota window polling
    QUOTA_POLL_SECONDS = float(os.getenv('QUOTA_POLL_SECONDS', '0.1'))

    # Connection pooling configuration
    POOL_CONNECTIONS = int(os.getenv('HTTP_POOL_CONNECTIONS', '10'))
    POOL_MAXSIZE = int(os.getenv('HTTP_POOL_MAXSIZE', '10'))
    POOL_BLOCK = os.getenv('HTTP_POOL_BLOCK', 'False').lower() == 'true'

    # Timeout configuration
    DEFAULT_TIMEOUT_SECONDS = int(os.getenv('DEFAULT_TIMEOUT_SECONDS', '30'))

    @classmethod
    def defaultRateLimits(cls) -> dict:
        """Per-group intervals keyed by group id."""
        return {
            'core': cls.CORE_RATE_LIMIT_SECONDS,
            'search': cls.SEARCH_RATE_LIMIT_SECONDS,
        }
