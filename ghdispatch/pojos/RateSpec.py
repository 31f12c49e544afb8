"""
POJO for a quota window such as "5000/hour".
"""
import re
from dataclasses import dataclass

from ghdispatch.framework.ConfigurationError import ConfigurationError

# Duration constants (in milliseconds)
DURATION_MS = {
    "second": 1_000,
    "minute": 60 * 1_000,
    "hour": 60 * 60 * 1_000,
    "day": 24 * 60 * 60 * 1_000,
}

DURATION_ALIASES = {
    "sec": "second",
    "s": "second",
    "min": "minute",
    "m": "minute",
    "hr": "hour",
    "h": "hour",
    "d": "day",
}

_RATE_PATTERN = re.compile(r"^(\d+)\s*/\s*(\w+)$")


@dataclass(frozen=True)
class RateSpec:
    """
    A single quota window: at most `limit` calls per `intervalMs`.
    """
    limit: int
    intervalMs: int

    def __str__(self) -> str:
        for name, ms in DURATION_MS.items():
            if self.intervalMs == ms:
                return f"{self.limit}/{name}"
        return f"{self.limit}/{self.intervalMs}ms"

    @classmethod
    def fromString(cls, spec: str) -> 'RateSpec':
        """
        Parse "{limit}/{duration}" where duration is second/minute/hour/day.

        Examples:
            "30/minute"  -> RateSpec(limit=30, intervalMs=60000)
            "5000/hour"  -> RateSpec(limit=5000, intervalMs=3600000)

        Raises:
            ConfigurationError: If the string cannot be parsed
        """
        match = _RATE_PATTERN.match(spec.strip())
        if not match:
            raise ConfigurationError(
                f"Invalid rate spec: {spec!r}. Expected format: '30/minute', '5000/hour', etc."
            )

        limitStr, durationStr = match.groups()
        durationStr = durationStr.lower()
        durationStr = DURATION_ALIASES.get(durationStr, durationStr)
        if durationStr not in DURATION_MS:
            raise ConfigurationError(
                f"Unknown duration: {durationStr!r}. Supported: {list(DURATION_MS.keys())}"
            )

        limit = int(limitStr)
        if limit <= 0:
            raise ConfigurationError(f"Limit must be positive, got: {limit}")

        return cls(limit=limit, intervalMs=DURATION_MS[durationStr])
