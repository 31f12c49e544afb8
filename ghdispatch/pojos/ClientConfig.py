"""
POJO for the configuration of a dispatching client.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Union

from ghdispatch.client.Constants import GITHUB_API_BASE_URL
from ghdispatch.enums.RateLimitGroup import RateLimitGroup
from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.RateLimitConfig import RateLimitConfig
from ghdispatch.pojos.ProxyConfig import ProxyConfig
from ghdispatch.pojos.RateSpec import RateSpec
from ghdispatch.pojos.RetryConfig import RetryConfig

# Alternate spellings accepted by fromDict
_KEY_ALIASES = {
    'githubToken': 'credential',
    'token': 'credential',
    'githubUrl': 'baseUrl',
    'githubApiPathPrefix': 'pathPrefix',
}


@dataclass
class ClientConfig:
    """
    Construction-time settings for getClient.

    Intervals (rateLimits, globalRateLimit) are minimum spacings in seconds.
    namespaceGroups is merged over the built-in namespace mapping; groupOverrides
    ("namespace.operation" keys) win over both.
    """
    credential: Optional[str] = None
    baseUrl: str = GITHUB_API_BASE_URL
    pathPrefix: str = ""
    proxy: Union[None, str, ProxyConfig] = None
    headers: Dict[str, str] = field(default_factory=dict)
    rateLimits: Dict[str, float] = field(default_factory=RateLimitConfig.defaultRateLimits)
    globalRateLimit: float = RateLimitConfig.GLOBAL_RATE_LIMIT_SECONDS
    retryConfig: RetryConfig = field(default_factory=RetryConfig)
    groupOverrides: Dict[str, str] = field(default_factory=dict)
    namespaceGroups: Dict[str, str] = field(default_factory=dict)
    quotas: Dict[str, List[RateSpec]] = field(default_factory=dict)
    sharedThrottle: bool = False
    timeout: float = RateLimitConfig.DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        self.proxy = self._normalizeProxy(self.proxy)
        self.retryConfig = RetryConfig.fromValue(self.retryConfig)
        self.rateLimits = self._normalizeIntervals(self.rateLimits)
        self.groupOverrides = {
            key: RateLimitGroup.toGroupId(group) for key, group in self.groupOverrides.items()
        }
        self.namespaceGroups = {
            namespace: RateLimitGroup.toGroupId(group) for namespace, group in self.namespaceGroups.items()
        }
        self.quotas = self._normalizeQuotas(self.quotas)

        if self.globalRateLimit is None:
            self.globalRateLimit = 0.0
        if self.globalRateLimit < 0:
            raise ConfigurationError(f"globalRateLimit must be >= 0, got: {self.globalRateLimit}")

    @staticmethod
    def _normalizeProxy(proxy):
        if proxy is None or proxy is False or proxy == "":
            return None
        if isinstance(proxy, (str, ProxyConfig)):
            return proxy
        if isinstance(proxy, dict):
            return ProxyConfig.fromDict(proxy)
        raise ConfigurationError(f"Unsupported proxy definition: {proxy!r}")

    @staticmethod
    def _normalizeIntervals(rateLimits) -> Dict[str, float]:
        intervals = {}
        for group, interval in rateLimits.items():
            if interval is None or interval < 0:
                raise ConfigurationError(f"Interval for group {group!r} must be >= 0, got: {interval}")
            intervals[RateLimitGroup.toGroupId(group)] = float(interval)
        return intervals

    @staticmethod
    def _normalizeQuotas(quotas) -> Dict[str, List[RateSpec]]:
        normalized = {}
        for group, specs in quotas.items():
            if isinstance(specs, (str, RateSpec)):
                specs = [specs]
            parsed = [spec if isinstance(spec, RateSpec) else RateSpec.fromString(spec) for spec in specs]
            # pyrate-limiter expects windows ordered by interval
            normalized[RateLimitGroup.toGroupId(group)] = sorted(parsed, key=lambda spec: spec.intervalMs)
        return normalized

    @classmethod
    def _resolveKeys(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown configuration option: {key!r}")
            if value is not None:
                kwargs[name] = value
        return kwargs

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """
        Build from a camelCase mapping.

        Accepts the field names plus githubToken/token, githubUrl and
        githubApiPathPrefix aliases. None values fall back to defaults.
        """
        return cls(**cls._resolveKeys(data))

    def withOverrides(self, **overrides) -> 'ClientConfig':
        """Copy with some fields replaced; same keys and aliases as fromDict."""
        return replace(self, **self._resolveKeys(overrides))
