"""
POJO for a tunnelling proxy definition.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ghdispatch.framework.ConfigurationError import ConfigurationError


@dataclass(frozen=True)
class ProxyConfig:
    """
    Structured proxy settings.

    Attributes:
        host: Proxy host name
        port: Proxy port
        protocol: Scheme used to reach the proxy itself
        rejectUnauthorized: Verify the target's TLS certificate
        headers: Extra headers sent to the proxy (also on CONNECT)
        auth: Optional "user:password" for Proxy-Authorization
    """
    host: str
    port: int
    protocol: str = "http"
    rejectUnauthorized: bool = True
    headers: Dict[str, str] = field(default_factory=dict)
    auth: Optional[str] = None

    @property
    def url(self) -> str:
        if self.auth:
            return f"{self.protocol}://{self.auth}@{self.host}:{self.port}"
        return f"{self.protocol}://{self.host}:{self.port}"

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> 'ProxyConfig':
        """Build from a mapping such as {host, port, rejectUnauthorized, headers}."""
        if 'host' not in data or 'port' not in data:
            raise ConfigurationError(f"Proxy definition requires host and port: {data!r}")

        unknown = set(data) - {'host', 'port', 'protocol', 'rejectUnauthorized', 'headers', 'auth'}
        if unknown:
            raise ConfigurationError(f"Unknown proxy options: {sorted(unknown)}")

        protocol = str(data.get('protocol', 'http')).rstrip(':')
        return cls(
            host=data['host'],
            port=int(data['port']),
            protocol=protocol,
            rejectUnauthorized=bool(data.get('rejectUnauthorized', True)),
            headers=dict(data.get('headers') or {}),
            auth=data.get('auth'),
        )
