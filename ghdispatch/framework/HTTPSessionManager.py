"""
Builds HTTP sessions with proxy and default-header settings applied.
"""
import logging
from typing import Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ghdispatch.client.Constants import GITHUB_MEDIA_TYPE, USER_AGENT
from ghdispatch.framework.RateLimitConfig import RateLimitConfig
from ghdispatch.pojos.ClientConfig import ClientConfig
from ghdispatch.pojos.ProxyConfig import ProxyConfig

logger = logging.getLogger(__name__)


class ProxyHeaderAdapter(HTTPAdapter):
    """
    HTTPAdapter that sends extra headers to the proxy.

    For HTTPS targets the headers go out with the CONNECT request that opens
    the tunnel; for plain HTTP they are added to the forwarded request.
    """

    def __init__(self, proxyHeaders: Optional[Dict[str, str]] = None, **kwargs):
        self.extraProxyHeaders = dict(proxyHeaders or {})
        super().__init__(**kwargs)

    def proxy_headers(self, proxy):
        headers = super().proxy_headers(proxy)
        headers.update(self.extraProxyHeaders)
        return headers


class HTTPSessionManager:
    """
    Factory for the requests.Session used by the raw client.
    Each client configuration gets its own session.
    """

    @classmethod
    def defaultHeaders(cls, config: ClientConfig) -> Dict[str, str]:
        """Headers attached to every outbound request."""
        headers = {
            'Accept': GITHUB_MEDIA_TYPE,
            'User-Agent': USER_AGENT,
        }
        if config.credential:
            headers['Authorization'] = f"token {config.credential}"
        headers.update(config.headers)
        return headers

    @classmethod
    def createSession(cls, config: ClientConfig) -> requests.Session:
        """
        Create a session with connection pooling, default headers and proxy routing.

        Args:
            config: Client configuration

        Returns:
            Configured requests.Session instance
        """
        session = requests.Session()
        session.headers.update(cls.defaultHeaders(config))

        proxyHeaders = None
        if isinstance(config.proxy, ProxyConfig):
            proxyHeaders = config.proxy.headers

        # Configure connection pooling
        adapter = ProxyHeaderAdapter(
            proxyHeaders=proxyHeaders,
            pool_connections=RateLimitConfig.POOL_CONNECTIONS,
            pool_maxsize=RateLimitConfig.POOL_MAXSIZE,
            pool_block=RateLimitConfig.POOL_BLOCK,
            max_retries=Retry(
                total=0,  # Retries are handled by the dispatch layer's RetryPolicy
                raise_on_status=False
            )
        )

        session.mount('http://', adapter)
        session.mount('https://', adapter)

        if config.proxy is not None:
            cls._configureProxy(session, config.proxy)

        logger.info(
            "HTTP_SESSION :: Created HTTP session | Base URL: %s | Proxy: %s | Pool: %d connections",
            config.baseUrl,
            cls._describeProxy(config.proxy),
            RateLimitConfig.POOL_CONNECTIONS
        )

        return session

    @classmethod
    def _configureProxy(cls, session: requests.Session, proxy) -> None:
        if isinstance(proxy, ProxyConfig):
            proxyUrl = proxy.url
            if not proxy.rejectUnauthorized:
                session.verify = False
                logger.warning("HTTP_SESSION :: TLS certificate verification disabled for proxied session")
        else:
            proxyUrl = proxy

        session.proxies = {'http': proxyUrl, 'https': proxyUrl}
        # Explicit proxy settings take precedence over HTTP(S)_PROXY / NO_PROXY
        session.trust_env = False

    @staticmethod
    def _describeProxy(proxy) -> str:
        if proxy is None:
            return "none"
        if isinstance(proxy, ProxyConfig):
            return f"{proxy.protocol}://{proxy.host}:{proxy.port} (tunnel)"
        parts = urlsplit(proxy)
        # Never log proxy credentials
        return f"{parts.scheme}://{parts.hostname}:{parts.port}"
