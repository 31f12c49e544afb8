"""
Entry point: builds a throttled, retrying GitHub client from a configuration.
"""
import logging
from typing import Any, Dict, Iterable, Optional, Union

from ghdispatch.client.RestClient import RestClient
from ghdispatch.framework.GroupClassifier import DEFAULT_NAMESPACE_GROUPS, GroupClassifier
from ghdispatch.framework.HTTPSessionManager import HTTPSessionManager
from ghdispatch.framework.RetryPolicy import RetryPolicy
from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry
from ghdispatch.framework.TreeBuilder import TreeBuilder
from ghdispatch.framework.WrappedClient import WrappedClient
from ghdispatch.pojos.ClientConfig import ClientConfig

logger = logging.getLogger(__name__)


class ClientFactory:
    """Wires configuration, transport, throttling and retries together."""

    @classmethod
    def resolveConfig(cls, config: Union[None, ClientConfig, Dict[str, Any]], overrides: Dict[str, Any]) -> ClientConfig:
        if config is None:
            config = ClientConfig.fromDict(overrides)
        elif isinstance(config, dict):
            config = ClientConfig.fromDict({**config, **overrides})
        elif overrides:
            config = config.withOverrides(**overrides)
        return config

    @classmethod
    def createThrottleRegistry(cls, config: ClientConfig) -> ThrottleRegistry:
        settings = dict(
            rateLimits=config.rateLimits,
            globalRateLimit=config.globalRateLimit,
            quotas=config.quotas,
        )
        if config.sharedThrottle:
            return ThrottleRegistry.shared(**settings)
        return ThrottleRegistry(**settings)

    @classmethod
    def createRawClient(cls, config: ClientConfig) -> RestClient:
        session = HTTPSessionManager.createSession(config)
        return RestClient(
            session=session,
            baseUrl=config.baseUrl,
            pathPrefix=config.pathPrefix,
            timeout=config.timeout
        )

    @classmethod
    def getClient(
        cls,
        config: Union[None, ClientConfig, Dict[str, Any]] = None,
        throttleRegistry: Optional[ThrottleRegistry] = None,
        rawClient: Any = None,
        surface: Optional[Dict[str, Iterable[str]]] = None,
        **overrides
    ) -> WrappedClient:
        """
        Build a wrapped client.

        Args:
            config: ClientConfig or camelCase mapping; keyword overrides are merged on top
            throttleRegistry: Registry to share with other clients (default: a new one)
            rawClient: Pre-built operation tree; skips session and RestClient creation
            surface: Explicit namespace -> operation names for rawClient

        Returns:
            WrappedClient mirroring the raw client's namespaces
        """
        config = cls.resolveConfig(config, overrides)

        if throttleRegistry is None:
            throttleRegistry = cls.createThrottleRegistry(config)
        if rawClient is None:
            rawClient = cls.createRawClient(config)

        classifier = GroupClassifier(
            namespaceGroups={**DEFAULT_NAMESPACE_GROUPS, **config.namespaceGroups},
            operationOverrides=config.groupOverrides
        )
        retryPolicy = RetryPolicy(config.retryConfig)
        builder = TreeBuilder(classifier, throttleRegistry, retryPolicy)

        return builder.build(rawClient, surface=surface)


def getClient(config=None, **kwargs) -> WrappedClient:
    """Shortcut for ClientFactory.getClient."""
    return ClientFactory.getClient(config, **kwargs)
