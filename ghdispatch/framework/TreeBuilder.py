"""
Builds the wrapped operation tree from a raw client.
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

from ghdispatch.framework.CallWrapper import CallWrapper
from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.GroupClassifier import GroupClassifier
from ghdispatch.framework.RetryPolicy import RetryPolicy
from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry
from ghdispatch.framework.WrappedClient import WrappedClient, WrappedNamespace

logger = logging.getLogger(__name__)


def _lookup(container: Any, name: str) -> Any:
    if isinstance(container, Mapping):
        return container[name]
    return getattr(container, name)


class TreeBuilder:
    """
    Mirrors a raw client's declared surface with CallWrappers at the leaves.

    The surface (namespace -> operation names) is taken from, in order: the
    explicit `surface` argument, the raw client's own `surface()` method, or
    the keys of a plain mapping tree. The raw client's shape is never
    discovered by introspection.
    """

    def __init__(self, classifier: GroupClassifier, throttleRegistry: ThrottleRegistry, retryPolicy: RetryPolicy):
        self.classifier = classifier
        self.throttleRegistry = throttleRegistry
        self.retryPolicy = retryPolicy

    @staticmethod
    def resolveSurface(rawClient: Any, surface: Optional[Dict[str, Iterable[str]]] = None) -> Dict[str, tuple]:
        """
        Determine which namespaces and operations to wrap.

        Raises:
            ConfigurationError: If no surface can be determined
        """
        if surface is not None:
            return {namespace: tuple(names) for namespace, names in surface.items()}

        declared = getattr(rawClient, 'surface', None)
        if callable(declared) and not isinstance(rawClient, Mapping):
            return {namespace: tuple(names) for namespace, names in declared().items()}

        if isinstance(rawClient, Mapping):
            return {
                namespace: tuple(entries)
                for namespace, entries in rawClient.items()
                if isinstance(entries, Mapping)
            }

        raise ConfigurationError(
            f"Cannot determine the operation surface of {type(rawClient).__name__}; pass surface= explicitly"
        )

    def build(self, rawClient: Any, surface: Optional[Dict[str, Iterable[str]]] = None) -> WrappedClient:
        """
        Args:
            rawClient: Operation tree (RestClient, mapping of mappings, or any object with namespace attributes)
            surface: Optional explicit namespace -> operation names

        Returns:
            WrappedClient with the same namespaces and operation names
        """
        resolved = self.resolveSurface(rawClient, surface)
        namespaces: Dict[str, WrappedNamespace] = {}
        wrappedCount = 0

        for namespaceName, operationNames in resolved.items():
            try:
                rawNamespace = _lookup(rawClient, namespaceName)
            except (KeyError, AttributeError):
                raise ConfigurationError(f"Declared namespace {namespaceName!r} is missing from the client") from None

            entries = {}
            for operationName in operationNames:
                try:
                    entry = _lookup(rawNamespace, operationName)
                except (KeyError, AttributeError):
                    raise ConfigurationError(
                        f"Declared operation {namespaceName}.{operationName} is missing from the client"
                    ) from None

                if callable(entry):
                    entries[operationName] = CallWrapper(
                        operation=entry,
                        namespace=namespaceName,
                        name=operationName,
                        groupId=self.classifier.classify(namespaceName, operationName),
                        throttleRegistry=self.throttleRegistry,
                        retryPolicy=self.retryPolicy
                    )
                    wrappedCount += 1
                else:
                    entries[operationName] = entry

            namespaces[namespaceName] = WrappedNamespace(namespaceName, entries)

        # Top-level entries of a mapping tree that are not namespaces stay as they are
        passthrough = {}
        if isinstance(rawClient, Mapping):
            passthrough = {name: value for name, value in rawClient.items() if name not in namespaces}

        logger.info(
            "TREE_BUILDER :: Built client | Namespaces: %d | Wrapped operations: %d | Passthrough: %d",
            len(namespaces),
            wrappedCount,
            len(passthrough)
        )

        return WrappedClient(
            namespaces=namespaces,
            passthrough=passthrough,
            throttleRegistry=self.throttleRegistry,
            retryPolicy=self.retryPolicy,
            rawClient=rawClient
        )
