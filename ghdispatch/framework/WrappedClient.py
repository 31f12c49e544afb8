"""
Mirrored operation tree whose leaves are CallWrappers.
"""
from typing import Any, Dict, Tuple

from ghdispatch.framework.RetryPolicy import RetryPolicy
from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry


class WrappedNamespace:
    """One namespace of the wrapped tree (e.g. repos)."""

    def __init__(self, name: str, entries: Dict[str, Any]):
        self.name = name
        self._entries = entries

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__['_entries'][name]
        except KeyError:
            raise AttributeError(f"Namespace {self.name!r} has no operation {name!r}") from None

    def __getitem__(self, name: str) -> Any:
        return self._entries[name]

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __iter__(self):
        return iter(self._entries)

    def __dir__(self):
        return list(super().__dir__()) + list(self._entries)

    def operations(self) -> Tuple[str, ...]:
        return tuple(self._entries)


class WrappedClient:
    """
    Wrapped operation tree returned by getClient.

    Owns the ThrottleRegistry and RetryPolicy shared by all of its leaves.
    """

    def __init__(
        self,
        namespaces: Dict[str, WrappedNamespace],
        passthrough: Dict[str, Any],
        throttleRegistry: ThrottleRegistry,
        retryPolicy: RetryPolicy,
        rawClient: Any = None
    ):
        self._namespaces = namespaces
        self._passthrough = passthrough
        self.throttleRegistry = throttleRegistry
        self.retryPolicy = retryPolicy
        self.rawClient = rawClient

    def __getattr__(self, name: str) -> Any:
        entries = self.__dict__
        if name in entries['_namespaces']:
            return entries['_namespaces'][name]
        if name in entries['_passthrough']:
            return entries['_passthrough'][name]
        raise AttributeError(f"Client has no namespace {name!r}")

    def __getitem__(self, name: str) -> Any:
        if name in self._namespaces:
            return self._namespaces[name]
        return self._passthrough[name]

    def __contains__(self, name: str) -> bool:
        return name in self._namespaces or name in self._passthrough

    def __dir__(self):
        return list(super().__dir__()) + list(self._namespaces) + list(self._passthrough)

    def namespaces(self) -> Tuple[str, ...]:
        return tuple(self._namespaces)

    def operations(self, namespace: str) -> Tuple[str, ...]:
        return self._namespaces[namespace].operations()

    def structure(self) -> Dict[str, Tuple[str, ...]]:
        """Namespace -> operation names, for structural comparison."""
        return {name: namespace.operations() for name, namespace in self._namespaces.items()}
