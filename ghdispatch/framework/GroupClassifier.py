"""
Maps operations to their rate limit group.
"""
from typing import Dict, Optional

from ghdispatch.enums.RateLimitGroup import RateLimitGroup

# Namespaces with their own rate limit; everything else is core
DEFAULT_NAMESPACE_GROUPS = {
    "search": RateLimitGroup.SEARCH.value,
}


class GroupClassifier:
    """
    Static classification of (namespace, operation) into a group id.

    Per-operation overrides are keyed "namespace.operation" and win over the
    namespace mapping. Unknown namespaces fall back to the default group.
    """

    def __init__(
        self,
        namespaceGroups: Optional[Dict[str, str]] = None,
        operationOverrides: Optional[Dict[str, str]] = None,
        defaultGroup=RateLimitGroup.CORE
    ):
        if namespaceGroups is None:
            namespaceGroups = DEFAULT_NAMESPACE_GROUPS
        self.namespaceGroups = {
            namespace: RateLimitGroup.toGroupId(group) for namespace, group in namespaceGroups.items()
        }
        self.operationOverrides = {
            key: RateLimitGroup.toGroupId(group) for key, group in (operationOverrides or {}).items()
        }
        self.defaultGroup = RateLimitGroup.toGroupId(defaultGroup)

    def classify(self, namespace: str, operationName: str) -> str:
        override = self.operationOverrides.get(f"{namespace}.{operationName}")
        if override is not None:
            return override
        return self.namespaceGroups.get(namespace, self.defaultGroup)
