"""
Enum for the rate limit groups of the GitHub API.
"""
from enum import Enum


class RateLimitGroup(Enum):
    """Enum for the rate limit groups of the GitHub API."""
    CORE = "core"
    SEARCH = "search"

    @classmethod
    def toGroupId(cls, group) -> str:
        """Return the string id for an enum member or a plain group id."""
        if isinstance(group, cls):
            return group.value
        return str(group).lower().strip()
