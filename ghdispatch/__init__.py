"""
Rate-limited dispatch layer for a namespaced GitHub REST client.

Features:
- Per-group pacing (core, search) plus a global ceiling across all groups
- Retries with geometric backoff through tenacity, re-throttled on the same group
- Optional quota windows with pyrate-limiter
- Proxy routing (forward or CONNECT tunnel) and default headers with requests
- Prometheus metrics for throttling and retries

Example:
    >>> from ghdispatch import getClient
    >>> github = getClient({"githubToken": "..."})
    >>> github.repos.get(owner="octocat", repo="hello-world")
"""

from ghdispatch.ClientFactory import ClientFactory, getClient
from ghdispatch.client.GitHubAPIError import GitHubAPIError
from ghdispatch.client.MissingParameterError import MissingParameterError
from ghdispatch.client.RestClient import RestClient
from ghdispatch.enums.RateLimitGroup import RateLimitGroup
from ghdispatch.framework.CallWrapper import CallWrapper
from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.GroupClassifier import GroupClassifier
from ghdispatch.framework.PacingGate import PacingGate
from ghdispatch.framework.RetryPolicy import RetryPolicy
from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry
from ghdispatch.framework.TreeBuilder import TreeBuilder
from ghdispatch.framework.WrappedClient import WrappedClient, WrappedNamespace
from ghdispatch.pojos.ClientConfig import ClientConfig
from ghdispatch.pojos.ProxyConfig import ProxyConfig
from ghdispatch.pojos.RetryConfig import RetryConfig

__all__ = [
    'CallWrapper',
    'ClientConfig',
    'ClientFactory',
    'ConfigurationError',
    'GitHubAPIError',
    'MissingParameterError',
    'GroupClassifier',
    'PacingGate',
    'ProxyConfig',
    'RateLimitGroup',
    'RestClient',
    'RetryConfig',
    'RetryPolicy',
    'ThrottleRegistry',
    'TreeBuilder',
    'WrappedClient',
    'WrappedNamespace',
    'getClient',
]
