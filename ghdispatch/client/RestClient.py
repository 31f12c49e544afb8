"""
Endpoint-table client for the GitHub REST API.
"""
import logging
from string import Formatter
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests

from ghdispatch.client.Constants import ENDPOINTS, GITHUB_API_BASE_URL, QUERY_METHODS
from ghdispatch.client.GitHubAPIError import GitHubAPIError
from ghdispatch.client.MissingParameterError import MissingParameterError
from ghdispatch.framework.RateLimitConfig import RateLimitConfig
from ghdispatch.pojos.OperationResponse import OperationResponse

logger = logging.getLogger(__name__)


class RestOperation:
    """One callable endpoint, e.g. repos.createRelease."""

    def __init__(self, client: 'RestClient', namespace: str, name: str, method: str, pathTemplate: str):
        self.client = client
        self.namespace = namespace
        self.__name__ = name
        self.method = method
        self.pathTemplate = pathTemplate
        self.pathParams = tuple(
            fieldName for _, fieldName, _, _ in Formatter().parse(pathTemplate) if fieldName
        )

    def __repr__(self) -> str:
        return f"<RestOperation {self.namespace}.{self.__name__} {self.method} {self.pathTemplate}>"

    def __call__(self, params: Optional[Dict[str, Any]] = None, **kwargs) -> OperationResponse:
        """
        Send the request.

        Args:
            params: Parameters as a dict (kwargs are merged on top)

        Returns:
            OperationResponse for any 2xx/3xx status

        Raises:
            MissingParameterError: If a path parameter is not supplied
            GitHubAPIError: For 4xx/5xx responses
            requests.exceptions.RequestException: For transport failures
        """
        allParams = dict(params or {})
        allParams.update(kwargs)

        missing = [name for name in self.pathParams if name not in allParams]
        if missing:
            raise MissingParameterError(f"{self.namespace}.{self.__name__}", missing)

        path = self.pathTemplate.format(
            **{name: quote(str(allParams.pop(name)), safe='/') for name in self.pathParams}
        )
        return self.client.request(self.method, path, allParams)


class RestNamespace:
    """Group of operations sharing a namespace, e.g. repos."""

    def __init__(self, name: str):
        self.name = name
        self._operations: Dict[str, RestOperation] = {}

    def add(self, operation: RestOperation) -> None:
        self._operations[operation.__name__] = operation

    def operationNames(self) -> Tuple[str, ...]:
        return tuple(self._operations)

    def __getattr__(self, name: str) -> RestOperation:
        try:
            return self.__dict__['_operations'][name]
        except KeyError:
            raise AttributeError(f"Namespace {self.name!r} has no operation {name!r}") from None

    def __getitem__(self, name: str) -> RestOperation:
        return self._operations[name]


class RestClient:
    """
    Client exposing one attribute per namespace of the endpoint table.

    Example:
        >>> client = RestClient(session)
        >>> client.repos.get(owner="octocat", repo="hello-world").data["full_name"]
    """

    def __init__(
        self,
        session: requests.Session,
        baseUrl: str = GITHUB_API_BASE_URL,
        pathPrefix: str = "",
        endpoints: Dict[str, Dict[str, Tuple[str, str]]] = ENDPOINTS,
        timeout: float = RateLimitConfig.DEFAULT_TIMEOUT_SECONDS
    ):
        self.session = session
        self.baseUrl = baseUrl.rstrip('/')
        self.pathPrefix = ('/' + pathPrefix.strip('/')) if pathPrefix and pathPrefix.strip('/') else ""
        self.timeout = timeout
        self._namespaces: Dict[str, RestNamespace] = {}

        for namespaceName, operations in endpoints.items():
            namespace = RestNamespace(namespaceName)
            for operationName, (method, pathTemplate) in operations.items():
                namespace.add(RestOperation(self, namespaceName, operationName, method.upper(), pathTemplate))
            self._namespaces[namespaceName] = namespace

    def __getattr__(self, name: str) -> RestNamespace:
        try:
            return self.__dict__['_namespaces'][name]
        except KeyError:
            raise AttributeError(f"RestClient has no namespace {name!r}") from None

    def __getitem__(self, name: str) -> RestNamespace:
        return self._namespaces[name]

    def surface(self) -> Dict[str, Tuple[str, ...]]:
        """Declared namespaces and their operation names."""
        return {name: namespace.operationNames() for name, namespace in self._namespaces.items()}

    def request(self, method: str, path: str, params: Dict[str, Any]) -> OperationResponse:
        url = f"{self.baseUrl}{self.pathPrefix}{path}"

        if method in QUERY_METHODS:
            response = self.session.request(method, url, params=params or None, timeout=self.timeout)
        else:
            response = self.session.request(method, url, json=params, timeout=self.timeout)

        logger.debug(
            "REST_CLIENT :: %s %s | Status: %d",
            method,
            url,
            response.status_code
        )

        if response.status_code >= 400:
            raise GitHubAPIError.fromResponse(response)

        return OperationResponse.fromResponse(response)
