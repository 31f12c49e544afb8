"""
Error raised by the REST client for non-success responses.
"""
from typing import Optional

import requests


class GitHubAPIError(Exception):
    """
    HTTP error response from the GitHub API.

    Attributes:
        status: HTTP status code
        code: Same as status
        response: The underlying requests.Response, if any
    """

    def __init__(self, status: int, message: str, response: Optional[requests.Response] = None):
        super().__init__(message)
        self.status = status
        self.code = status
        self.message = message
        self.response = response

    def __str__(self) -> str:
        return f"{self.status}: {self.message}"

    @classmethod
    def fromResponse(cls, response: requests.Response) -> 'GitHubAPIError':
        message = response.reason or "Request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('message'):
            message = body['message']
        return cls(response.status_code, message, response)
