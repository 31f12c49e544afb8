"""
POJO for the result of a REST operation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

import requests


@dataclass
class OperationResponse:
    status: int
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None

    @classmethod
    def fromResponse(cls, response: requests.Response) -> 'OperationResponse':
        """Decode JSON bodies; keep text for anything else."""
        data = None
        if response.content:
            contentType = response.headers.get('Content-Type', '')
            if 'json' in contentType:
                data = response.json()
            else:
                data = response.text

        return cls(
            status=response.status_code,
            url=response.url,
            headers=dict(response.headers),
            data=data,
        )
