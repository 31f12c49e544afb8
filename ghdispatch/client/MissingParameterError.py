"""
Error raised when an operation is called without its path parameters.
"""
from typing import Sequence


class MissingParameterError(TypeError):
    """
    Caller error detected before any request is sent.

    Marked non-retryable: retrying the same arguments cannot succeed.
    """
    retryable = False

    def __init__(self, operation: str, missing: Sequence[str]):
        super().__init__(f"{operation}() missing path parameters: {list(missing)}")
        self.operation = operation
        self.missing = tuple(missing)
