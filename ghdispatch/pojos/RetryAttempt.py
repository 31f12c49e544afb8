"""
POJO for a single attempt of a wrapped operation.
"""
from dataclasses import dataclass
from typing import Optional

from ghdispatch.enums.AttemptOutcome import AttemptOutcome


@dataclass
class RetryAttempt:
    """One attempt of one invocation, in attempt order."""
    attemptNumber: int
    backoffDelay: float
    throttleWait: float
    outcome: AttemptOutcome
    error: Optional[str] = None

    def succeeded(self) -> bool:
        return self.outcome == AttemptOutcome.SUCCEEDED
