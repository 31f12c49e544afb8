"""
Attempt outcome enum.
"""
from enum import Enum


class AttemptOutcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
