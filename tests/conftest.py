"""
Shared fixtures.
"""
import pytest

from ghdispatch.framework.ThrottleRegistry import ThrottleRegistry

PROXY_ENV_VARS = ['HTTP_PROXY', 'HTTPS_PROXY', 'ALL_PROXY', 'NO_PROXY']


class FakeClock:
    """Monotonic clock whose sleep() advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fakeClock():
    return FakeClock()


@pytest.fixture(autouse=True)
def isolateEnvironment(monkeypatch):
    """Keep local test servers reachable regardless of proxy settings in the environment."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)
    yield
    ThrottleRegistry.resetShared()
