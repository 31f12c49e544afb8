"""
Tests for RetryPolicy decisions and its tenacity controller.
"""
import pytest

from ghdispatch.client.GitHubAPIError import GitHubAPIError
from ghdispatch.client.MissingParameterError import MissingParameterError
from ghdispatch.framework.ConfigurationError import ConfigurationError
from ghdispatch.framework.RetryPolicy import RetryPolicy, errorStatus
from ghdispatch.pojos.RetryConfig import RetryConfig


def testDelayGrowsGeometrically():
    policy = RetryPolicy(RetryConfig(retries=4, factor=2, minTimeout=1))

    assert [policy.delayFor(n) for n in range(1, 5)] == [1, 2, 4, 8]


def testDelayIsCapped():
    policy = RetryPolicy(RetryConfig(retries=5, factor=3, minTimeout=1, maxTimeout=5))

    assert [policy.delayFor(n) for n in range(1, 4)] == [1, 3, 5]


def testRetriesAnyErrorUntilExhausted():
    policy = RetryPolicy(RetryConfig(retries=3))
    error = RuntimeError("boom")

    assert [policy.shouldRetry(n, error) for n in range(1, 5)] == [True, True, True, False]


def testClientErrorsAreRetriedByDefault():
    policy = RetryPolicy(RetryConfig(retries=1))

    assert policy.shouldRetry(1, GitHubAPIError(404, "Not Found"))


def testNonRetryableStatusStopsImmediately():
    policy = RetryPolicy(RetryConfig(retries=3, nonRetryableStatuses=[401, 403]))

    assert not policy.shouldRetry(1, GitHubAPIError(401, "Bad credentials"))
    assert policy.shouldRetry(1, GitHubAPIError(502, "Bad Gateway"))


def testErrorStatusReadsStatusOrCode():
    class CodedError(Exception):
        code = 404

    assert errorStatus(GitHubAPIError(500, "x")) == 500
    assert errorStatus(CodedError()) == 404
    assert errorStatus(ValueError()) is None


def testRetryingSleepsBackoffBetweenAttempts(fakeClock):
    policy = RetryPolicy(RetryConfig(retries=3, factor=2, minTimeout=0.5), sleep=fakeClock.sleep)
    calls = []

    def flaky():
        calls.append(fakeClock())
        if len(calls) < 3:
            raise ConnectionError("reset")
        return "ok"

    assert policy.newRetrying()(flaky) == "ok"
    assert len(calls) == 3
    assert fakeClock.sleeps == [0.5, 1.0]


def testRetryingReraisesLastError(fakeClock):
    policy = RetryPolicy(RetryConfig(retries=2, factor=1, minTimeout=0.1), sleep=fakeClock.sleep)
    errors = []

    def failing():
        errors.append(GitHubAPIError(500, f"attempt {len(errors) + 1}"))
        raise errors[-1]

    with pytest.raises(GitHubAPIError) as excinfo:
        policy.newRetrying()(failing)

    assert len(errors) == 3
    assert excinfo.value is errors[-1]


def testRetryConfigFromDict():
    config = RetryConfig.fromValue({'retries': 1, 'factor': 1, 'minTimeout': 0.01})

    assert config.retries == 1
    assert config.nonRetryableStatuses == frozenset()

    with pytest.raises(ConfigurationError):
        RetryConfig.fromValue({'retries': 1, 'attempts': 2})

    with pytest.raises(ConfigurationError):
        RetryConfig(retries=-1)


def testErrorsMarkedNonRetryableStopImmediately():
    policy = RetryPolicy(RetryConfig(retries=3))

    assert not policy.shouldRetry(1, MissingParameterError('repos.get', ['repo']))
