"""
Tests for the bundled REST client against a local server.
"""
import time

import pytest

from ghdispatch import getClient
from ghdispatch.client.GitHubAPIError import GitHubAPIError
from ghdispatch.client.MissingParameterError import MissingParameterError
from ghdispatch.client.RestClient import RestClient
from ghdispatch.framework.HTTPSessionManager import HTTPSessionManager
from ghdispatch.pojos.ClientConfig import ClientConfig
from helpers.LocalServers import TargetServer

MEDIA_TYPE = 'application/vnd.github.drax-preview+json'


@pytest.fixture
def server():
    with TargetServer() as target:
        yield target


def _rawClient(server, **kwargs):
    config = ClientConfig(credential='secret', baseUrl=server.url, **kwargs)
    return RestClient(HTTPSessionManager.createSession(config), baseUrl=config.baseUrl, pathPrefix=config.pathPrefix)


def testGetFillsPathAndSendsDefaultHeaders(server):
    response = _rawClient(server).repos.get(owner='owner', repo='repo')

    assert response.status == 200
    assert response.data == {'method': 'GET', 'path': '/repos/owner/repo'}

    request = server.requests[0]
    assert request.headers['accept'] == MEDIA_TYPE
    assert request.headers['authorization'] == 'token secret'


def testQueryParametersForGet(server):
    _rawClient(server).search.issues(q='repo:owner/repo is:open')

    assert server.requests[0].path.startswith('/search/issues?q=')


def testBodyForWriteOperations(server):
    _rawClient(server).repos.createRelease({'owner': 'owner', 'repo': 'repo'}, tag_name='v1.0.0')

    request = server.requests[0]
    assert request.method == 'POST'
    assert request.path == '/repos/owner/repo/releases'
    assert request.json() == {'tag_name': 'v1.0.0'}


def testPathPrefixIsApplied(server):
    _rawClient(server, pathPrefix='/api/v3/').users.getForUser(username='octocat')

    assert server.requests[0].path == '/api/v3/users/octocat'


def testErrorStatusRaisesApiError(server):
    with pytest.raises(GitHubAPIError) as excinfo:
        _rawClient(server).repos.getBranch(owner='owner', repo='repo', branch='missing')

    assert excinfo.value.status == 404
    assert excinfo.value.code == 404
    assert excinfo.value.message == 'Not Found'


def testMissingPathParameter(server):
    with pytest.raises(TypeError):
        _rawClient(server).repos.get(owner='owner')

    assert server.requests == []


def testExtraHeadersAreMerged(server):
    _rawClient(server, headers={'X-GitHub-Api-Version': '2022-11-28'}).misc.getRateLimit()

    assert server.requests[0].headers['x-github-api-version'] == '2022-11-28'


def testWrappedClientRetriesApiErrors(server):
    github = getClient(
        githubToken='secret',
        githubUrl=server.url,
        rateLimits={'core': 0.01},
        globalRateLimit=0,
        retryConfig={'retries': 2, 'factor': 1, 'minTimeout': 0.01}
    )

    with pytest.raises(GitHubAPIError):
        github.repos.getBranch(owner='owner', repo='repo', branch='missing')

    assert len(server.requests) == 3


def testMissingPathParameterIsNotRetried(server):
    github = getClient(githubToken='secret', githubUrl=server.url, globalRateLimit=0)
    start = time.monotonic()

    with pytest.raises(MissingParameterError):
        github.repos.get(owner='owner')

    # Default policy would back off 1s before a retry
    assert time.monotonic() - start < 0.5
    assert len(github.repos.get.attemptLog) == 1
    assert server.requests == []
