"""
Tests for GroupClassifier.
"""
from ghdispatch.enums.RateLimitGroup import RateLimitGroup
from ghdispatch.framework.GroupClassifier import GroupClassifier


def testSearchNamespaceHasItsOwnGroup():
    classifier = GroupClassifier()

    assert classifier.classify('search', 'issues') == 'search'
    assert classifier.classify('search', 'code') == 'search'


def testOtherNamespacesAreCore():
    classifier = GroupClassifier()

    assert classifier.classify('repos', 'createRelease') == 'core'
    assert classifier.classify('issues', 'createComment') == 'core'


def testUnknownNamespaceFallsBackToDefault():
    assert GroupClassifier().classify('unknown', 'anything') == 'core'
    assert GroupClassifier(defaultGroup='misc').classify('unknown', 'anything') == 'misc'


def testOperationOverrideWinsOverNamespace():
    classifier = GroupClassifier(operationOverrides={
        'repos.createRelease': 'write',
        'search.issues': RateLimitGroup.CORE,
    })

    assert classifier.classify('repos', 'createRelease') == 'write'
    assert classifier.classify('repos', 'get') == 'core'
    assert classifier.classify('search', 'issues') == 'core'
    assert classifier.classify('search', 'code') == 'search'


def testCustomNamespaceMapping():
    classifier = GroupClassifier(namespaceGroups={'graphql': 'graphql'})

    assert classifier.classify('graphql', 'query') == 'graphql'
    # Replaces the default mapping entirely
    assert classifier.classify('search', 'issues') == 'core'
