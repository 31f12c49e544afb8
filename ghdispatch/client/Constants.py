"""
Constants for GitHub REST API integration.
"""

# API Base URL
GITHUB_API_BASE_URL = "https://api.github.com"

# Default headers
GITHUB_MEDIA_TYPE = "application/vnd.github.drax-preview+json"
USER_AGENT = "ghdispatch"

# Methods whose remaining parameters go to the query string instead of the body
QUERY_METHODS = ("GET", "HEAD", "DELETE")

# Declared API surface: namespace -> operation -> (HTTP method, path template)
ENDPOINTS = {
    "repos": {
        "get": ("GET", "/repos/{owner}/{repo}"),
        "getContent": ("GET", "/repos/{owner}/{repo}/contents/{path}"),
        "getReleaseByTag": ("GET", "/repos/{owner}/{repo}/releases/tags/{tag}"),
        "getReleases": ("GET", "/repos/{owner}/{repo}/releases"),
        "createRelease": ("POST", "/repos/{owner}/{repo}/releases"),
        "editRelease": ("PATCH", "/repos/{owner}/{repo}/releases/{release_id}"),
        "deleteRelease": ("DELETE", "/repos/{owner}/{repo}/releases/{release_id}"),
        "getBranch": ("GET", "/repos/{owner}/{repo}/branches/{branch}"),
    },
    "issues": {
        "get": ("GET", "/repos/{owner}/{repo}/issues/{number}"),
        "getForRepo": ("GET", "/repos/{owner}/{repo}/issues"),
        "create": ("POST", "/repos/{owner}/{repo}/issues"),
        "edit": ("PATCH", "/repos/{owner}/{repo}/issues/{number}"),
        "createComment": ("POST", "/repos/{owner}/{repo}/issues/{number}/comments"),
        "addLabels": ("POST", "/repos/{owner}/{repo}/issues/{number}/labels"),
    },
    "pullRequests": {
        "get": ("GET", "/repos/{owner}/{repo}/pulls/{number}"),
        "getAll": ("GET", "/repos/{owner}/{repo}/pulls"),
    },
    "gitdata": {
        "getReference": ("GET", "/repos/{owner}/{repo}/git/refs/{ref}"),
        "createReference": ("POST", "/repos/{owner}/{repo}/git/refs"),
        "getTag": ("GET", "/repos/{owner}/{repo}/git/tags/{sha}"),
    },
    "search": {
        "issues": ("GET", "/search/issues"),
        "code": ("GET", "/search/code"),
        "repos": ("GET", "/search/repositories"),
        "commits": ("GET", "/search/commits"),
    },
    "users": {
        "get": ("GET", "/user"),
        "getForUser": ("GET", "/users/{username}"),
    },
    "misc": {
        "getRateLimit": ("GET", "/rate_limit"),
    },
}
