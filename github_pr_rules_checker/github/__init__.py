"""GitHub API access."""

from .client import GitHubAPIClient
from .lookup import GitHubPullRequestLookup, PullRequestLookup

__all__ = ["GitHubAPIClient", "GitHubPullRequestLookup", "PullRequestLookup"]
