"""Asynchronous pull request search and fetch capability."""

import asyncio
from typing import Any, Protocol

from github_pr_rules_checker.github.client import GitHubAPIClient


class PullRequestLookup(Protocol):
    """Remote search/fetch capability used by the release linkage check."""

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Return search result items, each carrying at least ``number``."""
        ...

    async def fetch_pull_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """Return ``base_ref``, ``state``, ``merged``, ``html_url`` and ``title`` of a pull request."""
        ...


class GitHubPullRequestLookup:
    """Runs the blocking GitHub client calls in worker threads."""

    def __init__(self, client: GitHubAPIClient) -> None:
        self.client = client

    async def search(self, query: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self.client.search_issues, query)

    async def fetch_pull_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        data = await asyncio.to_thread(self.client.get_pull_request, owner, repo, number)
        return {
            "base_ref": (data.get("base") or {}).get("ref"),
            "state": data.get("state"),
            "merged": bool(data.get("merged")),
            "html_url": data.get("html_url") or "",
            "title": data.get("title") or "",
        }
