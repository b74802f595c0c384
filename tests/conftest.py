"""Test configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any

import pytest

# Set environment variables immediately when this module is imported
# This ensures they're available before any other modules try to load Settings
test_env_vars = {
    "GITHUB_TOKEN": "test_github_token_123",
    "GITHUB_API_BASE_URL": "https://api.github.com",
    "GITHUB_REQUEST_DELAY": "0",
    "APP_NAME": "GitHub PR Rules Checker Test",
    "DEBUG": "true",
    "LOG_LEVEL": "DEBUG",
}

for key, value in test_env_vars.items():
    os.environ[key] = value


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables."""
    yield

    for key in test_env_vars:
        os.environ.pop(key, None)


@pytest.fixture
def rule_config():
    """Default rule configuration."""
    from github_pr_rules_checker.config import RuleConfig

    return RuleConfig()


@pytest.fixture
def make_snapshot():
    """Factory for pull request snapshots."""
    from github_pr_rules_checker.models import Commit, PRSnapshot

    def _make(**overrides: Any) -> PRSnapshot:
        data = {
            "title": "[HF] MPT-42 Fix crash on startup",
            "base_branch": "main",
            "head_branch": "feature/MPT-42",
            "owner": "acme",
            "repo": "shop",
            "number": 10,
            "additions": 10,
            "deletions": 5,
            "changed_files": 2,
            "commits": (Commit(sha="a1b2c3d4e5f6", message="MPT-42 Fix crash", parent_count=1),),
        }
        data.update(overrides)
        return PRSnapshot(**data)

    return _make


class FakeLookup:
    """In-memory pull request lookup."""

    def __init__(
        self,
        search_results: dict[str, list[dict]] | None = None,
        pulls: dict[int, dict | Exception] | None = None,
    ) -> None:
        self.search_results = search_results or {}
        self.pulls = pulls or {}
        self.queries: list[str] = []
        self.fetched: list[int] = []

    async def search(self, query: str) -> list[dict]:
        self.queries.append(query)
        for fragment, items in self.search_results.items():
            if fragment in query:
                return items
        return []

    async def fetch_pull_request(self, owner: str, repo: str, number: int) -> dict:
        self.fetched.append(number)
        detail = self.pulls.get(number)
        if detail is None:
            msg = f"PR {number} not found"
            raise LookupError(msg)
        if isinstance(detail, Exception):
            raise detail
        return detail


@pytest.fixture
def fake_lookup_class() -> type[FakeLookup]:
    return FakeLookup
