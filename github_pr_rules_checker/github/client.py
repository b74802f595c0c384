"""GitHub API client for pull request review data."""

import threading
import time
from typing import Any
from urllib.parse import urljoin

import requests

from github_pr_rules_checker import __version__
from github_pr_rules_checker.config import get_settings
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)


class GitHubAPIClient:
    """GitHub API client with rate limiting and error handling."""

    def __init__(self, access_token: str | None = None, base_url: str | None = None) -> None:
        """Initialize GitHub API client.

        Args:
        ----
            access_token: GitHub token for authentication
            base_url: REST API root, defaults to the configured one

        """
        settings = get_settings()
        self.access_token = access_token if access_token is not None else settings.github_token
        self.base_url = (base_url or settings.github_api_base_url).rstrip("/") + "/"
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"GitHub-PR-Rules-Checker/{__version__}",
        })

        if self.access_token:
            self.session.headers["Authorization"] = f"token {self.access_token}"
        else:
            logger.warning("No GitHub token provided, using unauthenticated requests")

        # Rate limiting
        self.rate_limit_remaining: int | None = None
        self.rate_limit_reset: int | None = None
        self.last_request_time = 0.0
        self.request_delay = settings.github_request_delay
        self._throttle_lock = threading.Lock()

    def _check_rate_limit(self) -> None:
        """Check rate limit status and wait if necessary.

        Serialized across threads sharing this client.
        """
        with self._throttle_lock:
            if self.rate_limit_remaining is not None and self.rate_limit_remaining <= 0:
                if self.rate_limit_reset:
                    wait_time = self.rate_limit_reset - time.time()
                    if wait_time > 0:
                        logger.info("Rate limit exceeded, waiting %.1f seconds", wait_time)
                        time.sleep(wait_time + 1)
                else:
                    logger.info("Rate limit exceeded, waiting 60 seconds")
                    time.sleep(60)

            # Enforce minimum delay between requests
            time_since_last_request = time.time() - self.last_request_time
            if time_since_last_request < self.request_delay:
                time.sleep(self.request_delay - time_since_last_request)

            self.last_request_time = time.time()

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Record rate limit headers of a response."""
        with self._throttle_lock:
            if "X-RateLimit-Remaining" in response.headers:
                self.rate_limit_remaining = int(response.headers["X-RateLimit-Remaining"])

            if "X-RateLimit-Reset" in response.headers:
                self.rate_limit_reset = int(response.headers["X-RateLimit-Reset"])

    def _make_request(self, method: str, url: str, **kwargs: Any) -> requests.Response:  # noqa: ANN401
        """Make HTTP request with rate limiting and error handling.

        Args:
        ----
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional request parameters

        Returns:
        -------
            requests.Response: Response object

        Raises:
        ------
            requests.RequestException: If request fails

        """
        self._check_rate_limit()

        if not url.startswith(("http://", "https://")):
            url = urljoin(self.base_url, url.lstrip("/"))

        logger.debug("Making %s request to %s", method, url)

        try:
            response = self.session.request(method, url, **kwargs)

            self._update_rate_limit(response)

            if response.status_code == 403 and "rate limit" in response.text.lower():
                logger.warning("Rate limit exceeded")
                with self._throttle_lock:
                    self.rate_limit_remaining = 0
                self._check_rate_limit()
                response = self.session.request(method, url, **kwargs)
                self._update_rate_limit(response)

            response.raise_for_status()

            return response

        except requests.RequestException:
            logger.exception("Request failed: %s %s", method, url)
            raise

    def _get_paginated_results(self, url: str, params: dict | None = None) -> list[dict]:
        """Get all results from paginated endpoint.

        Args:
        ----
            url: API endpoint URL
            params: Query parameters

        Returns:
        -------
            List of all results

        """
        all_results = []
        page = 1
        per_page = 100  # Maximum allowed by GitHub

        while True:
            request_params = params.copy() if params else {}
            request_params.update({
                "page": page,
                "per_page": per_page,
            })

            response = self._make_request("GET", url, params=request_params)
            results = response.json()

            if not results:
                break

            all_results.extend(results)

            if len(results) < per_page:
                break

            page += 1

        return all_results

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> dict:
        """Get a single pull request.

        Args:
        ----
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
        -------
            Pull request dictionary

        """
        url = f"/repos/{owner}/{repo}/pulls/{pr_number}"

        response = self._make_request("GET", url)
        return response.json()

    def get_pull_request_commits(self, owner: str, repo: str, pr_number: int) -> list[dict]:
        """Get commits of a pull request."""
        url = f"/repos/{owner}/{repo}/pulls/{pr_number}/commits"

        return self._get_paginated_results(url)

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> list[dict]:
        """Get files changed in a pull request.

        Args:
        ----
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
        -------
            List of file dictionaries

        """
        url = f"/repos/{owner}/{repo}/pulls/{pr_number}/files"

        return self._get_paginated_results(url)

    def search_issues(self, query: str) -> list[dict]:
        """Search issues and pull requests.

        Only the first page of results is returned.

        Args:
        ----
            query: GitHub search query

        Returns:
        -------
            List of matching issue/pull request items

        """
        response = self._make_request("GET", "/search/issues", params={"q": query, "per_page": 100})
        return response.json().get("items") or []

    def get_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[dict]:
        """Get issue comments for a pull request (treated as issue).

        Args:
        ----
            owner: Repository owner
            repo: Repository name
            issue_number: Issue/PR number

        Returns:
        -------
            List of issue comment dictionaries

        """
        url = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"

        return self._get_paginated_results(url)

    def create_issue_comment(self, owner: str, repo: str, issue_number: int, body: str) -> dict:
        """Post a comment on an issue or pull request."""
        url = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"

        response = self._make_request("POST", url, json={"body": body})
        return response.json()

    def update_issue_comment(self, owner: str, repo: str, comment_id: int, body: str) -> dict:
        """Replace the body of an existing issue comment."""
        url = f"/repos/{owner}/{repo}/issues/comments/{comment_id}"

        response = self._make_request("PATCH", url, json={"body": body})
        return response.json()

    def get_rate_limit_status(self) -> dict:
        """Get current rate limit status.

        Returns
        -------
            Rate limit status dictionary

        """
        response = self._make_request("GET", "/rate_limit")
        return response.json()

    def test_connection(self) -> bool:
        """Test connection to GitHub API.

        Returns
        -------
            True if connection is successful, False otherwise

        """
        try:
            response = self._make_request("GET", "/rate_limit")
            return response.status_code == 200
        except requests.RequestException:
            logger.exception("Connection test failed")
            return False
