"""Release branch to mainline linkage check.

A pull request to a ``release/*`` branch must reference issue keys that
already have an open or merged pull request to the mainline branch.
"""

import asyncio
from collections.abc import Iterable
from functools import reduce

from github_pr_rules_checker.config import RuleConfig
from github_pr_rules_checker.github.lookup import PullRequestLookup
from github_pr_rules_checker.models import Finding, LookupResult, MainlinePR, MainlinePRLink
from github_pr_rules_checker.rules.checks import find_issue_keys, is_release_branch
from github_pr_rules_checker.rules.markdown import link, section, table
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)

SEARCH_STATES = ("open", "closed")
NOT_FOUND = "—"


def unique_issue_keys(title: str, config: RuleConfig) -> list[str]:
    """Issue keys of ``title`` without duplicates, in order of first appearance."""
    return list(dict.fromkeys(find_issue_keys(title, config)))


def build_search_query(key: str, owner: str, repo: str, base: str, state: str) -> str:
    return f'"{key}" repo:{owner}/{repo} is:pr base:{base} is:{state}'


def unique_numbers(items: Iterable[dict]) -> list[int]:
    """Pull request numbers of search ``items``, de-duplicated, skipping items without one."""
    return list(dict.fromkeys(item["number"] for item in items if isinstance(item, dict) and item.get("number")))


class ReleaseLinkageCheck:
    """Cross-references issue keys of a release pull request against mainline pull requests."""

    def __init__(self, config: RuleConfig, lookup: PullRequestLookup) -> None:
        self.config = config
        self.lookup = lookup

    async def _search(self, query: str) -> list[dict]:
        try:
            return await self.lookup.search(query)
        except Exception as e:
            logger.warning("Search failed for query %s: %s", query, e)
            return []

    async def _fetch(self, owner: str, repo: str, number: int) -> LookupResult[MainlinePR]:
        try:
            detail = await self.lookup.fetch_pull_request(owner, repo, number)
            if detail.get("base_ref") != self.config.mainline_branch:
                return LookupResult(value=None)
            return LookupResult(value=MainlinePR.from_pull_detail(number, detail))
        except Exception as e:
            logger.debug("Skipping PR #%d: %s", number, e)
            return LookupResult(error=e)

    @staticmethod
    def _collect(found: list[MainlinePR], result: LookupResult[MainlinePR]) -> list[MainlinePR]:
        """Fold step keeping successful lookups of linked pull requests."""
        if result.ok and result.value is not None and result.value.is_linked:
            return [*found, result.value]
        return found

    async def find_mainline_prs(self, key: str, owner: str, repo: str) -> MainlinePRLink:
        """Find open or merged mainline pull requests mentioning ``key``."""
        items: list[dict] = []
        for state in SEARCH_STATES:
            query = build_search_query(key, owner, repo, self.config.mainline_branch, state)
            items.extend(await self._search(query))

        results = [await self._fetch(owner, repo, number) for number in unique_numbers(items)]
        linked = reduce(self._collect, results, [])

        logger.debug("Issue %s: %d mainline PR(s) linked", key, len(linked))
        return MainlinePRLink(issue_key=key, pull_requests=tuple(linked))

    def _render_row(self, link_result: MainlinePRLink) -> tuple[str, str, str]:
        jira_link = link(link_result.issue_key, self.config.issue_url(link_result.issue_key))
        if not link_result.found:
            return (jira_link, NOT_FOUND, "not found")

        prs = ", ".join(f"{link(f'#{pr.number}', pr.html_url)} ({pr.status.value})" for pr in link_result.pull_requests)
        return (jira_link, prs, "ok")

    def _missing_warning(self, key: str) -> Finding:
        jira_link = link(key, self.config.issue_url(key))
        return Finding.warning(
            f"No PR to **{self.config.mainline_branch}** found for Jira issue {jira_link}. "
            "Please create (or reference) a mainline PR for this change, or ensure it has already been merged.",
        )

    async def run(self, base_branch: str, title: str, owner: str, repo: str) -> list[Finding]:
        """Run the check.

        Args:
        ----
            base_branch: Target branch of the pull request
            title: Pull request title
            owner: Repository owner
            repo: Repository name

        Returns:
        -------
            Warnings for keys without a mainline pull request, followed by
            one Markdown table summarising every key

        """
        if not is_release_branch(base_branch, self.config):
            return []

        keys = unique_issue_keys(title, self.config)
        if not keys:
            return [no_issue_key_warning(base_branch, self.config)]

        links = await asyncio.gather(*(self.find_mainline_prs(key, owner, repo) for key in keys))

        findings = [self._missing_warning(item.issue_key) for item in links if not item.found]
        rows = [self._render_row(item) for item in links]
        if rows:
            findings.append(
                Finding.info(
                    section(
                        f"Release → {self.config.mainline_branch.capitalize()} linkage check",
                        table(["Jira issue", f"PRs to {self.config.mainline_branch} (open/merged)", "Status"], rows),
                    ),
                ),
            )
        return findings


def no_issue_key_warning(base_branch: str, config: RuleConfig) -> Finding:
    return Finding.warning(
        f"This PR targets **{base_branch}**, but its title does not include a Jira issue key "
        f"(expected format: {config.issue_key_prefix}-XXXX).",
    )


async def check_release_linkage(
    base_branch: str,
    title: str,
    owner: str,
    repo: str,
    lookup: PullRequestLookup | None,
    config: RuleConfig,
) -> list[Finding]:
    """Release to mainline linkage check.

    Without a ``lookup`` only the missing issue key warning can be produced.
    """
    if lookup is None:
        if not is_release_branch(base_branch, config):
            return []
        if not unique_issue_keys(title, config):
            return [no_issue_key_warning(base_branch, config)]
        logger.warning("No pull request lookup available, skipping release linkage lookups")
        return []

    return await ReleaseLinkageCheck(config, lookup).run(base_branch, title, owner, repo)
