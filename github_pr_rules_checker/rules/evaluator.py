"""Rule evaluator running every convention check against a pull request."""

import asyncio
from collections.abc import Awaitable, Callable

from github_pr_rules_checker.config import RuleConfig
from github_pr_rules_checker.github.lookup import PullRequestLookup
from github_pr_rules_checker.models import FileChangeSet, Finding, PRSnapshot
from github_pr_rules_checker.rules import checks
from github_pr_rules_checker.rules.linkage import check_release_linkage
from github_pr_rules_checker.utils import LoggerMixin

SyncCheck = Callable[[PRSnapshot, FileChangeSet], list[Finding]]


class RuleEvaluator(LoggerMixin):
    """Evaluates a pull request snapshot against the team conventions."""

    def __init__(self, config: RuleConfig | None = None) -> None:
        """Initialize rule evaluator.

        Args:
        ----
            config: Rule configuration, defaults to the built-in conventions

        """
        self.config = config or RuleConfig()

    def _sync_checks(self) -> list[tuple[str, SyncCheck]]:
        config = self.config
        return [
            ("issue_key", lambda pr, _files: checks.check_issue_key_in_title(pr.title, config)),
            (
                "diff_size",
                lambda pr, _files: checks.check_diff_size(pr.additions, pr.deletions, pr.changed_files, config),
            ),
            ("commit_count", lambda pr, _files: checks.check_commit_count(pr.commits)),
            ("release_tag", lambda pr, _files: checks.check_release_tag(pr.base_branch, pr.title, config)),
            ("tests_changed", lambda _pr, files: checks.check_tests_changed(files, config)),
        ]

    def _trailing_checks(self) -> list[tuple[str, SyncCheck]]:
        config = self.config
        return [
            ("merge_commits", lambda pr, _files: checks.check_merge_commits(pr.commits)),
            ("tests_mirroring", lambda _pr, files: checks.check_tests_mirroring(files.created, config)),
        ]

    def _run_check(self, name: str, check: SyncCheck, snapshot: PRSnapshot, files: FileChangeSet) -> list[Finding]:
        try:
            return check(snapshot, files)
        except Exception:
            self.logger.exception("Check %s failed", name)
            return []

    async def _run_async_check(self, name: str, check: Awaitable[list[Finding]]) -> list[Finding]:
        try:
            return await check
        except Exception:
            self.logger.exception("Check %s failed", name)
            return []

    async def evaluate(
        self,
        snapshot: PRSnapshot,
        files: FileChangeSet,
        lookup: PullRequestLookup | None = None,
    ) -> list[Finding]:
        """Run all checks in order.

        Args:
        ----
            snapshot: Pull request metadata
            files: Paths created, modified and deleted by the pull request
            lookup: Remote search capability for the release linkage check

        Returns:
        -------
            Findings in check execution order

        """
        self.logger.info("Evaluating PR %s/%s#%s: %s", snapshot.owner, snapshot.repo, snapshot.number, snapshot.title)

        findings: list[Finding] = []
        for name, check in self._sync_checks():
            findings.extend(self._run_check(name, check, snapshot, files))

        findings.extend(
            await self._run_async_check(
                "release_linkage",
                check_release_linkage(
                    snapshot.base_branch,
                    snapshot.title,
                    snapshot.owner,
                    snapshot.repo,
                    lookup,
                    self.config,
                ),
            ),
        )

        for name, check in self._trailing_checks():
            findings.extend(self._run_check(name, check, snapshot, files))

        warnings = sum(1 for f in findings if f.is_warning)
        self.logger.info("Evaluation finished: %d finding(s), %d warning(s)", len(findings), warnings)
        return findings

    def evaluate_sync(
        self,
        snapshot: PRSnapshot,
        files: FileChangeSet,
        lookup: PullRequestLookup | None = None,
    ) -> list[Finding]:
        """Blocking wrapper around :meth:`evaluate`."""
        return asyncio.run(self.evaluate(snapshot, files, lookup))
