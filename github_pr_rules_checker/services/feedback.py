"""Feedback sinks rendering findings as pull request review comments."""

from collections.abc import Iterable
from typing import Protocol

from ..github.client import GitHubAPIClient
from ..models import Finding
from ..rules.markdown import table
from ..utils import LoggerMixin

COMMENT_MARKER = "<!-- github-pr-rules-checker -->"
ALL_PASSED = "✅ All pull request convention checks passed."


class FeedbackSink(Protocol):
    """Destination for rendered findings."""

    def emit_warning(self, text: str) -> None: ...

    def emit_markdown(self, text: str) -> None: ...


def dispatch_findings(findings: Iterable[Finding], sink: FeedbackSink) -> None:
    """Send every finding to ``sink``, warnings and Markdown separately."""
    for finding in findings:
        if finding.is_warning:
            sink.emit_warning(finding.text)
        else:
            sink.emit_markdown(finding.text)


def _table_cell(text: str) -> str:
    """Flatten multi-line text so it fits into a single table cell."""
    return text.replace("|", "\\|").replace("\n\n", "<br /><br />").replace("\n", "<br />")


class CommentFeedbackSink(LoggerMixin):
    """Collects findings and publishes them as one pull request comment.

    The comment carries a hidden marker so that later runs edit it in place
    instead of adding a new comment on every push.
    """

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.markdowns: list[str] = []

    def emit_warning(self, text: str) -> None:
        self.warnings.append(text)

    def emit_markdown(self, text: str) -> None:
        self.markdowns.append(text)

    @property
    def has_feedback(self) -> bool:
        return bool(self.warnings or self.markdowns)

    def render(self) -> str:
        """Render the comment body."""
        parts = [COMMENT_MARKER]

        if self.warnings:
            count = len(self.warnings)
            label = "Warning" if count == 1 else "Warnings"
            rows = [("⚠️", _table_cell(text)) for text in self.warnings]
            parts.append(table(["", f"{count} {label}"], rows))

        parts.extend(self.markdowns)

        if not self.has_feedback:
            parts.append(ALL_PASSED)

        return "\n\n".join(parts)

    def _find_previous_comment(self, client: GitHubAPIClient, owner: str, repo: str, number: int) -> dict | None:
        for comment in client.get_issue_comments(owner, repo, number):
            if COMMENT_MARKER in (comment.get("body") or ""):
                return comment
        return None

    def publish(self, client: GitHubAPIClient, owner: str, repo: str, number: int) -> dict | None:
        """Create or update the review comment on a pull request.

        Args:
        ----
            client: GitHub API client
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
        -------
            The created or updated comment, or None when nothing was posted

        """
        body = self.render()
        previous = self._find_previous_comment(client, owner, repo, number)

        if previous:
            self.logger.info("Updating review comment %s on %s/%s#%d", previous["id"], owner, repo, number)
            return client.update_issue_comment(owner, repo, previous["id"], body)

        if not self.has_feedback:
            self.logger.info("No findings and no previous comment on %s/%s#%d", owner, repo, number)
            return None

        self.logger.info("Creating review comment on %s/%s#%d", owner, repo, number)
        return client.create_issue_comment(owner, repo, number, body)
