"""Review run: collect pull request data, evaluate rules, publish feedback."""

import asyncio
from dataclasses import dataclass, field

from ..config import RuleConfig
from ..github.client import GitHubAPIClient
from ..github.lookup import GitHubPullRequestLookup
from ..models import Finding
from ..rules import RuleEvaluator
from ..utils import get_logger
from .feedback import CommentFeedbackSink, dispatch_findings
from .pr_collector import PullRequestCollector

logger = get_logger(__name__)


@dataclass
class ReviewResult:
    """Outcome of a review run."""

    owner: str
    repo: str
    number: int
    findings: list[Finding] = field(default_factory=list)
    body: str = ""
    comment: dict | None = None

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.is_warning)


class ReviewRunner:
    """Service reviewing one pull request end to end."""

    def __init__(self, config: RuleConfig, github_client: GitHubAPIClient | None = None) -> None:
        self.config = config
        self.github_client = github_client or GitHubAPIClient()
        self.collector = PullRequestCollector(self.github_client)
        self.evaluator = RuleEvaluator(config)

    async def review(self, owner: str, repo: str, number: int, publish: bool = True) -> ReviewResult:
        """Review a pull request.

        Args:
        ----
            owner: Repository owner
            repo: Repository name
            number: Pull request number
            publish: Post the rendered comment on the pull request

        Returns:
        -------
            Findings, rendered comment body and the posted comment, if any

        Raises:
        ------
            requests.RequestException: If collecting or publishing fails

        """
        snapshot, files = await asyncio.to_thread(self.collector.collect, owner, repo, number)
        lookup = GitHubPullRequestLookup(self.github_client)

        findings = await self.evaluator.evaluate(snapshot, files, lookup)

        sink = CommentFeedbackSink()
        dispatch_findings(findings, sink)
        result = ReviewResult(owner=owner, repo=repo, number=number, findings=findings, body=sink.render())

        if publish:
            result.comment = await asyncio.to_thread(sink.publish, self.github_client, owner, repo, number)
        else:
            logger.info("Dry run, not publishing review comment for %s/%s#%d", owner, repo, number)

        return result
