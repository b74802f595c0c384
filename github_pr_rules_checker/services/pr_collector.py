"""Collection of pull request metadata from GitHub."""

from ..github.client import GitHubAPIClient
from ..models import FileChangeSet, PRSnapshot
from ..utils import get_logger

logger = get_logger(__name__)


class PullRequestCollector:
    """Service fetching the data the rule checks need for one pull request."""

    def __init__(self, github_client: GitHubAPIClient | None = None) -> None:
        """Initialize pull request collector.

        Args:
        ----
            github_client: GitHub API client, a default one is created if omitted

        """
        self.github_client = github_client or GitHubAPIClient()

    def collect(self, owner: str, repo: str, pr_number: int) -> tuple[PRSnapshot, FileChangeSet]:
        """Collect snapshot and changed files of a pull request.

        Args:
        ----
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
        -------
            Pull request snapshot and its file change set

        Raises:
        ------
            requests.RequestException: If any GitHub call fails

        """
        logger.info("Collecting data for %s/%s#%d", owner, repo, pr_number)

        pr_data = self.github_client.get_pull_request(owner, repo, pr_number)
        commits_data = self.github_client.get_pull_request_commits(owner, repo, pr_number)
        files_data = self.github_client.get_pull_request_files(owner, repo, pr_number)

        snapshot = PRSnapshot.from_github_data(pr_data, commits_data, owner, repo)
        files = FileChangeSet.from_github_files(files_data)

        logger.info(
            "Collected PR #%d: %d commit(s), %d created, %d modified, %d deleted file(s)",
            pr_number,
            len(snapshot.commits),
            len(files.created),
            len(files.modified),
            len(files.deleted),
        )
        return snapshot, files
