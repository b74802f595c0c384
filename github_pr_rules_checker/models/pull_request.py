"""Pull request snapshot models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SHORT_SHA_LENGTH = 7
MISSING_SHA = "???????"
MISSING_MESSAGE = "(no message)"


class Commit(BaseModel):
    """A single commit of a pull request."""

    model_config = ConfigDict(frozen=True)

    sha: str = ""
    message: str = ""
    parent_count: int = Field(0, ge=0)

    @property
    def short_sha(self) -> str:
        """First seven characters of the SHA, or a placeholder."""
        return self.sha[:SHORT_SHA_LENGTH] or MISSING_SHA

    @property
    def first_line(self) -> str:
        """First line of the commit message, or a placeholder."""
        return self.message.split("\n")[0] or MISSING_MESSAGE

    @classmethod
    def from_github_data(cls, github_data: dict[str, Any]) -> "Commit":
        """Create instance from a GitHub ``/pulls/{n}/commits`` item."""
        commit = github_data.get("commit") or {}
        return cls(
            sha=github_data.get("sha") or "",
            message=commit.get("message") or "",
            parent_count=len(github_data.get("parents") or []),
        )


class PRSnapshot(BaseModel):
    """Metadata of the pull request under review."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    base_branch: str = ""
    head_branch: str = ""
    owner: str = ""
    repo: str = ""
    number: int | None = None
    additions: int = Field(0, ge=0)
    deletions: int = Field(0, ge=0)
    changed_files: int = Field(0, ge=0)
    commits: tuple[Commit, ...] = ()

    @property
    def total_changed_lines(self) -> int:
        """Sum of added and deleted lines."""
        return self.additions + self.deletions

    @classmethod
    def from_github_data(
        cls,
        pr_data: dict[str, Any],
        commits_data: list[dict[str, Any]],
        owner: str,
        repo: str,
    ) -> "PRSnapshot":
        """Create instance from GitHub pull request and commit list data.

        Args:
        ----
            pr_data: Pull request data from GitHub API
            commits_data: Commit list of the pull request
            owner: Repository owner
            repo: Repository name

        Returns:
        -------
            Pull request snapshot

        """
        return cls(
            title=pr_data.get("title") or "",
            base_branch=(pr_data.get("base") or {}).get("ref") or "",
            head_branch=(pr_data.get("head") or {}).get("ref") or "",
            owner=owner,
            repo=repo,
            number=pr_data.get("number"),
            additions=pr_data.get("additions") or 0,
            deletions=pr_data.get("deletions") or 0,
            changed_files=pr_data.get("changed_files") or 0,
            commits=tuple(Commit.from_github_data(c) for c in commits_data),
        )


class FileChangeSet(BaseModel):
    """Repository-relative paths touched by a pull request."""

    model_config = ConfigDict(frozen=True)

    created: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()

    def all_paths(self) -> tuple[str, ...]:
        """All touched paths: modified, then created, then deleted."""
        return self.modified + self.created + self.deleted

    @classmethod
    def from_github_files(cls, files_data: list[dict[str, Any]]) -> "FileChangeSet":
        """Create instance from a GitHub ``/pulls/{n}/files`` listing.

        Renamed files count as the old path deleted and the new path created.
        """
        created: list[str] = []
        modified: list[str] = []
        deleted: list[str] = []

        for file_data in files_data:
            filename = file_data.get("filename")
            if not filename:
                continue

            status = file_data.get("status")
            if status == "added":
                created.append(filename)
            elif status == "removed":
                deleted.append(filename)
            elif status == "renamed":
                previous = file_data.get("previous_filename")
                if previous:
                    deleted.append(previous)
                created.append(filename)
            else:
                modified.append(filename)

        return cls(created=tuple(created), modified=tuple(modified), deleted=tuple(deleted))
