"""Models for release to mainline pull request linkage."""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class PullRequestStatus(str, Enum):
    """Status of a mainline pull request."""

    OPEN = "open"
    MERGED = "merged"
    CLOSED = "closed"


class MainlinePR(BaseModel):
    """A pull request to the mainline branch referencing an issue key."""

    model_config = ConfigDict(frozen=True)

    number: int
    html_url: str = ""
    status: PullRequestStatus
    title: str = ""

    @property
    def is_linked(self) -> bool:
        """Open and merged pull requests count as a valid link."""
        return self.status in (PullRequestStatus.OPEN, PullRequestStatus.MERGED)

    @classmethod
    def from_pull_detail(cls, number: int, detail: dict[str, Any]) -> "MainlinePR":
        """Create instance from a pull request detail returned by a lookup."""
        if detail.get("merged"):
            status = PullRequestStatus.MERGED
        elif detail.get("state") == "open":
            status = PullRequestStatus.OPEN
        else:
            status = PullRequestStatus.CLOSED

        return cls(
            number=number,
            html_url=detail.get("html_url") or "",
            status=status,
            title=detail.get("title") or "",
        )


class MainlinePRLink(BaseModel):
    """Mainline pull requests found for one issue key."""

    model_config = ConfigDict(frozen=True)

    issue_key: str
    pull_requests: tuple[MainlinePR, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.pull_requests)


class LookupResult(Generic[T]):
    """Outcome of a single remote lookup: a value or the error raised."""

    __slots__ = ("value", "error")

    def __init__(self, value: T | None = None, error: BaseException | None = None) -> None:
        self.value = value
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"<LookupResult(value={self.value!r})>"
        return f"<LookupResult(error={self.error!r})>"
