"""
Data models for the GitHub PR Rules Checker
"""

from .finding import Finding, FindingKind
from .mainline import LookupResult, MainlinePR, MainlinePRLink, PullRequestStatus
from .pull_request import Commit, FileChangeSet, PRSnapshot

__all__ = [
    "Commit",
    "PRSnapshot",
    "FileChangeSet",
    "Finding",
    "FindingKind",
    "MainlinePR",
    "MainlinePRLink",
    "PullRequestStatus",
    "LookupResult",
]
