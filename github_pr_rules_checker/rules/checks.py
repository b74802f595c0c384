"""Synchronous pull request convention checks.

Every check takes already fetched pull request data and returns the list of
findings it produced; an empty list means the pull request passed.
"""

import re
from collections.abc import Iterable, Sequence

from github_pr_rules_checker.config import RuleConfig
from github_pr_rules_checker.models import Commit, FileChangeSet, Finding
from github_pr_rules_checker.rules.markdown import code, link, section, table

RELEASE_TAG_RE = re.compile(r"\[(HF|Backport)\]", re.IGNORECASE)
MERGE_MESSAGE_RE = re.compile(r"^merge\b", re.IGNORECASE)
INIT_FILE = "__init__.py"


def find_issue_keys(title: str, config: RuleConfig) -> list[str]:
    """Return all issue keys in ``title`` in order of appearance."""
    return config.issue_key_pattern.findall(title)


def check_issue_key_in_title(title: str, config: RuleConfig) -> list[Finding]:
    """Require exactly one issue key in the pull request title."""
    matches = find_issue_keys(title, config)

    if not matches:
        return [
            Finding.warning(
                f"PR title must include exactly one Jira issue key in the format {config.issue_key_prefix}-XXXX.",
            ),
        ]

    if len(matches) > 1:
        return [
            Finding.warning(
                f"PR title contains multiple Jira issue keys: {', '.join(matches)}. Please keep only one.",
            ),
        ]

    issue = matches[0]
    return [Finding.info(f"✅ Found Jira issue key in the title: {link(issue, config.issue_url(issue))}")]


def check_diff_size(additions: int, deletions: int, changed_files: int, config: RuleConfig) -> list[Finding]:
    """Warn when the pull request changes more lines than the threshold."""
    total_changed = additions + deletions

    if total_changed <= config.diff_line_threshold:
        return []

    return [
        Finding.warning(
            f"This PR changes **{total_changed}** lines across **{changed_files}** files "
            f"(threshold: {config.diff_line_threshold}). "
            "Please consider splitting it into smaller PRs for easier review.",
        ),
    ]


def check_commit_count(commits: Sequence[Commit]) -> list[Finding]:
    """Ask for a squash when the pull request has more than one commit."""
    commit_count = len(commits)

    if commit_count <= 1:
        return []

    return [
        Finding.warning(
            f"This PR contains **{commit_count} commits**.\n\n"
            "Please squash them into a single commit to keep the git history clean and easy to follow.\n\n"
            "Multiple commits are acceptable only in the following cases:\n"
            "1. One commit is a technical refactoring, and another introduces business logic changes.\n"
            "2. You are doing a complex multi-step refactoring "
            "(although in this case we still recommend splitting it into separate PRs).",
        ),
    ]


def is_release_branch(base_branch: str, config: RuleConfig) -> bool:
    return base_branch.startswith(config.release_branch_prefix)


def check_release_tag(base_branch: str, title: str, config: RuleConfig) -> list[Finding]:
    """Require ``[HF]`` or ``[Backport]`` in titles of release branch pull requests."""
    if not is_release_branch(base_branch, config) or RELEASE_TAG_RE.search(title):
        return []

    example_key = f"{config.issue_key_prefix}-1234"
    return [
        Finding.warning(
            f"PRs targeting a release branch (**{base_branch}**) must include [HF] or [Backport] in the title.\n\n"
            f"Example: `[HF] {example_key} Fix crash on startup` "
            f"or `[Backport] {example_key} Update dependency versions`.",
        ),
    ]


def partition_paths(paths: Iterable[str], prefix: str) -> tuple[list[str], list[str]]:
    """Split ``paths`` into those under ``prefix`` and the rest."""
    inside: list[str] = []
    outside: list[str] = []
    for path in paths:
        (inside if path.startswith(prefix) else outside).append(path)
    return inside, outside


def check_tests_changed(files: FileChangeSet, config: RuleConfig) -> list[Finding]:
    """Warn when code changes come without any change under the tests folder."""
    test_changes, code_changes = partition_paths(files.all_paths(), config.tests_prefix)

    if not code_changes or test_changes:
        return []

    return [
        Finding.warning(
            f"This PR modifies code ({len(code_changes)} file(s)) but does not include any changes "
            f"in the **{config.tests_prefix}** folder.\n\n"
            "Please consider adding or updating tests to cover your changes.",
        ),
    ]


def is_merge_commit(commit: Commit) -> bool:
    """A commit with several parents or a message starting with "merge"."""
    return commit.parent_count > 1 or MERGE_MESSAGE_RE.match(commit.message) is not None


def check_merge_commits(commits: Sequence[Commit]) -> list[Finding]:
    """Warn about merge commits in the pull request history."""
    merge_commits = [c for c in commits if is_merge_commit(c)]

    if not merge_commits:
        return []

    listing = "\n".join(f"- {c.short_sha} — {c.first_line}" for c in merge_commits)
    return [
        Finding.warning(
            f"This PR contains {len(merge_commits)} merge commit(s).\n"
            "Please use `git pull --rebase` to keep a clean, linear history.\n\n"
            f"Offending commits:\n{listing}",
        ),
    ]


def _is_python_module(path: str) -> bool:
    return path.endswith(".py") and not path.endswith(INIT_FILE)


def expected_test_path(code_path: str, tests_prefix: str = "tests/") -> str:
    """Mirror a source path into the tests folder.

    The first directory is treated as the package root and dropped, e.g.
    ``pkg/mod/util.py`` maps to ``tests/mod/test_util.py``.
    """
    parts = code_path.split("/")
    subdirs = "/".join(parts[1:-1])
    return tests_prefix + (f"{subdirs}/" if subdirs else "") + f"test_{parts[-1]}"


def find_missing_mirrored_tests(created: Iterable[str], config: RuleConfig) -> list[tuple[str, str]]:
    """Return ``(source path, expected test path)`` for new modules without a new test."""
    created = list(created)
    added_tests = {p for p in created if p.startswith(config.tests_prefix) and _is_python_module(p)}
    added_code = [p for p in created if not p.startswith(config.tests_prefix) and _is_python_module(p)]

    mismatches = []
    for code_path in added_code:
        test_path = expected_test_path(code_path, config.tests_prefix)
        if test_path not in added_tests:
            mismatches.append((code_path, test_path))
    return mismatches


def check_tests_mirroring(created: Iterable[str], config: RuleConfig) -> list[Finding]:
    """Require a ``test_`` module with mirrored structure for every new source module."""
    mismatches = find_missing_mirrored_tests(created, config)

    if not mismatches:
        return []

    rows = [(code(source), code(test)) for source, test in mismatches]
    return [
        Finding.warning(
            f"Some newly added source files do not have corresponding tests in the {code(config.tests_prefix)} "
            "folder with matching structure and the `test_` prefix.",
        ),
        Finding.info(
            section(
                "Tests mirroring check (created files only)",
                table(["Added source file", "Expected test (added in this PR)"], rows),
            ),
        ),
    ]
