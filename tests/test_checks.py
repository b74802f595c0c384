"""Unit tests for synchronous convention checks."""

from github_pr_rules_checker.config import RuleConfig
from github_pr_rules_checker.models import Commit, FileChangeSet, FindingKind
from github_pr_rules_checker.rules import checks


class TestIssueKeyInTitle:
    """Test issue key title check."""

    def setup_method(self) -> None:
        self.config = RuleConfig()

    def test_no_key(self) -> None:
        findings = checks.check_issue_key_in_title("Fix crash on startup", self.config)

        assert len(findings) == 1
        assert findings[0].kind == FindingKind.WARNING
        assert "exactly one Jira issue key" in findings[0].text
        assert "MPT-XXXX" in findings[0].text

    def test_multiple_keys(self) -> None:
        findings = checks.check_issue_key_in_title("MPT-1 and MPT-22 together", self.config)

        assert len(findings) == 1
        assert findings[0].kind == FindingKind.WARNING
        assert "MPT-1, MPT-22" in findings[0].text

    def test_same_key_twice_counts_as_multiple(self) -> None:
        findings = checks.check_issue_key_in_title("MPT-7 revert MPT-7", self.config)

        assert findings[0].kind == FindingKind.WARNING

    def test_single_key(self) -> None:
        findings = checks.check_issue_key_in_title("[HF] MPT-1234 Fix crash", self.config)

        assert len(findings) == 1
        assert findings[0].kind == FindingKind.INFO
        assert "[MPT-1234](https://softwareone.atlassian.net/browse/MPT-1234)" in findings[0].text

    def test_key_must_be_whole_word(self) -> None:
        findings = checks.check_issue_key_in_title("XMPT-12 something", self.config)

        assert findings[0].kind == FindingKind.WARNING

    def test_custom_prefix(self) -> None:
        config = RuleConfig(issue_key_prefix="ABC", tracker_base_url="https://jira.example.com/browse/")

        findings = checks.check_issue_key_in_title("ABC-9 Add feature", config)

        assert findings[0].kind == FindingKind.INFO
        assert "https://jira.example.com/browse/ABC-9" in findings[0].text


class TestDiffSize:
    """Test diff size check."""

    def test_under_threshold(self) -> None:
        assert checks.check_diff_size(300, 300, 4, RuleConfig()) == []

    def test_over_threshold(self) -> None:
        findings = checks.check_diff_size(500, 101, 7, RuleConfig())

        assert len(findings) == 1
        assert findings[0].kind == FindingKind.WARNING
        assert "**601**" in findings[0].text
        assert "**7** files" in findings[0].text
        assert "threshold: 600" in findings[0].text

    def test_configured_threshold(self) -> None:
        assert len(checks.check_diff_size(60, 0, 1, RuleConfig(diff_line_threshold=50))) == 1


class TestCommitCount:
    """Test commit count check."""

    def test_single_commit(self) -> None:
        assert checks.check_commit_count([Commit(sha="abc", message="one")]) == []

    def test_no_commits(self) -> None:
        assert checks.check_commit_count([]) == []

    def test_multiple_commits(self) -> None:
        commits = [Commit(sha=str(i), message=f"commit {i}") for i in range(3)]

        findings = checks.check_commit_count(commits)

        assert len(findings) == 1
        assert "**3 commits**" in findings[0].text
        assert "squash" in findings[0].text
        assert "1. One commit is a technical refactoring" in findings[0].text
        assert "2. You are doing a complex multi-step refactoring" in findings[0].text


class TestReleaseTag:
    """Test release branch tag check."""

    def test_non_release_branch(self) -> None:
        assert checks.check_release_tag("main", "MPT-1 no tag", RuleConfig()) == []

    def test_release_branch_with_tag(self) -> None:
        assert checks.check_release_tag("release/2.0", "[HF] MPT-1 fix", RuleConfig()) == []
        assert checks.check_release_tag("release/2.0", "[backport] MPT-1 fix", RuleConfig()) == []

    def test_release_branch_without_tag(self) -> None:
        findings = checks.check_release_tag("release/2.0", "MPT-1 fix", RuleConfig())

        assert len(findings) == 1
        assert "**release/2.0**" in findings[0].text
        assert "`[HF] MPT-1234 Fix crash on startup`" in findings[0].text


class TestTestsChanged:
    """Test tests presence check."""

    def test_code_without_tests(self) -> None:
        files = FileChangeSet(modified=("pkg/a.py", "pkg/b.py"), created=("README.md",))

        findings = checks.check_tests_changed(files, RuleConfig())

        assert len(findings) == 1
        assert "(3 file(s))" in findings[0].text

    def test_code_with_tests(self) -> None:
        files = FileChangeSet(modified=("pkg/a.py",), deleted=("tests/test_a.py",))

        assert checks.check_tests_changed(files, RuleConfig()) == []

    def test_only_tests(self) -> None:
        assert checks.check_tests_changed(FileChangeSet(created=("tests/test_a.py",)), RuleConfig()) == []

    def test_no_files(self) -> None:
        assert checks.check_tests_changed(FileChangeSet(), RuleConfig()) == []


class TestMergeCommits:
    """Test merge commit check."""

    def test_parent_count(self) -> None:
        commit = Commit(sha="0123456789abcdef", message="Merge branch 'x'", parent_count=2)

        findings = checks.check_merge_commits([commit])

        assert len(findings) == 1
        assert "- 0123456 — Merge branch 'x'" in findings[0].text
        assert "1 merge commit(s)" in findings[0].text

    def test_parent_count_alone_is_enough(self) -> None:
        assert checks.is_merge_commit(Commit(sha="abc", message="Sync", parent_count=2))

    def test_message_alone_is_enough(self) -> None:
        assert checks.is_merge_commit(Commit(sha="abc", message="merge main into feature", parent_count=1))

    def test_message_word_boundary(self) -> None:
        assert not checks.is_merge_commit(Commit(sha="abc", message="Mergeable check", parent_count=1))

    def test_only_first_line_counts(self) -> None:
        assert not checks.is_merge_commit(Commit(sha="abc", message="Fix bug\nmerge later", parent_count=1))

    def test_placeholders(self) -> None:
        findings = checks.check_merge_commits([Commit(parent_count=2)])

        assert "- ??????? — (no message)" in findings[0].text

    def test_clean_history(self) -> None:
        assert checks.check_merge_commits([Commit(sha="abc", message="MPT-1 fix", parent_count=1)]) == []


class TestTestsMirroring:
    """Test new file test mirroring check."""

    def test_expected_test_path(self) -> None:
        assert checks.expected_test_path("pkg/mod/util.py") == "tests/mod/test_util.py"
        assert checks.expected_test_path("pkg/util.py") == "tests/test_util.py"
        assert checks.expected_test_path("util.py") == "tests/test_util.py"

    def test_missing_mirrored_test(self) -> None:
        created = ["pkg/mod/util.py", "tests/mod/test_other.py"]

        assert checks.find_missing_mirrored_tests(created, RuleConfig()) == [
            ("pkg/mod/util.py", "tests/mod/test_util.py"),
        ]

        findings = checks.check_tests_mirroring(created, RuleConfig())

        assert [f.kind for f in findings] == [FindingKind.WARNING, FindingKind.INFO]
        assert "### Tests mirroring check (created files only)" in findings[1].text
        assert "| `pkg/mod/util.py` | `tests/mod/test_util.py` |" in findings[1].text

    def test_mirrored_test_present(self) -> None:
        created = ["pkg/mod/util.py", "tests/mod/test_util.py"]

        assert checks.check_tests_mirroring(created, RuleConfig()) == []

    def test_ignores_init_and_non_python(self) -> None:
        created = ["pkg/mod/__init__.py", "pkg/data.json", "docs/readme.md"]

        assert checks.check_tests_mirroring(created, RuleConfig()) == []

    def test_init_test_file_does_not_count(self) -> None:
        created = ["pkg/__init__.py", "tests/__init__.py"]

        assert checks.check_tests_mirroring(created, RuleConfig()) == []
