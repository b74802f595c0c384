"""Unit tests for configuration."""

import json

import pytest

from github_pr_rules_checker.config import DEFAULT_RULES_FILE, RuleConfig, Settings, get_rule_config, get_settings
from github_pr_rules_checker.exceptions import RuleFileError


class TestSettings:
    """Test application settings."""

    def test_loaded_from_environment(self) -> None:
        settings = get_settings()

        assert settings.github_token == "test_github_token_123"
        assert settings.github_request_delay == 0
        assert settings.log_level == "DEBUG"
        assert settings.rules_file == DEFAULT_RULES_FILE

    def test_explicit_values(self) -> None:
        settings = Settings(github_token="abc", port=9000)

        assert settings.github_token == "abc"
        assert settings.port == 9000

    def test_request_delay_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_REQUEST_DELAY", "0.25")

        assert Settings().github_request_delay == 0.25


class TestRuleConfig:
    """Test rule configuration."""

    def test_packaged_rule_file_matches_defaults(self) -> None:
        assert RuleConfig.from_file(DEFAULT_RULES_FILE) == RuleConfig()
        assert get_rule_config() == RuleConfig()

    def test_issue_key_pattern(self) -> None:
        pattern = RuleConfig(issue_key_prefix="A.B").issue_key_pattern

        assert pattern.findall("A.B-1 AxB-2") == ["A.B-1"]

    def test_issue_url(self) -> None:
        config = RuleConfig(tracker_base_url="https://jira.example.com/browse/")

        assert config.issue_url("MPT-1") == "https://jira.example.com/browse/MPT-1"

    def test_load_custom_file(self, tmp_path) -> None:
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(json.dumps({"issue_key_prefix": "ABC", "diff_line_threshold": 100}))

        config = get_rule_config(rules_file)

        assert config.issue_key_prefix == "ABC"
        assert config.diff_line_threshold == 100
        assert config.mainline_branch == "main"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(RuleFileError, match="not found"):
            RuleConfig.from_file(tmp_path / "missing.json")

    def test_unknown_key(self, tmp_path) -> None:
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(json.dumps({"unknown": 1}))

        with pytest.raises(RuleFileError, match="Invalid rule file"):
            RuleConfig.from_file(rules_file)

    def test_invalid_json(self, tmp_path) -> None:
        rules_file = tmp_path / "rules.json"
        rules_file.write_text("{not json")

        with pytest.raises(RuleFileError):
            RuleConfig.from_file(rules_file)
