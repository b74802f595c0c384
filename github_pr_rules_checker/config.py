"""Application and rule configuration management."""

import re
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_pr_rules_checker.exceptions import RuleFileError

DEFAULT_RULES_FILE = Path(__file__).parent / "rules.json"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # GitHub API Configuration
    github_token: str = ""
    github_api_base_url: str = "https://api.github.com"

    # Application Configuration
    app_name: str = "GitHub PR Rules Checker"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # API Configuration
    api_prefix: str = "/api/v1"

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Review Configuration
    rules_file: Path = DEFAULT_RULES_FILE

    # GitHub client throttling
    github_request_delay: float = 0.1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class RuleConfig(BaseModel):
    """Team conventions the evaluator checks pull requests against.

    Built once by the caller and handed to the evaluator, so the checks
    never read process environment themselves.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    issue_key_prefix: str = "MPT"
    tracker_base_url: str = "https://softwareone.atlassian.net/browse"
    diff_line_threshold: int = Field(600, ge=0)
    mainline_branch: str = "main"
    release_branch_prefix: str = "release/"
    tests_prefix: str = "tests/"

    @property
    def issue_key_pattern(self) -> re.Pattern[str]:
        """Regex matching issue keys such as ``MPT-1234``."""
        return re.compile(rf"\b{re.escape(self.issue_key_prefix)}-\d+\b")

    def issue_url(self, key: str) -> str:
        """Build the issue tracker URL for ``key``."""
        return f"{self.tracker_base_url.rstrip('/')}/{key}"

    @classmethod
    def from_file(cls, path: str | Path) -> "RuleConfig":
        """Load rule configuration from a JSON rule-definition file.

        Args:
        ----
            path: Path to the rule file

        Returns:
        -------
            Parsed rule configuration

        Raises:
        ------
            RuleFileError: If the file is missing or invalid

        """
        rules_path = Path(path)
        if not rules_path.is_file():
            msg = f"Rule file not found: {rules_path}"
            raise RuleFileError(msg)

        try:
            return cls.model_validate_json(rules_path.read_text(encoding="utf-8"))
        except ValidationError as e:
            msg = f"Invalid rule file {rules_path}: {e}"
            raise RuleFileError(msg) from e


def get_rule_config(path: str | Path | None = None) -> RuleConfig:
    """Load the rule configuration from ``path`` or the configured rule file."""
    return RuleConfig.from_file(path or get_settings().rules_file)
