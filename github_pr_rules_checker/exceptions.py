"""Exceptions raised while setting up a review run."""


class RulesCheckerError(Exception):
    """Base error for review setup failures."""


class RuleFileError(RulesCheckerError):
    """Raised when the rule-definition file is missing or invalid."""


class PullRequestContextError(RulesCheckerError):
    """Raised when the repository or pull request number cannot be resolved."""
