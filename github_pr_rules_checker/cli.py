"""Command line entry point for running pull request reviews in CI."""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

import requests

from github_pr_rules_checker.config import get_rule_config
from github_pr_rules_checker.exceptions import PullRequestContextError, RulesCheckerError
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)


def resolve_repository(repo_arg: str | None) -> tuple[str, str]:
    """Resolve ``owner/repo`` from the argument or ``GITHUB_REPOSITORY``."""
    full_name = repo_arg or os.environ.get("GITHUB_REPOSITORY", "")
    owner, _, repo = full_name.partition("/")
    if not owner or not repo or "/" in repo:
        msg = f"Repository must be given as owner/repo, got {full_name!r}"
        raise PullRequestContextError(msg)
    return owner, repo


def resolve_pr_number(pr_arg: int | None) -> int:
    """Resolve the pull request number from the argument or the GitHub event payload."""
    if pr_arg:
        return pr_arg

    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        msg = "Pull request number not given and GITHUB_EVENT_PATH is not set"
        raise PullRequestContextError(msg)

    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        msg = f"Cannot read GitHub event payload {event_path}: {e}"
        raise PullRequestContextError(msg) from e

    number = (event.get("pull_request") or {}).get("number") or event.get("number")
    if not number:
        msg = "GitHub event payload does not describe a pull request"
        raise PullRequestContextError(msg)
    return int(number)


def run_review(args: argparse.Namespace) -> int:
    """Run the ``review`` command."""
    from github_pr_rules_checker.services.review_runner import ReviewRunner

    try:
        config = get_rule_config(args.rules)
        owner, repo = resolve_repository(args.repo)
        number = resolve_pr_number(args.pr)
    except RulesCheckerError as e:
        logger.error("%s", e)
        return 1

    try:
        result = asyncio.run(ReviewRunner(config).review(owner, repo, number, publish=not args.dry_run))
    except requests.RequestException:
        logger.exception("Review of %s/%s#%d failed", owner, repo, number)
        return 1

    if args.dry_run:
        print(result.body)

    logger.info("Review finished with %d warning(s)", result.warning_count)
    return 0


def run_serve(args: argparse.Namespace) -> int:
    """Run the ``serve`` command."""
    from github_pr_rules_checker.main import run_server

    run_server(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-pr-rules",
        description="Check pull requests against team conventions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    review = subparsers.add_parser("review", help="Review a pull request and comment on it")
    review.add_argument("--repo", help="Repository as owner/repo (default: $GITHUB_REPOSITORY)")
    review.add_argument("--pr", type=int, help="Pull request number (default: from $GITHUB_EVENT_PATH)")
    review.add_argument("--rules", help="Path to the rule-definition file")
    review.add_argument("--dry-run", action="store_true", help="Print the comment instead of posting it")
    review.set_defaults(func=run_review)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.set_defaults(func=run_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
