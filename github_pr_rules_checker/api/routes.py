"""FastAPI routes for the GitHub PR Rules Checker."""

from typing import Annotated, Any

import requests
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel

from github_pr_rules_checker.config import RuleConfig, get_rule_config
from github_pr_rules_checker.exceptions import RuleFileError
from github_pr_rules_checker.github.client import GitHubAPIClient
from github_pr_rules_checker.github.lookup import GitHubPullRequestLookup
from github_pr_rules_checker.models import FileChangeSet, Finding, PRSnapshot
from github_pr_rules_checker.rules import RuleEvaluator
from github_pr_rules_checker.services.review_runner import ReviewRunner
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)
router = APIRouter()


class EvaluateRequest(BaseModel):
    """Pull request data to evaluate."""

    snapshot: PRSnapshot
    files: FileChangeSet = FileChangeSet()


def get_rules() -> RuleConfig:
    """Get the active rule configuration."""
    try:
        return get_rule_config()
    except RuleFileError as e:
        logger.exception("Cannot load rule file")
        raise HTTPException(status_code=500, detail=str(e)) from e


def get_github_client() -> GitHubAPIClient:
    """Get a GitHub API client."""
    return GitHubAPIClient()


def _summary(findings: list[Finding]) -> dict[str, Any]:
    return {
        "findings": [f.model_dump(mode="json") for f in findings],
        "total": len(findings),
        "warnings": sum(1 for f in findings if f.is_warning),
    }


@router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "message": "GitHub PR Rules Checker API",
        "version": "1.0.0",
        "endpoints": {
            "rules": "/rules",
            "evaluate": "/evaluate",
            "review": "/repos/{owner}/{repo}/pulls/{number}/review",
        },
    }


@router.get("/rules")
async def get_rules_endpoint(config: Annotated[RuleConfig, Depends(get_rules)]) -> dict[str, Any]:
    """Get the active rule configuration."""
    return config.model_dump()


@router.post("/evaluate")
async def evaluate(
    payload: EvaluateRequest,
    config: Annotated[RuleConfig, Depends(get_rules)],
    client: Annotated[GitHubAPIClient, Depends(get_github_client)],
) -> dict[str, Any]:
    """Evaluate posted pull request data."""
    lookup = GitHubPullRequestLookup(client)
    findings = await RuleEvaluator(config).evaluate(payload.snapshot, payload.files, lookup)
    return _summary(findings)


@router.post("/repos/{owner}/{repo}/pulls/{number}/review")
async def review_pull_request(
    owner: Annotated[str, Path(min_length=1)],
    repo: Annotated[str, Path(min_length=1)],
    number: Annotated[int, Path(ge=1)],
    config: Annotated[RuleConfig, Depends(get_rules)],
    client: Annotated[GitHubAPIClient, Depends(get_github_client)],
    publish: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Fetch a pull request from GitHub, evaluate it and optionally comment on it."""
    try:
        result = await ReviewRunner(config, client).review(owner, repo, number, publish=publish)
    except requests.RequestException as e:
        logger.exception("Error reviewing %s/%s#%d", owner, repo, number)
        raise HTTPException(status_code=502, detail=f"GitHub request failed: {e}") from e

    return {
        **_summary(result.findings),
        "pull_request": f"{owner}/{repo}#{number}",
        "body": result.body,
        "published": result.comment is not None,
    }
