"""CI action launcher.

Makes sure the review command is installed, then runs it against the
packaged rule file with the action token and exits with its exit code.
"""

import os
import shutil
import subprocess
import sys
from pathlib import Path

from github_pr_rules_checker.config import DEFAULT_RULES_FILE
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)

ACTION_ROOT = Path(__file__).resolve().parent.parent
REVIEW_COMMAND = "github-pr-rules"
TOKEN_ENV = "INPUT_TOKEN"


def find_review_binary() -> str | None:
    """Locate the review command next to the interpreter or on PATH."""
    scripts_dir = Path(sys.executable).parent
    for name in (REVIEW_COMMAND, f"{REVIEW_COMMAND}.exe"):
        candidate = scripts_dir / name
        if candidate.exists():
            return str(candidate)
    return shutil.which(REVIEW_COMMAND)


def run(cmd: list[str], **kwargs) -> int:
    """Run a command with inherited stdio and return its exit code."""
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(cmd, check=False, **kwargs).returncode


def ensure_action_deps(action_root: Path = ACTION_ROOT) -> int:
    """Install the action package when the review command is missing.

    Returns
    -------
        0 when the command is available, otherwise a non-zero exit code

    """
    if find_review_binary():
        return 0

    if not (action_root / "pyproject.toml").is_file():
        logger.error("Action pyproject.toml not found in %s, cannot install the review command", action_root)
        return 1

    logger.info("Installing action dependencies (pip install in action folder)...")
    code = run(
        [sys.executable, "-m", "pip", "install", "--no-input", "--disable-pip-version-check", str(action_root)],
        cwd=action_root,
    )
    if code != 0:
        logger.error("Failed to install action dependencies")
    return code


def main(rules_file: Path = DEFAULT_RULES_FILE) -> int:
    """Launch the review and return the exit code to use."""
    token = os.environ.get(TOKEN_ENV)
    if not token:
        logger.error("%s is required (with pull-requests: write)", TOKEN_ENV)
        return 1

    code = ensure_action_deps()
    if code != 0:
        return code

    if not rules_file.is_file():
        logger.error("Rule file not found at: %s", rules_file)
        return 1

    binary = find_review_binary()
    if not binary:
        logger.error("Review command %s not found", REVIEW_COMMAND)
        return 1

    workspace = os.environ.get("GITHUB_WORKSPACE") or os.getcwd()
    logger.info("Running review with rule file %s", rules_file)
    code = run(
        [binary, "review", "--rules", str(rules_file)],
        cwd=workspace,
        env={**os.environ, "GITHUB_TOKEN": token},
    )

    if code != 0:
        logger.error("Review exited with code %d", code)
        return code

    logger.info("Review completed successfully")
    return 0


def entrypoint() -> None:
    try:
        code = main()
    except Exception:
        logger.exception("Unhandled error")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    entrypoint()
