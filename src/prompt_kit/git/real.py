"""Production Git implementation using subprocess.

Every command runs with a timeout from prompt_kit.git.abc so a slow or hung
remote turns into a GitTimeoutError instead of blocking the CLI.
"""

import subprocess
from pathlib import Path

from prompt_kit.errors import RemoteUnreachableError, SubprocessFailedError
from prompt_kit.git.abc import (
    CHECKOUT_TIMEOUT,
    CLONE_TIMEOUT,
    CONNECT_TIMEOUT,
    FETCH_TIMEOUT,
    QUERY_TIMEOUT,
    Git,
)
from prompt_kit.subprocess_utils import run_subprocess_with_context

# stderr fragments git prints when a remote is missing or unreachable
_UNREACHABLE_MARKERS = (
    "not found",
    "does not exist",
    "could not resolve host",
    "could not read from remote",
    "unable to access",
    "authentication failed",
)


def _looks_unreachable(error: SubprocessFailedError) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in _UNREACHABLE_MARKERS)


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def check_remote(self, url: str) -> None:
        try:
            run_subprocess_with_context(
                ["git", "ls-remote", url],
                operation_context=f"reach remote '{url}'",
                timeout=CONNECT_TIMEOUT,
            )
        except SubprocessFailedError as e:
            raise RemoteUnreachableError(url, str(e)) from e

    def clone(self, url: str, destination: Path) -> None:
        try:
            run_subprocess_with_context(
                ["git", "clone", url, str(destination)],
                operation_context=f"clone '{url}'",
                timeout=CLONE_TIMEOUT,
            )
        except SubprocessFailedError as e:
            if _looks_unreachable(e):
                raise RemoteUnreachableError(url, str(e)) from e
            raise

    def fetch_all(self, repo_path: Path) -> None:
        run_subprocess_with_context(
            ["git", "fetch", "--all", "--tags"],
            operation_context="fetch remote references",
            timeout=FETCH_TIMEOUT,
            cwd=repo_path,
        )

    def pull(self, repo_path: Path) -> None:
        run_subprocess_with_context(
            ["git", "pull", "origin"],
            operation_context="pull from origin",
            timeout=FETCH_TIMEOUT,
            cwd=repo_path,
        )

    def ref_exists(self, repo_path: Path, ref: str) -> bool:
        for candidate in (ref, f"origin/{ref}"):
            result = run_subprocess_with_context(
                ["git", "rev-parse", "--verify", "--quiet", f"{candidate}^{{commit}}"],
                operation_context=f"resolve '{candidate}'",
                timeout=QUERY_TIMEOUT,
                cwd=repo_path,
                check=False,
            )
            if result.returncode == 0:
                return True
        return False

    def checkout(self, repo_path: Path, ref: str) -> None:
        run_subprocess_with_context(
            ["git", "checkout", ref],
            operation_context=f"checkout '{ref}'",
            timeout=CHECKOUT_TIMEOUT,
            cwd=repo_path,
        )

    def get_current_branch(self, repo_path: Path) -> str | None:
        result = run_subprocess_with_context(
            ["git", "branch", "--show-current"],
            operation_context="get current branch",
            timeout=QUERY_TIMEOUT,
            cwd=repo_path,
        )
        branch = result.stdout.strip()
        if not branch:
            return None
        return branch

    def get_head_commit(self, repo_path: Path) -> str:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "HEAD"],
            operation_context="get HEAD commit",
            timeout=QUERY_TIMEOUT,
            cwd=repo_path,
        )
        return result.stdout.strip()

    def list_remote_branches(self, repo_path: Path) -> list[str]:
        result = run_subprocess_with_context(
            ["git", "branch", "-r", "--format=%(refname:short)"],
            operation_context="list remote branches",
            timeout=QUERY_TIMEOUT,
            cwd=repo_path,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def list_tags(self, repo_path: Path) -> list[str]:
        result = run_subprocess_with_context(
            ["git", "tag", "--sort=-version:refname"],
            operation_context="list tags",
            timeout=QUERY_TIMEOUT,
            cwd=repo_path,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def is_git_available() -> bool:
    """Check whether a git binary can be executed."""
    try:
        subprocess.run(
            ["git", "--version"], capture_output=True, check=True, timeout=QUERY_TIMEOUT
        )
    except (OSError, subprocess.SubprocessError):
        return False
    return True
