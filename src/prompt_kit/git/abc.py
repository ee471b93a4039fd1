"""High-level git operations interface.

This module provides a narrow abstraction over git subprocess calls, making
the source managers testable without a git binary or network access.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess with timeouts
- FakeGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path

# Seconds allowed per kind of git operation
CONNECT_TIMEOUT = 30.0
CLONE_TIMEOUT = 120.0
FETCH_TIMEOUT = 60.0
CHECKOUT_TIMEOUT = 30.0
QUERY_TIMEOUT = 30.0


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    Failures surface as GitTimeoutError, RemoteUnreachableError or
    SubprocessFailedError.
    """

    @abstractmethod
    def check_remote(self, url: str) -> None:
        """Verify that a remote repository is reachable.

        Raises:
            RemoteUnreachableError: If the remote cannot be listed
        """
        ...

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """Clone ``url`` into ``destination``.

        Raises:
            RemoteUnreachableError: If the remote does not exist or cannot be reached
        """
        ...

    @abstractmethod
    def fetch_all(self, repo_path: Path) -> None:
        """Fetch all remotes including tags."""
        ...

    @abstractmethod
    def pull(self, repo_path: Path) -> None:
        """Pull the current branch from origin."""
        ...

    @abstractmethod
    def ref_exists(self, repo_path: Path, ref: str) -> bool:
        """Check whether a branch, remote branch, tag or commit resolves."""
        ...

    @abstractmethod
    def checkout(self, repo_path: Path, ref: str) -> None:
        """Switch the working tree to ``ref``."""
        ...

    @abstractmethod
    def get_current_branch(self, repo_path: Path) -> str | None:
        """Get the checked-out branch, or None when HEAD is detached."""
        ...

    @abstractmethod
    def get_head_commit(self, repo_path: Path) -> str:
        """Get the full commit SHA of HEAD."""
        ...

    @abstractmethod
    def list_remote_branches(self, repo_path: Path) -> list[str]:
        """List remote branch names with remote prefix (e.g. 'origin/main')."""
        ...

    @abstractmethod
    def list_tags(self, repo_path: Path) -> list[str]:
        """List tags sorted newest-first by version ordering."""
        ...
