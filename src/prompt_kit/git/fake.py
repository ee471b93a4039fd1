"""Fake Git implementation for testing.

FakeGit serves clones from in-memory file trees, so source-manager tests run
without a git binary or network access.
"""

from pathlib import Path

from prompt_kit.errors import GitTimeoutError, RemoteUnreachableError, SubprocessFailedError
from prompt_kit.git.abc import CLONE_TIMEOUT, Git


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Calls are recorded for test assertions

    Examples:
        # A reachable remote with one prompt
        >>> git = FakeGit(remotes={
        ...     "https://example.com/acme/prompts.git": {
        ...         "review/tprompts.json": '{"name": "review", "editors": {}}',
        ...     }
        ... })

        # A remote whose clone times out part-way through
        >>> git = FakeGit(remotes={...}, timeout_operations={"clone"})
    """

    def __init__(
        self,
        *,
        remotes: dict[str, dict[str, str]] | None = None,
        remote_branches: list[str] | None = None,
        tags: list[str] | None = None,
        commits: list[str] | None = None,
        current_branch: str | None = "main",
        head_commit: str = "3f2c9a1b8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a",
        timeout_operations: set[str] | None = None,
        failing_operations: set[str] | None = None,
    ) -> None:
        """Initialize fake with predetermined remote contents and refs.

        Args:
            remotes: Mapping of clone URL to files (relative path -> text) that
                clone() writes into the destination
            remote_branches: Remote branch refs as git prints them (e.g. 'origin/main')
            tags: Tags in the order list_tags() returns them
            commits: Extra commit ids that resolve via ref_exists()
            current_branch: Branch reported before any checkout, None for detached HEAD
            head_commit: Commit reported by get_head_commit()
            timeout_operations: Operation names ('clone', 'fetch', 'pull', 'checkout',
                'check_remote') that raise GitTimeoutError
            failing_operations: Operation names that raise SubprocessFailedError
        """
        self._remotes = remotes or {}
        self._remote_branches = remote_branches if remote_branches is not None else ["origin/main"]
        self._tags = tags or []
        self._commits = commits or []
        self._current_branch = current_branch
        self._head_commit = head_commit
        self._timeout_operations = timeout_operations or set()
        self._failing_operations = failing_operations or set()
        self._clone_calls: list[tuple[str, Path]] = []
        self._checkout_calls: list[tuple[Path, str]] = []
        self._fetch_calls: list[Path] = []
        self._pull_calls: list[Path] = []

    def _maybe_fail(self, operation: str) -> None:
        if operation in self._timeout_operations:
            raise GitTimeoutError(operation, CLONE_TIMEOUT)
        if operation in self._failing_operations:
            raise SubprocessFailedError(f"Failed to {operation}\nExit code: 1")

    def _branch_names(self) -> list[str]:
        return [ref.split("/", 1)[1] for ref in self._remote_branches if "/" in ref]

    def check_remote(self, url: str) -> None:
        self._maybe_fail("check_remote")
        if url not in self._remotes:
            raise RemoteUnreachableError(url)

    def clone(self, url: str, destination: Path) -> None:
        self._clone_calls.append((url, destination))
        if url not in self._remotes:
            raise RemoteUnreachableError(url)

        destination.mkdir(parents=True, exist_ok=True)
        (destination / ".git").mkdir(exist_ok=True)
        # Leave a half-written checkout behind when simulating a timeout
        self._maybe_fail("clone")

        for relative, content in self._remotes[url].items():
            file_path = destination / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")

    def fetch_all(self, repo_path: Path) -> None:
        self._fetch_calls.append(repo_path)
        self._maybe_fail("fetch")

    def pull(self, repo_path: Path) -> None:
        self._pull_calls.append(repo_path)
        self._maybe_fail("pull")

    def ref_exists(self, repo_path: Path, ref: str) -> bool:
        return (
            ref in self._branch_names()
            or ref in self._remote_branches
            or ref in self._tags
            or ref in self._commits
        )

    def checkout(self, repo_path: Path, ref: str) -> None:
        self._checkout_calls.append((repo_path, ref))
        self._maybe_fail("checkout")
        if ref in self._branch_names():
            self._current_branch = ref
        else:
            self._current_branch = None

    def get_current_branch(self, repo_path: Path) -> str | None:
        return self._current_branch

    def get_head_commit(self, repo_path: Path) -> str:
        return self._head_commit

    def list_remote_branches(self, repo_path: Path) -> list[str]:
        return list(self._remote_branches)

    def list_tags(self, repo_path: Path) -> list[str]:
        return list(self._tags)

    @property
    def clone_calls(self) -> list[tuple[str, Path]]:
        """Get the list of clone() calls that were made.

        This property is for test assertions only.
        """
        return self._clone_calls.copy()

    @property
    def checkout_calls(self) -> list[tuple[Path, str]]:
        """Get the list of checkout() calls that were made.

        This property is for test assertions only.
        """
        return self._checkout_calls.copy()

    @property
    def fetch_calls(self) -> list[Path]:
        return self._fetch_calls.copy()

    @property
    def pull_calls(self) -> list[Path]:
        return self._pull_calls.copy()
