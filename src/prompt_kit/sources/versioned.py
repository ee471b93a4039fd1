"""Git-backed repository source.

Checkouts live in a managed directory keyed by repository name. A failed
clone or initial checkout removes the partially created directory so no
corrupt repository is left behind for the registry to point at.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from prompt_kit.errors import PromptKitError, VersionNotFoundError
from prompt_kit.git.abc import Git
from prompt_kit.models import RepositoryKind, RepositoryRecord
from prompt_kit.sources.abc import RepositorySource, validate_repository_structure

logger = logging.getLogger(__name__)

SHORT_COMMIT_LENGTH = 7


@dataclass(frozen=True)
class VersionListing:
    """Branches and tags available for checkout."""

    branches: list[str]
    tags: list[str]


def strip_remote_prefix(ref: str) -> str | None:
    """Turn 'origin/feature' into 'feature'.

    Returns None for symbolic remote HEAD entries, which are not branches.
    """
    if "->" in ref:
        return None
    _, sep, branch = ref.partition("/")
    if not sep:
        # `git branch -r --format` shortens refs/remotes/origin/HEAD to 'origin'
        return None
    if branch == "HEAD":
        return None
    return branch


class VersionedRepositorySource(RepositorySource):
    """Clone, update and switch versions of remote repositories."""

    kind = RepositoryKind.VERSIONED

    def __init__(self, git: Git, repositories_dir: Path) -> None:
        self._git = git
        self._repositories_dir = repositories_dir

    def checkout_path(self, name: str) -> Path:
        return self._repositories_dir / name

    def validate(self, path: Path) -> None:
        validate_repository_structure(path)

    def materialize(self, name: str, origin: str, version: str | None = None) -> Path:
        """Clone ``origin`` into the managed directory for ``name``.

        A stale directory from an earlier registration is replaced.

        Raises:
            RemoteUnreachableError: If the remote cannot be reached
            GitTimeoutError: If a git operation exceeds its time limit
            VersionNotFoundError: If ``version`` does not resolve
            NoPromptsFoundError: If the clone holds no prompts
        """
        repo_path = self.checkout_path(name)
        self._repositories_dir.mkdir(parents=True, exist_ok=True)
        if repo_path.exists():
            logger.debug("Removing stale checkout at %s", repo_path)
            shutil.rmtree(repo_path)

        logger.debug("Validating git repository %s", origin)
        self._git.check_remote(origin)

        try:
            logger.debug("Cloning %s into %s", origin, repo_path)
            self._git.clone(origin, repo_path)
            if version is not None:
                self._checkout(repo_path, version, name)
            self.validate(repo_path)
        except Exception:
            _remove_quietly(repo_path)
            raise

        return repo_path

    def update(self, record: RepositoryRecord) -> None:
        """Pull the latest changes for a registered repository.

        A detached HEAD (pinned tag or commit) has nothing to pull into, so
        refs are only fetched.
        """
        repo_path = self.resolve_working_path(record)
        if self._git.get_current_branch(repo_path) is None:
            logger.debug("Fetching %s in %s (detached HEAD)", record.name, repo_path)
            self._git.fetch_all(repo_path)
            return
        logger.debug("Pulling %s in %s", record.name, repo_path)
        self._git.pull(repo_path)

    def checkout_version(self, record: RepositoryRecord, version: str) -> str:
        """Fetch all refs and switch the working tree to ``version``.

        Returns:
            The version now reported by current_version()

        Raises:
            VersionNotFoundError: If ``version`` does not resolve after fetching
        """
        repo_path = self.resolve_working_path(record)
        self._checkout(repo_path, version, record.name)
        return self.current_version(record)

    def current_version(self, record: RepositoryRecord) -> str:
        """Active branch name, or a short commit id when HEAD is detached."""
        repo_path = self.resolve_working_path(record)
        branch = self._git.get_current_branch(repo_path)
        if branch:
            return branch
        return self._git.get_head_commit(repo_path)[:SHORT_COMMIT_LENGTH]

    def list_versions(self, record: RepositoryRecord) -> VersionListing:
        """Remote branches (without remote prefix) and tags, newest tag first."""
        repo_path = self.resolve_working_path(record)
        self._git.fetch_all(repo_path)

        branches: list[str] = []
        for ref in self._git.list_remote_branches(repo_path):
            branch = strip_remote_prefix(ref)
            if branch is not None and branch not in branches:
                branches.append(branch)

        return VersionListing(branches=branches, tags=self._git.list_tags(repo_path))

    def remove_checkout(self, record: RepositoryRecord) -> bool:
        """Delete the managed checkout of a repository.

        Returns:
            True if a directory was deleted
        """
        path = record.working_path()
        if path is None or not path.exists():
            return False
        if not path.resolve().is_relative_to(self._repositories_dir.resolve()):
            raise PromptKitError(
                f"Refusing to delete {path}: not inside {self._repositories_dir}"
            )
        shutil.rmtree(path)
        return True

    def _checkout(self, repo_path: Path, version: str, repository: str) -> None:
        logger.debug("Checking out %s in %s", version, repo_path)
        self._git.fetch_all(repo_path)
        if not self._git.ref_exists(repo_path, version):
            raise VersionNotFoundError(version, repository)
        self._git.checkout(repo_path, version)


def _remove_quietly(path: Path) -> None:
    try:
        if path.exists():
            shutil.rmtree(path)
    except OSError as e:
        logger.warning("Failed to clean up %s: %s", path, e)
