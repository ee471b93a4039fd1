"""Repository source interface and shared structural validation."""

from abc import ABC, abstractmethod
from pathlib import Path

from prompt_kit.errors import NoPromptsFoundError, NotFoundError
from prompt_kit.models import MANIFEST_FILENAME, RepositoryKind, RepositoryRecord


def has_prompt_directories(repository_path: Path) -> bool:
    """Check for at least one top-level, non-hidden directory holding a manifest."""
    for entry in repository_path.iterdir():
        if entry.name.startswith(".") or not entry.is_dir():
            continue
        if (entry / MANIFEST_FILENAME).is_file():
            return True
    return False


def validate_repository_structure(repository_path: Path) -> None:
    """Ensure a directory looks like a prompt repository.

    Raises:
        NoPromptsFoundError: If no top-level directory contains a manifest
    """
    if not has_prompt_directories(repository_path):
        raise NoPromptsFoundError(repository_path)


class RepositorySource(ABC):
    """Strategy for obtaining a repository's working directory.

    The installer only relies on resolve_working_path(); the remaining
    capabilities are used by register/update/version commands.
    """

    kind: RepositoryKind

    @abstractmethod
    def validate(self, path: Path) -> None:
        """Validate that ``path`` holds a usable prompt repository."""
        ...

    @abstractmethod
    def materialize(self, name: str, origin: str, version: str | None = None) -> Path:
        """Make the repository available locally and return its working directory.

        Args:
            name: Registry name of the repository
            origin: Remote URL or local path
            version: Optional branch, tag or commit to check out
        """
        ...

    def resolve_working_path(self, record: RepositoryRecord) -> Path:
        """Directory holding the record's prompts.

        Raises:
            NotFoundError: If the record has no working directory on disk
        """
        path = record.working_path()
        if path is None or not path.is_dir():
            raise NotFoundError(f"Repository path not found: {path}")
        return path
