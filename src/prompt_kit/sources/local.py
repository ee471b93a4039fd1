"""Local directory repository source."""

from pathlib import Path

from prompt_kit.errors import NotFoundError
from prompt_kit.models import RepositoryKind
from prompt_kit.sources.abc import RepositorySource, validate_repository_structure


class LocalRepositorySource(RepositorySource):
    """Use a directory on disk in place. Nothing is copied."""

    kind = RepositoryKind.LOCAL

    def validate(self, path: Path) -> None:
        """Validate a local repository directory.

        Raises:
            NotFoundError: If the path does not exist or is not a directory
            NoPromptsFoundError: If the directory holds no prompts
        """
        resolved = path.expanduser().resolve()
        if not resolved.exists():
            raise NotFoundError(f"Local path does not exist: {resolved}")
        if not resolved.is_dir():
            raise NotFoundError(f"Path is not a directory: {resolved}")
        validate_repository_structure(resolved)

    def materialize(self, name: str, origin: str, version: str | None = None) -> Path:
        """Validate ``origin`` and return it as the working directory."""
        path = Path(origin).expanduser().resolve()
        self.validate(path)
        return path
