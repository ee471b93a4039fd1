"""Repository registry models."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class RepositoryKind(Enum):
    """How a repository's files are obtained."""

    VERSIONED = "git"
    LOCAL = "local"


@dataclass(frozen=True)
class RepositoryMetadata:
    """Optional descriptive data about a repository.

    Read from ``.tprompts-repo.json`` at the repository root. Used for display only.
    """

    name: str | None = None
    description: str | None = None
    author: str | None = None
    version: str | None = None
    homepage: str | None = None
    default_editor: str | None = None
    categories: tuple[str, ...] = ()
    temporary: bool = False
    original_url: str | None = None

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "RepositoryMetadata":
        categories = data.get("categories") or []
        return RepositoryMetadata(
            name=data.get("name"),
            description=data.get("description"),
            author=data.get("author"),
            version=data.get("version"),
            homepage=data.get("homepage"),
            default_editor=data.get("defaultEditor"),
            categories=tuple(str(c) for c in categories),
            temporary=bool(data.get("temporary", False)),
            original_url=data.get("originalUrl"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.description is not None:
            data["description"] = self.description
        if self.author is not None:
            data["author"] = self.author
        if self.version is not None:
            data["version"] = self.version
        if self.homepage is not None:
            data["homepage"] = self.homepage
        if self.default_editor is not None:
            data["defaultEditor"] = self.default_editor
        if self.categories:
            data["categories"] = list(self.categories)
        if self.temporary:
            data["temporary"] = True
        if self.original_url is not None:
            data["originalUrl"] = self.original_url
        return data


@dataclass(frozen=True)
class RepositoryRecord:
    """A registered prompt repository.

    For LOCAL repositories ``origin`` and ``local_path`` are the same directory.
    For VERSIONED repositories ``local_path`` is the managed checkout.
    """

    name: str
    origin: str
    kind: RepositoryKind
    local_path: Path | None = None
    last_updated_at: str | None = None
    current_version: str | None = None
    requested_version: str | None = None
    metadata: RepositoryMetadata | None = None

    @property
    def is_versioned(self) -> bool:
        return self.kind is RepositoryKind.VERSIONED

    def working_path(self) -> Path | None:
        """Directory holding the repository's prompts."""
        if self.local_path is not None:
            return self.local_path
        if self.kind is RepositoryKind.LOCAL:
            return Path(self.origin)
        return None

    @staticmethod
    def from_dict(name: str, data: Any) -> "RepositoryRecord":
        """Build a record from its registry file entry.

        Raises:
            ValueError: If the entry is not an object, has no url, or has an unknown type
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        origin = data.get("url")
        if not isinstance(origin, str) or not origin:
            raise ValueError("missing 'url'")
        kind = RepositoryKind(data.get("type", RepositoryKind.VERSIONED.value))
        raw_path = data.get("path")
        if raw_path is not None and not isinstance(raw_path, str):
            raise ValueError("'path' must be a string")
        if raw_path is None and kind is RepositoryKind.LOCAL:
            raw_path = origin
        metadata_data = data.get("metadata")
        return RepositoryRecord(
            name=data.get("name", name),
            origin=origin,
            kind=kind,
            local_path=Path(raw_path) if raw_path else None,
            last_updated_at=data.get("lastUpdated"),
            current_version=data.get("currentVersion"),
            requested_version=data.get("requestedVersion"),
            metadata=(
                RepositoryMetadata.from_dict(metadata_data)
                if isinstance(metadata_data, dict) and metadata_data
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "url": self.origin,
            "type": self.kind.value,
        }
        if self.local_path is not None:
            data["path"] = str(self.local_path)
        if self.last_updated_at is not None:
            data["lastUpdated"] = self.last_updated_at
        if self.current_version is not None:
            data["currentVersion"] = self.current_version
        if self.requested_version is not None:
            data["requestedVersion"] = self.requested_version
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data


@dataclass(frozen=True)
class RegistryState:
    """Snapshot of the persisted repository registry.

    ``repositories`` preserves insertion order. If ``default_repository`` is set
    it names a key of ``repositories``.
    """

    repositories: dict[str, RepositoryRecord] = field(default_factory=dict)
    default_repository: str | None = None

    def with_repository(self, record: RepositoryRecord) -> "RegistryState":
        """Return new state with the record inserted or replaced."""
        return replace(self, repositories={**self.repositories, record.name: record})

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "RegistryState":
        """Build a snapshot from the registry file document.

        Entries that cannot be read are skipped with a warning.
        """
        raw_repositories = data.get("repositories") or {}
        if not isinstance(raw_repositories, dict):
            logger.warning("Ignoring registry repositories: expected an object")
            raw_repositories = {}

        repositories: dict[str, RepositoryRecord] = {}
        for name, record_data in raw_repositories.items():
            try:
                repositories[name] = RepositoryRecord.from_dict(name, record_data)
            except ValueError as e:
                logger.warning("Skipping invalid registry entry '%s': %s", name, e)

        default = data.get("defaultRepository")
        if default not in repositories:
            default = None
        return RegistryState(repositories=repositories, default_repository=default)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "repositories": {name: rec.to_dict() for name, rec in self.repositories.items()}
        }
        if self.default_repository is not None:
            data["defaultRepository"] = self.default_repository
        return data
