"""Repository registry operations.

Each mutation is a pure ``(RegistryState, args) -> RegistryState`` function so
it can be tested on plain snapshots. RepositoryRegistry applies them through a
RegistryStore, which persists exactly once per operation.
"""

from dataclasses import replace
from pathlib import Path

from prompt_kit.clock import Clock
from prompt_kit.errors import DuplicateRepositoryError, RepositoryNotFoundError
from prompt_kit.io.registry_store import RegistryStore
from prompt_kit.models import (
    RegistryState,
    RepositoryKind,
    RepositoryMetadata,
    RepositoryRecord,
)


def add_repository(state: RegistryState, record: RepositoryRecord) -> RegistryState:
    """Insert a new record.

    Raises:
        DuplicateRepositoryError: If the name is already registered
    """
    if record.name in state.repositories:
        raise DuplicateRepositoryError(record.name)
    return state.with_repository(record)


def remove_repository(state: RegistryState, name: str) -> RegistryState:
    """Delete a record, clearing the default if it pointed at it.

    Raises:
        RepositoryNotFoundError: If the name is not registered
    """
    if name not in state.repositories:
        raise RepositoryNotFoundError(name)
    remaining = {k: v for k, v in state.repositories.items() if k != name}
    default = None if state.default_repository == name else state.default_repository
    return RegistryState(repositories=remaining, default_repository=default)


def set_default_repository(state: RegistryState, name: str) -> RegistryState:
    if name not in state.repositories:
        raise RepositoryNotFoundError(name)
    return replace(state, default_repository=name)


def replace_metadata(
    state: RegistryState, name: str, metadata: RepositoryMetadata | None, timestamp: str
) -> RegistryState:
    if name not in state.repositories:
        raise RepositoryNotFoundError(name)
    record = state.repositories[name]
    return state.with_repository(replace(record, metadata=metadata, last_updated_at=timestamp))


def replace_versions(
    state: RegistryState,
    name: str,
    current_version: str | None,
    requested_version: str | None,
    timestamp: str,
) -> RegistryState:
    if name not in state.repositories:
        raise RepositoryNotFoundError(name)
    record = state.repositories[name]
    updated = replace(
        record,
        current_version=current_version,
        requested_version=requested_version,
        last_updated_at=timestamp,
    )
    return state.with_repository(updated)


class RepositoryRegistry:
    """Registry of named prompt repositories."""

    def __init__(self, store: RegistryStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    def register(
        self,
        name: str,
        origin: str,
        kind: RepositoryKind,
        local_path: Path | None = None,
        version: str | None = None,
        metadata: RepositoryMetadata | None = None,
    ) -> RepositoryRecord:
        """Register a repository.

        Args:
            name: Unique repository name
            origin: Remote URL for versioned repositories, directory for local ones
            kind: Repository kind
            local_path: Working directory (defaults to ``origin`` for local repositories)
            version: Pinned branch, tag or commit
            metadata: Descriptive metadata read from the repository

        Returns:
            The stored record

        Raises:
            DuplicateRepositoryError: If ``name`` is already registered
        """
        if local_path is None and kind is RepositoryKind.LOCAL:
            local_path = Path(origin)
        record = RepositoryRecord(
            name=name,
            origin=origin,
            kind=kind,
            local_path=local_path,
            last_updated_at=self._clock.now_iso(),
            current_version=version,
            requested_version=version,
            metadata=metadata,
        )
        self._store.update(lambda state: add_repository(state, record))
        return record

    def unregister(self, name: str) -> RepositoryRecord:
        """Remove a repository and return the record that was removed."""
        record = self.get(name)
        if record is None:
            raise RepositoryNotFoundError(name)
        self._store.update(lambda state: remove_repository(state, name))
        return record

    def get(self, name: str) -> RepositoryRecord | None:
        return self._store.load().repositories.get(name)

    def require(self, name: str) -> RepositoryRecord:
        record = self.get(name)
        if record is None:
            raise RepositoryNotFoundError(name)
        return record

    def list_repositories(self) -> list[RepositoryRecord]:
        """All records in persisted order."""
        return list(self._store.load().repositories.values())

    def get_default(self) -> RepositoryRecord | None:
        state = self._store.load()
        if state.default_repository is None:
            return None
        return state.repositories.get(state.default_repository)

    def set_default(self, name: str) -> None:
        self._store.update(lambda state: set_default_repository(state, name))

    def update_metadata(self, name: str, metadata: RepositoryMetadata | None) -> RepositoryRecord:
        """Replace a record's metadata and refresh its timestamp."""
        timestamp = self._clock.now_iso()
        state = self._store.update(lambda s: replace_metadata(s, name, metadata, timestamp))
        return state.repositories[name]

    def record_version(
        self, name: str, current_version: str | None, requested_version: str | None
    ) -> RepositoryRecord:
        """Record the checked-out and requested versions after update or checkout."""
        timestamp = self._clock.now_iso()
        state = self._store.update(
            lambda s: replace_versions(s, name, current_version, requested_version, timestamp)
        )
        return state.repositories[name]
