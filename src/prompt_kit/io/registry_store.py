"""Persistence for the repository registry.

Architecture:
- RegistryStore: Abstract interface returning immutable RegistryState snapshots
- FilesystemRegistryStore: JSON document under the user config directory
- InMemoryRegistryStore: Test implementation that never touches the filesystem
"""

import json
import logging
import os
import sys
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from prompt_kit.models import RegistryState

logger = logging.getLogger(__name__)

RegistryTransform = Callable[[RegistryState], RegistryState]

if sys.platform == "win32":
    import msvcrt

    def _lock_exclusive(lock: IO[str]) -> None:
        lock.seek(0)
        msvcrt.locking(lock.fileno(), msvcrt.LK_LOCK, 1)

    def _unlock(lock: IO[str]) -> None:
        lock.seek(0)
        msvcrt.locking(lock.fileno(), msvcrt.LK_UNLCK, 1)

else:
    import fcntl

    def _lock_exclusive(lock: IO[str]) -> None:
        fcntl.flock(lock.fileno(), fcntl.LOCK_EX)

    def _unlock(lock: IO[str]) -> None:
        fcntl.flock(lock.fileno(), fcntl.LOCK_UN)


class RegistryStore(ABC):
    """Abstract interface for registry persistence.

    The store is the single source of truth. Nothing is cached between calls:
    every read loads a fresh snapshot and every mutation goes through update().
    """

    @abstractmethod
    def load(self) -> RegistryState:
        """Load the current registry snapshot.

        Returns an empty state when nothing has been persisted yet.
        """
        ...

    @abstractmethod
    def save(self, state: RegistryState) -> None:
        """Persist a full registry snapshot, replacing the previous one."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Location of the persisted registry (for messages and debugging)."""
        ...

    def update(self, transform: RegistryTransform) -> RegistryState:
        """Apply a pure transform to the current state and persist the result.

        Args:
            transform: Function from old state to new state. May raise to abort
                the update, in which case nothing is saved.

        Returns:
            The state that was saved
        """
        new_state = transform(self.load())
        self.save(new_state)
        return new_state


class FilesystemRegistryStore(RegistryStore):
    """Production store backed by a JSON file.

    Read-modify-write cycles hold an exclusive lock on a sibling ``.lock`` file
    and writes go through a temporary file that replaces the target, so
    concurrent invocations cannot interleave updates or observe a partial file.
    """

    def __init__(self, registry_path: Path) -> None:
        self._registry_path = registry_path

    def path(self) -> Path:
        return self._registry_path

    def load(self) -> RegistryState:
        if not self._registry_path.exists():
            return RegistryState()

        try:
            data = json.loads(self._registry_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(
                "Invalid repository registry at %s, using empty registry: %s",
                self._registry_path,
                e,
            )
            return RegistryState()

        if not isinstance(data, dict):
            logger.warning(
                "Invalid repository registry at %s, using empty registry", self._registry_path
            )
            return RegistryState()

        return RegistryState.from_dict(data)

    def save(self, state: RegistryState) -> None:
        parent = self._registry_path.parent
        parent.mkdir(parents=True, exist_ok=True)

        content = json.dumps(state.to_dict(), indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._registry_path.name}.", suffix=".tmp", dir=parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            tmp_path.replace(self._registry_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def update(self, transform: RegistryTransform) -> RegistryState:
        with self._locked():
            return super().update(transform)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        lock_path = self._registry_path.with_name(self._registry_path.name + ".lock")
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        with open(lock_path, "w", encoding="utf-8") as lock:
            _lock_exclusive(lock)
            try:
                yield
            finally:
                _unlock(lock)


class InMemoryRegistryStore(RegistryStore):
    """Test implementation holding the registry in memory."""

    def __init__(self, state: RegistryState | None = None) -> None:
        self._state = state if state is not None else RegistryState()
        self._save_count = 0

    @property
    def save_count(self) -> int:
        """Number of save() calls made.

        This property is for test assertions only.
        """
        return self._save_count

    def load(self) -> RegistryState:
        return self._state

    def save(self, state: RegistryState) -> None:
        self._state = state
        self._save_count += 1

    def path(self) -> Path:
        return Path("/fake/prompt-kit/repos.json")
