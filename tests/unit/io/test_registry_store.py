"""Tests for FilesystemRegistryStore."""

import json
import threading
from pathlib import Path

import pytest

from prompt_kit.errors import DuplicateRepositoryError
from prompt_kit.io.registry_store import FilesystemRegistryStore
from prompt_kit.models import RegistryState, RepositoryKind, RepositoryMetadata, RepositoryRecord
from prompt_kit.registry import add_repository, set_default_repository


def _versioned(name: str, path: Path) -> RepositoryRecord:
    return RepositoryRecord(
        name=name,
        origin=f"https://github.com/acme/{name}.git",
        kind=RepositoryKind.VERSIONED,
        local_path=path,
        last_updated_at="2024-01-01T00:00:00+00:00",
        current_version="main",
        metadata=RepositoryMetadata(description="Shared prompts", categories=("review",)),
    )


def test_missing_file_loads_empty_state(tmp_path: Path) -> None:
    store = FilesystemRegistryStore(tmp_path / "repos.json")

    assert store.load() == RegistryState()


def test_invalid_json_loads_empty_state(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"
    registry_path.write_text("{not json", encoding="utf-8")

    assert FilesystemRegistryStore(registry_path).load() == RegistryState()


def test_round_trip_uses_registry_file_keys(tmp_path: Path) -> None:
    registry_path = tmp_path / "config" / "repos.json"
    store = FilesystemRegistryStore(registry_path)
    record = _versioned("team", tmp_path / "repositories" / "team")

    store.update(lambda s: set_default_repository(add_repository(s, record), "team"))

    data = json.loads(registry_path.read_text(encoding="utf-8"))
    assert data["defaultRepository"] == "team"
    entry = data["repositories"]["team"]
    assert entry["url"] == "https://github.com/acme/team.git"
    assert entry["type"] == "git"
    assert entry["path"] == str(tmp_path / "repositories" / "team")
    assert entry["lastUpdated"] == "2024-01-01T00:00:00+00:00"
    assert entry["currentVersion"] == "main"
    assert entry["metadata"] == {"description": "Shared prompts", "categories": ["review"]}

    loaded = store.load()
    assert loaded.repositories["team"] == record
    assert loaded.default_repository == "team"


def test_reads_registry_written_without_path_for_local(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"
    registry_path.write_text(
        json.dumps(
            {
                "repositories": {
                    "mine": {"name": "mine", "url": "/work/prompts", "type": "local"}
                },
                "defaultRepository": "missing",
            }
        ),
        encoding="utf-8",
    )

    state = FilesystemRegistryStore(registry_path).load()

    assert state.repositories["mine"].local_path == Path("/work/prompts")
    assert state.default_repository is None


def test_failed_transform_leaves_file_untouched(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"
    store = FilesystemRegistryStore(registry_path)
    record = _versioned("team", tmp_path / "team")
    store.update(lambda s: add_repository(s, record))
    before = registry_path.read_text(encoding="utf-8")

    with pytest.raises(DuplicateRepositoryError):
        store.update(lambda s: add_repository(s, record))

    assert registry_path.read_text(encoding="utf-8") == before


def test_update_leaves_no_temporary_files(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"
    store = FilesystemRegistryStore(registry_path)

    store.update(lambda s: add_repository(s, _versioned("team", tmp_path / "team")))

    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["repos.json", "repos.json.lock"]


@pytest.mark.parametrize(
    "entry",
    [
        {"type": "local", "path": "/prompts/team"},
        "oops",
        {"url": "https://github.com/acme/team.git", "type": "svn"},
    ],
)
def test_unreadable_entry_is_skipped(
    tmp_path: Path, entry: object, caplog: pytest.LogCaptureFixture
) -> None:
    registry_path = tmp_path / "repos.json"
    good = _versioned("good", tmp_path / "good")
    registry_path.write_text(
        json.dumps(
            {
                "repositories": {"team": entry, "good": good.to_dict()},
                "defaultRepository": "team",
            }
        ),
        encoding="utf-8",
    )

    state = FilesystemRegistryStore(registry_path).load()

    assert list(state.repositories) == ["good"]
    assert state.default_repository is None
    assert "Skipping invalid registry entry 'team'" in caplog.text


def test_non_object_repositories_table_loads_empty_state(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"
    registry_path.write_text(json.dumps({"repositories": ["team"]}), encoding="utf-8")

    assert FilesystemRegistryStore(registry_path).load() == RegistryState()


def test_concurrent_updates_are_serialized(tmp_path: Path) -> None:
    registry_path = tmp_path / "repos.json"

    def register_many(prefix: str) -> None:
        store = FilesystemRegistryStore(registry_path)
        for index in range(20):
            record = _versioned(f"{prefix}-{index}", tmp_path / prefix / str(index))
            store.update(lambda state, record=record: add_repository(state, record))

    workers = [threading.Thread(target=register_many, args=(name,)) for name in ("a", "b")]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    state = FilesystemRegistryStore(registry_path).load()
    assert len(state.repositories) == 40
