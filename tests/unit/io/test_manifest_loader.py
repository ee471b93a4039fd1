"""Tests for tprompts.json loading and prompt discovery."""

import json
from pathlib import Path

import pytest

from prompt_kit.errors import MalformedManifestError
from prompt_kit.io.manifest import discover_prompts, load_prompt_manifest, load_repository_metadata
from tests.test_utils.prompt_repos import manifest_for, write_prompt


def _write_manifest(prompt_dir: Path, content: str) -> None:
    prompt_dir.mkdir(parents=True, exist_ok=True)
    (prompt_dir / "tprompts.json").write_text(content, encoding="utf-8")


def test_missing_manifest_returns_none(tmp_path: Path) -> None:
    assert load_prompt_manifest(tmp_path) is None


def test_loads_rules_in_declared_order(tmp_path: Path) -> None:
    manifest = manifest_for(
        "review",
        {
            "cursor": {
                "b.md": {"location": ".cursor/b.md", "prefix": None},
                "a.md": {"location": ".cursor/a.md", "suffix": "\n---\n"},
            }
        },
        description="Review prompts",
        version="2.1.0",
    )
    _write_manifest(tmp_path, json.dumps(manifest))

    loaded = load_prompt_manifest(tmp_path)

    assert loaded is not None
    assert loaded.name == "review"
    assert loaded.version == "2.1.0"
    assert list(loaded.editors["cursor"]) == ["b.md", "a.md"]
    assert loaded.editors["cursor"]["b.md"].prefix is None
    assert loaded.editors["cursor"]["a.md"].suffix == "\n---\n"


def test_empty_editors_table_is_allowed(tmp_path: Path) -> None:
    _write_manifest(tmp_path, json.dumps({"name": "empty", "editors": {}}))

    loaded = load_prompt_manifest(tmp_path)

    assert loaded is not None
    assert loaded.editor_names() == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        json.dumps({"editors": {}}),
        json.dumps({"name": "x"}),
        json.dumps({"name": "x", "editors": {"cursor": {"a.md": {}}}}),
        json.dumps({"name": "x", "editors": {"cursor": {"a.md": {"location": ""}}}}),
        json.dumps({"name": "x", "editors": {"cursor": {"a.md": {"location": "  "}}}}),
        json.dumps({"name": "x", "editors": {"cursor": {"a.md": {"location": "a", "kind": "x"}}}}),
    ],
)
def test_malformed_manifests_raise(tmp_path: Path, content: str) -> None:
    _write_manifest(tmp_path, content)

    with pytest.raises(MalformedManifestError) as exc_info:
        load_prompt_manifest(tmp_path)

    assert exc_info.value.manifest_path == tmp_path / "tprompts.json"


def test_discover_prompts_skips_hidden_and_unconfigured(tmp_path: Path) -> None:
    manifest = manifest_for("p", {})
    write_prompt(tmp_path, "zeta", manifest, {})
    write_prompt(tmp_path, "alpha", manifest, {})
    write_prompt(tmp_path, ".hidden", manifest, {})
    (tmp_path / "docs").mkdir()
    (tmp_path / "README.md").write_text("readme", encoding="utf-8")

    assert discover_prompts(tmp_path) == ["alpha", "zeta"]


def test_repository_metadata_is_optional(tmp_path: Path) -> None:
    assert load_repository_metadata(tmp_path) is None

    (tmp_path / ".tprompts-repo.json").write_text(
        json.dumps({"description": "Team prompts", "author": "acme", "categories": ["review"]}),
        encoding="utf-8",
    )
    metadata = load_repository_metadata(tmp_path)

    assert metadata is not None
    assert metadata.description == "Team prompts"
    assert metadata.categories == ("review",)


def test_invalid_repository_metadata_is_ignored(tmp_path: Path) -> None:
    (tmp_path / ".tprompts-repo.json").write_text("oops", encoding="utf-8")

    assert load_repository_metadata(tmp_path) is None
