"""Tests for classifying and naming repository sources."""

from pathlib import Path

import pytest

from prompt_kit.models import RepositoryKind
from prompt_kit.sources import detect_repository_kind, repository_name_from_source


@pytest.mark.parametrize(
    "source",
    [
        "https://github.com/acme/team-prompts.git",
        "https://example.com/acme/team-prompts",
        "git@github.com:acme/team-prompts.git",
        "github.com/acme/team-prompts",
        "/srv/mirrors/team-prompts.git",
    ],
)
def test_git_sources_are_versioned(source: str) -> None:
    assert detect_repository_kind(source) is RepositoryKind.VERSIONED


@pytest.mark.parametrize("source", ["./prompts", "/work/prompts", "~/prompts"])
def test_paths_are_local(source: str) -> None:
    assert detect_repository_kind(source) is RepositoryKind.LOCAL


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("https://github.com/acme/team-prompts.git", "team-prompts"),
        ("https://github.com/acme/team-prompts/", "team-prompts"),
        ("git@github.com:acme/team-prompts.git", "team-prompts"),
        ("git@gitlab.com:solo.git", "solo"),
    ],
)
def test_name_from_url(source: str, expected: str) -> None:
    assert repository_name_from_source(source) == expected


def test_name_from_local_path(tmp_path: Path) -> None:
    repo = tmp_path / "my-prompts"
    repo.mkdir()

    assert repository_name_from_source(f"{repo}/") == "my-prompts"
