"""Tests for URL parsing and ephemeral URL checkouts."""

from pathlib import Path

import pytest

from prompt_kit.clock import FakeClock
from prompt_kit.errors import (
    GitTimeoutError,
    InvalidIdentifierError,
    PromptNotFoundError,
    RemoteUnreachableError,
    VersionNotFoundError,
)
from prompt_kit.git import FakeGit
from prompt_kit.identifiers import parse_prompt_identifier
from prompt_kit.models import RepositoryKind
from prompt_kit.sources import UrlRepositorySource, parse_git_url
from tests.test_utils.prompt_repos import REMOTE_URL, review_prompt_files

TREE_URL = "https://github.com/acme/team-prompts/tree/v1.0.0/code-review"


def _leftover_dirs(tmp_root: Path) -> list[Path]:
    return list(tmp_root.iterdir())


@pytest.mark.parametrize(
    ("url", "clone_url", "repo_name", "ref"),
    [
        (TREE_URL, REMOTE_URL, "team-prompts", "v1.0.0"),
        ("https://github.com/acme/team-prompts/code-review", REMOTE_URL, "team-prompts", None),
        ("https://github.com/acme/team-prompts.git/code-review", REMOTE_URL, "team-prompts", None),
        (
            "https://git.example.com/group/sub/prompts.git/review",
            "https://git.example.com/group/sub/prompts.git",
            "prompts",
            None,
        ),
        (
            "https://github.com/acme/prompts/tree/main/hooks.git",
            "https://github.com/acme/prompts.git",
            "prompts",
            "main",
        ),
    ],
)
def test_parse_git_url(url: str, clone_url: str, repo_name: str, ref: str | None) -> None:
    parsed = parse_git_url(url)

    assert parsed is not None
    assert parsed.clone_url == clone_url
    assert parsed.repo_name == repo_name
    assert parsed.ref == ref


@pytest.mark.parametrize("url", ["https://github.com/acme", "not a url", "https://x.com/.git/p"])
def test_parse_git_url_rejects_unusable_urls(url: str) -> None:
    assert parse_git_url(url) is None


def test_fetch_returns_transient_record(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()}, tags=["v1.0.0"])
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    checkout = source.fetch(TREE_URL, "code-review")

    assert checkout.record.name == "url-team-prompts"
    assert checkout.record.kind is RepositoryKind.VERSIONED
    assert checkout.record.origin == REMOTE_URL
    assert checkout.record.current_version == "v1.0.0"
    assert checkout.record.metadata is not None
    assert checkout.record.metadata.temporary is True
    assert checkout.record.metadata.original_url == TREE_URL
    assert (checkout.prompt_dir / "tprompts.json").is_file()
    assert checkout.temp_dir.parent == tmp_path
    assert git.checkout_calls == [(tmp_path / checkout.temp_dir.name / "team-prompts", "v1.0.0")]

    checkout.cleanup()
    checkout.cleanup()
    assert _leftover_dirs(tmp_path) == []


def test_context_manager_cleans_up(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()})
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with source.fetch("https://github.com/acme/team-prompts/code-review", "code-review") as checkout:
        assert checkout.prompt_dir.is_dir()

    assert _leftover_dirs(tmp_path) == []


def test_explicit_version_overrides_embedded_ref(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()}, tags=["v1.0.0", "v2.0.0"])
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with source.fetch(TREE_URL, "code-review", version="v2.0.0") as checkout:
        assert checkout.record.current_version == "v2.0.0"
        assert [ref for _, ref in git.checkout_calls] == ["v2.0.0"]


def test_missing_prompt_cleans_up(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()})
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with pytest.raises(PromptNotFoundError):
        source.fetch("https://github.com/acme/team-prompts/nope", "nope")

    assert _leftover_dirs(tmp_path) == []


def test_unknown_ref_cleans_up(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()})
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with pytest.raises(VersionNotFoundError):
        source.fetch(TREE_URL, "code-review")

    assert _leftover_dirs(tmp_path) == []


def test_clone_timeout_cleans_up(tmp_path: Path) -> None:
    git = FakeGit(remotes={REMOTE_URL: review_prompt_files()}, timeout_operations={"clone"})
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with pytest.raises(GitTimeoutError):
        source.fetch(TREE_URL, "code-review")

    assert _leftover_dirs(tmp_path) == []


def test_unreachable_remote_cleans_up(tmp_path: Path) -> None:
    source = UrlRepositorySource(FakeGit(), FakeClock(), tmp_root=tmp_path)

    with pytest.raises(RemoteUnreachableError):
        source.fetch(TREE_URL, "code-review")

    assert _leftover_dirs(tmp_path) == []


def test_unparseable_url_raises_before_creating_anything(tmp_path: Path) -> None:
    source = UrlRepositorySource(FakeGit(), FakeClock(), tmp_root=tmp_path)

    with pytest.raises(InvalidIdentifierError):
        source.fetch("https://github.com/acme", "code-review")

    assert _leftover_dirs(tmp_path) == []


def test_git_suffix_after_ref_belongs_to_the_prompt(tmp_path: Path) -> None:
    url = "https://github.com/acme/team-prompts/tree/main/hooks.git"
    files = {"hooks.git/tprompts.json": '{"name": "hooks", "editors": {}}'}
    git = FakeGit(remotes={REMOTE_URL: files})
    source = UrlRepositorySource(git, FakeClock(), tmp_root=tmp_path)

    with source.fetch(url, parse_prompt_identifier(url).prompt) as checkout:
        assert checkout.record.origin == REMOTE_URL
        assert checkout.prompt_dir.name == "hooks.git"
