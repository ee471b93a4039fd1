"""Integration tests for RealGit against throwaway local repositories."""

import subprocess
from pathlib import Path

import pytest

from prompt_kit.errors import RemoteUnreachableError
from prompt_kit.git import RealGit
from prompt_kit.git.real import is_git_available

pytestmark = pytest.mark.skipif(not is_git_available(), reason="git binary not available")

_IDENTITY = ["-c", "user.name=Test", "-c", "user.email=test@example.com"]


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(["git", *_IDENTITY, *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def origin(tmp_path: Path) -> Path:
    """A repository with one prompt, a v1.0.0 tag and a develop branch."""
    repo = tmp_path / "origin"
    repo.mkdir()
    _git(repo, "init", "--initial-branch=main")
    (repo / "review").mkdir()
    (repo / "review" / "tprompts.json").write_text('{"name": "review", "editors": {}}')
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "initial")
    _git(repo, "tag", "v1.0.0")
    _git(repo, "branch", "develop")
    return repo


def test_clone_and_inspect(origin: Path, tmp_path: Path) -> None:
    git = RealGit()
    clone = tmp_path / "clone"

    git.check_remote(str(origin))
    git.clone(str(origin), clone)

    assert (clone / "review" / "tprompts.json").is_file()
    assert git.get_current_branch(clone) == "main"
    assert len(git.get_head_commit(clone)) == 40
    assert git.list_tags(clone) == ["v1.0.0"]
    assert "origin/develop" in git.list_remote_branches(clone)


def test_checkout_tag_detaches_head(origin: Path, tmp_path: Path) -> None:
    git = RealGit()
    clone = tmp_path / "clone"
    git.clone(str(origin), clone)

    git.fetch_all(clone)
    assert git.ref_exists(clone, "v1.0.0")
    assert git.ref_exists(clone, "develop")
    assert not git.ref_exists(clone, "nope")

    git.checkout(clone, "v1.0.0")
    assert git.get_current_branch(clone) is None


def test_unreachable_remote(tmp_path: Path) -> None:
    with pytest.raises(RemoteUnreachableError):
        RealGit().check_remote(str(tmp_path / "does-not-exist"))
