"""Classify repository sources given on the command line and name them."""

import re
from pathlib import Path

from prompt_kit.models import RepositoryKind

_GIT_HOSTS = ("github.com", "gitlab.com")
_URL_NAME_PATTERN = re.compile(r"([^/:]+?)(?:\.git)?/*$")


def is_git_source(source: str) -> bool:
    """Whether ``source`` points at a git remote rather than a local directory."""
    return (
        source.startswith(("http://", "https://", "git@", "ssh://", "git://"))
        or any(host in source for host in _GIT_HOSTS)
        or source.endswith(".git")
    )


def detect_repository_kind(source: str) -> RepositoryKind:
    return RepositoryKind.VERSIONED if is_git_source(source) else RepositoryKind.LOCAL


def repository_name_from_source(source: str) -> str:
    """Derive a registry name from a URL or path.

    Examples:
        https://github.com/acme/team-prompts.git -> team-prompts
        git@github.com:acme/team-prompts.git      -> team-prompts
        ~/work/my-prompts/                        -> my-prompts
    """
    if is_git_source(source):
        match = _URL_NAME_PATTERN.search(source)
        if match:
            return match.group(1)
    return Path(source).expanduser().resolve().name
