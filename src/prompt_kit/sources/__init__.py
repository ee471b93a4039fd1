from pathlib import Path

from prompt_kit.git.abc import Git
from prompt_kit.models import RepositoryKind
from prompt_kit.sources.abc import (
    RepositorySource,
    has_prompt_directories,
    validate_repository_structure,
)
from prompt_kit.sources.local import LocalRepositorySource
from prompt_kit.sources.naming import (
    detect_repository_kind,
    is_git_source,
    repository_name_from_source,
)
from prompt_kit.sources.url import EphemeralCheckout, UrlRepositorySource, parse_git_url
from prompt_kit.sources.versioned import VersionedRepositorySource, VersionListing


def source_for_kind(kind: RepositoryKind, git: Git, repositories_dir: Path) -> RepositorySource:
    """Pick the source strategy for a repository kind."""
    if kind is RepositoryKind.VERSIONED:
        return VersionedRepositorySource(git, repositories_dir)
    return LocalRepositorySource()


__all__ = [
    "EphemeralCheckout",
    "LocalRepositorySource",
    "RepositorySource",
    "UrlRepositorySource",
    "VersionListing",
    "VersionedRepositorySource",
    "detect_repository_kind",
    "has_prompt_directories",
    "is_git_source",
    "parse_git_url",
    "repository_name_from_source",
    "source_for_kind",
    "validate_repository_structure",
]
