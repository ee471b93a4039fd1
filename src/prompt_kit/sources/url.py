"""One-shot repository checkouts for installing straight from a URL.

The checkout lives in a fresh temporary directory. Callers must release it
with EphemeralCheckout.cleanup() (or use it as a context manager) whether the
install succeeds or fails.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from urllib.parse import urlparse

from prompt_kit.clock import Clock
from prompt_kit.errors import InvalidIdentifierError, PromptNotFoundError, VersionNotFoundError
from prompt_kit.git.abc import Git
from prompt_kit.identifiers import REF_MARKERS
from prompt_kit.models import (
    MANIFEST_FILENAME,
    RepositoryKind,
    RepositoryMetadata,
    RepositoryRecord,
)

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "prompt-kit-url-"


@dataclass(frozen=True)
class GitUrl:
    """Canonical clone location derived from a browser or clone URL."""

    clone_url: str
    repo_name: str
    ref: str | None = None


def parse_git_url(url: str) -> GitUrl | None:
    """Derive a clone URL and repository name from a repository URL.

    Examples:
        https://github.com/user/repo/tree/main/prompt -> https://github.com/user/repo.git, ref main
        https://github.com/user/repo.git/prompt       -> https://github.com/user/repo.git
        https://git.example.com/team/prompts.git/x    -> https://git.example.com/team/prompts.git

    Returns None if the URL has no recognizable user/repo path.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return None

    segments = [segment for segment in parsed.path.split("/") if segment]
    base = f"{parsed.scheme}://{parsed.netloc}"

    # A .git suffix names the repository only before any tree/blob ref segment
    repo_segments = segments
    for marker_index, segment in enumerate(segments):
        if segment in REF_MARKERS:
            repo_segments = segments[:marker_index]
            break

    for index, segment in enumerate(repo_segments):
        if segment.endswith(".git"):
            repo_name = segment.removesuffix(".git")
            if not repo_name:
                return None
            clone_url = "/".join([base, *segments[: index + 1]])
            return GitUrl(
                clone_url=clone_url,
                repo_name=repo_name,
                ref=_embedded_ref(segments[index + 1 :]),
            )

    if len(segments) < 2:
        return None

    user, repo = segments[0], segments[1]
    return GitUrl(
        clone_url=f"{base}/{user}/{repo}.git",
        repo_name=repo,
        ref=_embedded_ref(segments[2:]),
    )


def _embedded_ref(rest: list[str]) -> str | None:
    if len(rest) >= 2 and rest[0] in REF_MARKERS:
        return rest[1]
    return None


@dataclass
class EphemeralCheckout:
    """A temporary clone plus the transient record describing it."""

    record: RepositoryRecord
    prompt_dir: Path
    temp_dir: Path
    _cleaned: bool = field(default=False, repr=False)

    def cleanup(self) -> None:
        """Delete the temporary directory. Safe to call more than once; never raises."""
        if self._cleaned:
            return
        self._cleaned = True
        try:
            shutil.rmtree(self.temp_dir)
        except OSError as e:
            logger.warning("Failed to clean up temporary directory %s: %s", self.temp_dir, e)

    def __enter__(self) -> "EphemeralCheckout":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()


class UrlRepositorySource:
    """Fetch a repository into a temporary directory for a single install."""

    def __init__(self, git: Git, clock: Clock, tmp_root: Path | None = None) -> None:
        self._git = git
        self._clock = clock
        self._tmp_root = tmp_root

    def fetch(self, url: str, prompt_path: str, version: str | None = None) -> EphemeralCheckout:
        """Clone ``url`` and locate ``prompt_path`` inside it.

        Args:
            url: Repository URL, optionally with an embedded ``tree/<ref>`` segment
            prompt_path: Prompt directory relative to the repository root
            version: Ref to check out; overrides a ref embedded in the URL

        Raises:
            InvalidIdentifierError: If the URL cannot be turned into a clone URL
            RemoteUnreachableError: If the remote cannot be cloned
            VersionNotFoundError: If the requested ref does not exist
            PromptNotFoundError: If the prompt or its manifest is missing
        """
        git_url = parse_git_url(url)
        if git_url is None:
            raise InvalidIdentifierError(url, "not a recognizable git repository URL")

        ref = version if version is not None else git_url.ref
        temp_dir = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=self._tmp_root))
        repo_path = temp_dir / git_url.repo_name

        try:
            logger.debug("Downloading %s into %s", git_url.clone_url, repo_path)
            self._git.clone(git_url.clone_url, repo_path)

            if ref is not None:
                if not self._git.ref_exists(repo_path, ref):
                    raise VersionNotFoundError(ref, git_url.clone_url)
                self._git.checkout(repo_path, ref)

            prompt_dir = repo_path / prompt_path
            if not prompt_dir.is_dir():
                raise PromptNotFoundError(prompt_path, git_url.clone_url)
            if not (prompt_dir / MANIFEST_FILENAME).is_file():
                raise PromptNotFoundError(
                    f"{prompt_path} (no {MANIFEST_FILENAME})", git_url.clone_url
                )
        except Exception:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise

        record = RepositoryRecord(
            name=f"url-{git_url.repo_name}",
            origin=git_url.clone_url,
            kind=RepositoryKind.VERSIONED,
            local_path=repo_path,
            last_updated_at=self._clock.now_iso(),
            current_version=ref,
            metadata=RepositoryMetadata(temporary=True, original_url=url),
        )
        return EphemeralCheckout(record=record, prompt_dir=prompt_dir, temp_dir=temp_dir)
