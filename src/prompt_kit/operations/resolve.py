"""Turn a parsed identifier into a prompt directory and its manifest.

Every check here runs before anything in the workspace is written.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from prompt_kit.errors import EditorNotConfiguredError, NotFoundError, PromptNotFoundError
from prompt_kit.identifiers import ParsedIdentifier
from prompt_kit.io.manifest import load_prompt_manifest
from prompt_kit.models import (
    MANIFEST_FILENAME,
    FileRule,
    PromptManifest,
    RepositoryKind,
    RepositoryRecord,
)
from prompt_kit.registry import RepositoryRegistry
from prompt_kit.sources import EphemeralCheckout, UrlRepositorySource
from prompt_kit.sources.abc import RepositorySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPrompt:
    """A prompt located on disk, ready for target computation."""

    identifier: ParsedIdentifier
    record: RepositoryRecord
    prompt_dir: Path
    manifest: PromptManifest

    def editor_rules(self, editor: str) -> dict[str, FileRule]:
        """File rules the prompt declares for ``editor``.

        Raises:
            EditorNotConfiguredError: If the manifest has no rules for the editor
        """
        rules = self.manifest.editors.get(editor)
        if rules is None:
            raise EditorNotConfiguredError(
                self.manifest.name, editor, self.manifest.editor_names()
            )
        return rules


def _require_manifest(prompt_dir: Path, prompt: str, location: str) -> PromptManifest:
    if not prompt_dir.is_dir():
        raise PromptNotFoundError(prompt, location)
    manifest = load_prompt_manifest(prompt_dir)
    if manifest is None:
        raise PromptNotFoundError(f"{prompt} (no {MANIFEST_FILENAME})", location)
    return manifest


def select_repository(registry: RepositoryRegistry, parsed: ParsedIdentifier) -> RepositoryRecord:
    """Registered repository named by ``parsed``, or the default one.

    Raises:
        RepositoryNotFoundError: If the named repository is not registered
        NotFoundError: If no repository was named and no default is set
    """
    if parsed.repository:
        return registry.require(parsed.repository)

    default = registry.get_default()
    if default is None:
        raise NotFoundError(
            f"No repository specified for '{parsed.prompt}' and no default repository set. "
            "Use repo/prompt or set a default with 'prompt-kit default <name>'."
        )
    logger.debug("Using default repository %s", default.name)
    return default


def resolve_registered_prompt(
    registry: RepositoryRegistry,
    parsed: ParsedIdentifier,
    source_for: Callable[[RepositoryKind], RepositorySource],
) -> ResolvedPrompt:
    """Locate a prompt inside a registered repository.

    Args:
        registry: Repository registry
        parsed: Non-URL identifier
        source_for: Picks the source that resolves a record's working directory

    Raises:
        RepositoryNotFoundError: If the repository is not registered
        NotFoundError: If the repository's working directory is gone
        PromptNotFoundError: If the prompt directory or manifest is missing
        MalformedManifestError: If the manifest is unusable
    """
    record = select_repository(registry, parsed)
    repository_path = source_for(record.kind).resolve_working_path(record)
    prompt_dir = repository_path / parsed.prompt
    manifest = _require_manifest(prompt_dir, parsed.prompt, record.name)
    return ResolvedPrompt(
        identifier=parsed, record=record, prompt_dir=prompt_dir, manifest=manifest
    )


def resolve_url_prompt(
    url_source: UrlRepositorySource,
    parsed: ParsedIdentifier,
    version: str | None = None,
) -> tuple[EphemeralCheckout, ResolvedPrompt]:
    """Fetch a URL identifier into a temporary checkout.

    The caller owns the returned checkout and must clean it up. If this
    function raises, nothing is left behind.
    """
    url = parsed.original_url
    if url is None:
        raise ValueError(f"identifier for '{parsed.prompt}' is not a URL")

    checkout = url_source.fetch(url, parsed.prompt, version)
    try:
        manifest = _require_manifest(checkout.prompt_dir, parsed.prompt, checkout.record.origin)
    except Exception:
        checkout.cleanup()
        raise

    return checkout, ResolvedPrompt(
        identifier=parsed,
        record=checkout.record,
        prompt_dir=checkout.prompt_dir,
        manifest=manifest,
    )
