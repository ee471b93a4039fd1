"""Prompt manifest and repository metadata I/O."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from prompt_kit.errors import MalformedManifestError
from prompt_kit.models import MANIFEST_FILENAME, PromptManifest, RepositoryMetadata

logger = logging.getLogger(__name__)

REPOSITORY_METADATA_FILENAME = ".tprompts-repo.json"


def load_prompt_manifest(prompt_dir: Path) -> PromptManifest | None:
    """Load tprompts.json from a prompt directory.

    Returns None if the directory has no manifest.

    Raises:
        MalformedManifestError: If the manifest is not valid JSON, is missing
            ``name`` or ``editors``, or has a rule without a ``location``
    """
    manifest_path = prompt_dir / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return None

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedManifestError(manifest_path, f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise MalformedManifestError(manifest_path, "top-level value must be an object")

    # An empty editors table is allowed; an absent or null one is not
    missing = [key for key in ("name", "editors") if data.get(key) in (None, "")]
    if missing:
        raise MalformedManifestError(
            manifest_path, f"missing required fields ({', '.join(missing)})"
        )

    try:
        return PromptManifest.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise MalformedManifestError(manifest_path, problems) from e


def discover_prompts(repository_path: Path) -> list[str]:
    """List prompt directory names at the top level of a repository.

    A prompt directory is a non-hidden immediate subdirectory holding a
    manifest file. Names are returned in sorted directory-listing order.
    """
    if not repository_path.is_dir():
        return []

    prompts: list[str] = []
    for entry in sorted(repository_path.iterdir(), key=lambda p: p.name):
        if entry.name.startswith(".") or not entry.is_dir():
            continue
        if (entry / MANIFEST_FILENAME).is_file():
            prompts.append(entry.name)
    return prompts


def load_repository_metadata(repository_path: Path) -> RepositoryMetadata | None:
    """Read optional repository metadata for display.

    Invalid metadata is logged and ignored; it never blocks an operation.
    """
    metadata_path = repository_path / REPOSITORY_METADATA_FILENAME
    if not metadata_path.is_file():
        return None

    try:
        data = json.loads(metadata_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Invalid repository metadata at %s: %s", metadata_path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Invalid repository metadata at %s: expected an object", metadata_path)
        return None

    return RepositoryMetadata.from_dict(data)
