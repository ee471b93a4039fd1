"""Installation engine.

Expands a prompt's per-editor file-mapping table into concrete installation
targets, writes them, and removes them again.

Targets are computed without touching the workspace. Writing and deleting are
per-target: one failure is recorded in the BatchResult and the rest of the
batch still runs. Nothing is rolled back.
"""

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

from prompt_kit.models import BatchResult, FileRule, InstallationTarget

logger = logging.getLogger(__name__)

# Directory names that empty-directory pruning never deletes or walks past
PROTECTED_DIRECTORIES = frozenset({".git", "node_modules", "src", "lib", "dist", "build"})

# Undecodable bytes survive a read/write round trip unchanged
_TEXT_ERRORS = "surrogateescape"


def resolve_location(install_root: Path, location: str) -> Path:
    """Resolve a rule location against the install root.

    Absolute locations win. ``..`` segments are normalized lexically and
    symlinks are not followed.
    """
    return Path(os.path.normpath(os.path.join(install_root.absolute(), location)))


def apply_prefix_suffix(content: str, prefix: str | None, suffix: str | None) -> str:
    """Wrap content verbatim. No trimming and no separators are added."""
    return (prefix or "") + content + (suffix or "")


def read_source(path: Path) -> str:
    with open(path, encoding="utf-8", errors=_TEXT_ERRORS, newline="") as f:
        return f.read()


def _iter_files(directory: Path) -> Iterator[Path]:
    """Yield regular files beneath ``directory`` in sorted listing order.

    Symlinked directories are skipped.
    """
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_symlink() and entry.is_dir():
            logger.warning("Skipping symlinked directory: %s", entry)
        elif entry.is_dir():
            yield from _iter_files(entry)
        elif entry.is_file():
            yield entry


def _make_target(source: Path, destination: Path, rule: FileRule) -> InstallationTarget:
    return InstallationTarget(
        source_path=source,
        target_path=destination,
        content=apply_prefix_suffix(read_source(source), rule.prefix, rule.suffix),
        prefix=rule.prefix or None,
        suffix=rule.suffix or None,
    )


def compute_targets(
    prompt_dir: Path,
    editor_rules: Mapping[str, FileRule],
    install_root: Path,
) -> list[InstallationTarget]:
    """Expand an editor's file rules into installation targets.

    Args:
        prompt_dir: Prompt directory holding the source files
        editor_rules: Mapping of path inside the prompt to its FileRule
        install_root: Directory that rule locations are relative to

    Returns:
        Targets in rule order, then sorted listing order within directories.
        Sources that are missing, or that contradict the rule's ``kind``, are
        skipped with a warning.
    """
    targets: list[InstallationTarget] = []

    for relative, rule in editor_rules.items():
        source = prompt_dir / relative
        if not source.exists():
            logger.warning("Source file/directory not found: %s", source)
            continue

        is_directory = source.is_dir()
        if rule.kind is not None and (rule.kind == "directory") != is_directory:
            logger.warning(
                "Skipping %s: rule declares kind '%s' but source is a %s",
                source,
                rule.kind,
                "directory" if is_directory else "file",
            )
            continue

        destination = resolve_location(install_root, rule.location)
        if is_directory:
            for file_path in _iter_files(source):
                target_path = destination / file_path.relative_to(source)
                targets.append(_make_target(file_path, target_path, rule))
        else:
            targets.append(_make_target(source, destination, rule))

    return targets


def install_targets(targets: list[InstallationTarget]) -> BatchResult:
    """Write every target, overwriting existing files.

    Parent directories are created as needed. A failed write is recorded and
    the remaining targets are still processed.
    """
    succeeded: list[Path] = []
    failed: list[tuple[Path, str]] = []

    for target in targets:
        try:
            target.target_path.parent.mkdir(parents=True, exist_ok=True)
            with open(
                target.target_path, "w", encoding="utf-8", errors=_TEXT_ERRORS, newline=""
            ) as f:
                f.write(target.content)
        except OSError as e:
            logger.debug("Failed to write %s", target.target_path, exc_info=True)
            failed.append((target.target_path, str(e)))
            continue
        succeeded.append(target.target_path)

    return BatchResult(succeeded=succeeded, failed=failed)


def compute_removal_set(targets: list[InstallationTarget]) -> list[InstallationTarget]:
    """Targets whose destination currently exists."""
    return [target for target in targets if target.target_path.exists()]


def remove_targets(
    targets: list[InstallationTarget],
    install_root: Path,
    protected: frozenset[str] = PROTECTED_DIRECTORIES,
) -> BatchResult:
    """Delete each target, then prune directories the deletion left empty.

    A failed delete is recorded and the remaining targets are still processed.
    """
    succeeded: list[Path] = []
    failed: list[tuple[Path, str]] = []

    for target in targets:
        try:
            target.target_path.unlink()
        except OSError as e:
            logger.debug("Failed to remove %s", target.target_path, exc_info=True)
            failed.append((target.target_path, str(e)))
            continue
        succeeded.append(target.target_path)
        prune_empty_parents(target.target_path.parent, install_root, protected)

    return BatchResult(succeeded=succeeded, failed=failed)


def prune_empty_parents(
    start: Path,
    install_root: Path,
    protected: frozenset[str] = PROTECTED_DIRECTORIES,
) -> list[Path]:
    """Remove empty directories from ``start`` upward.

    The walk stops at the install root, at anything outside it, at the first
    non-empty directory, and at any path with a protected component. Errors
    end the walk silently.

    Returns:
        Directories that were removed, innermost first
    """
    root = Path(os.path.normpath(install_root.absolute()))
    current = Path(os.path.normpath(start.absolute()))
    removed: list[Path] = []

    while current != root:
        try:
            relative = current.relative_to(root)
        except ValueError:
            break
        if protected.intersection(relative.parts):
            break

        try:
            if any(current.iterdir()):
                break
            current.rmdir()
        except OSError as e:
            logger.debug("Stopped pruning at %s: %s", current, e)
            break

        removed.append(current)
        current = current.parent

    return removed
