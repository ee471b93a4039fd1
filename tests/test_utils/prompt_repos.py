"""Helpers for building prompt repositories in tests.

Two flavours:

1. write_prompt(): writes a prompt directory to disk (for local repositories)
2. prompt_files(): returns the same layout as a {relative path: text} mapping,
   the shape FakeGit serves from a remote
"""

import json
from pathlib import Path
from typing import Any

REMOTE_URL = "https://github.com/acme/team-prompts.git"


def manifest_for(
    name: str,
    editors: dict[str, dict[str, dict[str, Any]]],
    *,
    description: str | None = None,
    version: str | None = None,
) -> dict[str, Any]:
    manifest: dict[str, Any] = {"name": name, "editors": editors}
    if description is not None:
        manifest["description"] = description
    if version is not None:
        manifest["version"] = version
    return manifest


def prompt_files(
    prompt: str,
    manifest: dict[str, Any],
    files: dict[str, str],
) -> dict[str, str]:
    """Layout of one prompt as a relative-path mapping rooted at the repository."""
    layout = {f"{prompt}/tprompts.json": json.dumps(manifest)}
    for relative, content in files.items():
        layout[f"{prompt}/{relative}"] = content
    return layout


def write_files(root: Path, layout: dict[str, str]) -> None:
    for relative, content in layout.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def write_prompt(
    repository: Path,
    prompt: str,
    manifest: dict[str, Any],
    files: dict[str, str],
) -> Path:
    """Write a prompt directory into ``repository`` and return its path."""
    write_files(repository, prompt_files(prompt, manifest, files))
    return repository / prompt


def review_prompt_files() -> dict[str, str]:
    """A small two-editor prompt used across command tests."""
    manifest = manifest_for(
        "code-review",
        {
            "cursor": {
                "rules.md": {"location": ".cursor/rules/review.mdc", "prefix": "---\n"},
            },
            "claude-code": {
                "rules.md": {"location": "CLAUDE.md"},
                "commands": {"location": ".claude/commands"},
            },
        },
        description="Review checklist",
        version="1.0.0",
    )
    return prompt_files(
        "code-review",
        manifest,
        {
            "rules.md": "Review carefully.\n",
            "commands/review.md": "Run a review.\n",
            "commands/nested/deep.md": "Deep review.\n",
        },
    )
