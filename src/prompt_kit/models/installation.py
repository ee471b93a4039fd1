"""Installation target models."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class InstallationTarget:
    """One file to write (or remove) in the workspace.

    ``content`` already includes the rule's prefix and suffix.
    """

    source_path: Path
    target_path: Path
    content: str
    prefix: str | None = None
    suffix: str | None = None


@dataclass(frozen=True)
class BatchResult:
    """Per-target outcome of an install or removal batch."""

    succeeded: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed
