from prompt_kit.models.installation import BatchResult, InstallationTarget
from prompt_kit.models.manifest import MANIFEST_FILENAME, FileRule, PromptManifest
from prompt_kit.models.repository import (
    RegistryState,
    RepositoryKind,
    RepositoryMetadata,
    RepositoryRecord,
)

__all__ = [
    "MANIFEST_FILENAME",
    "BatchResult",
    "FileRule",
    "InstallationTarget",
    "PromptManifest",
    "RegistryState",
    "RepositoryKind",
    "RepositoryMetadata",
    "RepositoryRecord",
]
