from prompt_kit.io.manifest import (
    REPOSITORY_METADATA_FILENAME,
    discover_prompts,
    load_prompt_manifest,
    load_repository_metadata,
)
from prompt_kit.io.registry_store import (
    FilesystemRegistryStore,
    InMemoryRegistryStore,
    RegistryStore,
)

__all__ = [
    "REPOSITORY_METADATA_FILENAME",
    "FilesystemRegistryStore",
    "InMemoryRegistryStore",
    "RegistryStore",
    "discover_prompts",
    "load_prompt_manifest",
    "load_repository_metadata",
]
