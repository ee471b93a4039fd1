"""prompt-kit: install reusable prompt bundles into editor workspaces.

Import from submodules:
- version: __version__
- identifiers: parse_prompt_identifier
- registry: RepositoryRegistry
- operations.file_processor: compute_targets, install_targets, remove_targets
"""

from prompt_kit.version import __version__ as __version__
