"""Application context with dependency injection.

The PromptKitContext dataclass holds every collaborator a command needs and
is created once at CLI entry point, then threaded through click's context
object. Tests build one with PromptKitContext.for_test().
"""

from dataclasses import dataclass
from pathlib import Path

from prompt_kit.clock import Clock
from prompt_kit.config import UserConfig, UserConfigOps
from prompt_kit.git.abc import Git
from prompt_kit.io.registry_store import RegistryStore
from prompt_kit.models import RepositoryKind
from prompt_kit.registry import RepositoryRegistry
from prompt_kit.sources import (
    LocalRepositorySource,
    RepositorySource,
    UrlRepositorySource,
    VersionedRepositorySource,
    source_for_kind,
)


@dataclass(frozen=True)
class PromptKitContext:
    """Immutable context holding all dependencies for prompt-kit commands.

    Attributes:
        git: Git operations used by the versioned and URL sources
        registry_store: Persistence for the repository registry
        config_ops: Access to the user config file
        config: User config, loaded at entry point
        clock: Source of timestamps for registry records
        cwd: Install root for prompt files
        tmp_root: Parent directory for ephemeral URL checkouts (None = system temp)
        debug: Show full stack traces instead of one-line errors
    """

    git: Git
    registry_store: RegistryStore
    config_ops: UserConfigOps
    config: UserConfig
    clock: Clock
    cwd: Path
    tmp_root: Path | None
    debug: bool

    @property
    def registry(self) -> RepositoryRegistry:
        return RepositoryRegistry(self.registry_store, self.clock)

    def versioned_source(self) -> VersionedRepositorySource:
        return VersionedRepositorySource(self.git, self.config.repositories_dir)

    def local_source(self) -> LocalRepositorySource:
        return LocalRepositorySource()

    def url_source(self) -> UrlRepositorySource:
        return UrlRepositorySource(self.git, self.clock, tmp_root=self.tmp_root)

    def source_for(self, kind: RepositoryKind) -> RepositorySource:
        return source_for_kind(kind, self.git, self.config.repositories_dir)

    @staticmethod
    def for_test(
        git: Git | None = None,
        registry_store: RegistryStore | None = None,
        config_ops: UserConfigOps | None = None,
        config: UserConfig | None = None,
        clock: Clock | None = None,
        cwd: Path | None = None,
        tmp_root: Path | None = None,
        debug: bool = False,
    ) -> "PromptKitContext":
        """Create test context with optional pre-configured implementations.

        Uses fakes for anything not supplied so no subprocess or home
        directory access happens.

        Example:
            >>> git = FakeGit(remotes={...})
            >>> ctx = PromptKitContext.for_test(git=git, cwd=tmp_path)
        """
        from prompt_kit.clock import FakeClock
        from prompt_kit.config import InMemoryUserConfigOps
        from prompt_kit.git.fake import FakeGit
        from prompt_kit.io.registry_store import InMemoryRegistryStore

        resolved_config_ops: UserConfigOps = (
            config_ops if config_ops is not None else InMemoryUserConfigOps(config)
        )
        resolved_config = config if config is not None else resolved_config_ops.load()

        return PromptKitContext(
            git=git if git is not None else FakeGit(),
            registry_store=(
                registry_store if registry_store is not None else InMemoryRegistryStore()
            ),
            config_ops=resolved_config_ops,
            config=resolved_config,
            clock=clock if clock is not None else FakeClock(),
            cwd=cwd if cwd is not None else Path("/fake/workspace"),
            tmp_root=tmp_root,
            debug=debug,
        )


def create_context(*, debug: bool) -> PromptKitContext:
    """Create production context with real implementations.

    Called once at CLI entry point.
    """
    from prompt_kit.clock import RealClock
    from prompt_kit.config import FilesystemUserConfigOps
    from prompt_kit.git.real import RealGit
    from prompt_kit.io.registry_store import FilesystemRegistryStore

    config_ops = FilesystemUserConfigOps()
    config = config_ops.load()

    return PromptKitContext(
        git=RealGit(),
        registry_store=FilesystemRegistryStore(config.registry_path),
        config_ops=config_ops,
        config=config,
        clock=RealClock(),
        cwd=Path.cwd(),
        tmp_root=None,
        debug=debug,
    )
