"""User configuration data structures and loading.

Configuration lives in ~/.prompt-kit/config.toml (or $PROMPT_KIT_HOME/config.toml).
A missing file is not an error: every field has a default.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from prompt_kit.errors import PromptKitError

CONFIG_FILENAME = "config.toml"
REGISTRY_FILENAME = "repos.json"
HOME_ENV_VAR = "PROMPT_KIT_HOME"


def default_config_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".prompt-kit"


@dataclass(frozen=True)
class UserConfig:
    """Immutable user configuration.

    Loaded once at CLI entry point and stored in PromptKitContext.
    """

    config_dir: Path
    repositories_dir: Path
    default_editor: str | None = None

    @property
    def registry_path(self) -> Path:
        return self.config_dir / REGISTRY_FILENAME

    @staticmethod
    def defaults(config_dir: Path) -> "UserConfig":
        return UserConfig(config_dir=config_dir, repositories_dir=config_dir / "repositories")


class UserConfigOps(ABC):
    """Abstract interface for user config operations.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> UserConfig:
        """Load config, falling back to defaults for absent values.

        Raises:
            PromptKitError: If the config file exists but is malformed
        """
        ...

    @abstractmethod
    def save(self, config: UserConfig) -> None:
        """Persist config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path to the config file (for error messages and debugging)."""
        ...


class FilesystemUserConfigOps(UserConfigOps):
    """Production implementation that reads/writes config.toml."""

    def __init__(self, config_dir: Path | None = None) -> None:
        self._config_dir = config_dir if config_dir is not None else default_config_dir()

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> UserConfig:
        config_path = self.path()
        defaults = UserConfig.defaults(self._config_dir)
        if not config_path.exists():
            return defaults

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise PromptKitError(f"Invalid config at {config_path}: {e}") from e

        repositories_dir = data.get("repositories_dir")
        default_editor = data.get("default_editor")
        return UserConfig(
            config_dir=self._config_dir,
            repositories_dir=(
                Path(repositories_dir).expanduser()
                if repositories_dir
                else defaults.repositories_dir
            ),
            default_editor=default_editor or None,
        )

    def save(self, config: UserConfig) -> None:
        config_path = self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data: dict[str, Any] = {"repositories_dir": str(config.repositories_dir)}
        # TOML has no null
        if config.default_editor is not None:
            data["default_editor"] = config.default_editor

        config_path.write_text(tomli_w.dumps(data), encoding="utf-8")

    def path(self) -> Path:
        return self._config_dir / CONFIG_FILENAME


class InMemoryUserConfigOps(UserConfigOps):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: UserConfig | None = None) -> None:
        """Initialize in-memory config ops.

        Args:
            config: Initial config state (None = no config file, defaults apply)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> UserConfig:
        if self._config is None:
            return UserConfig.defaults(self.path().parent)
        return self._config

    def save(self, config: UserConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/prompt-kit") / CONFIG_FILENAME
