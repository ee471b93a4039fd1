"""Exception taxonomy for prompt-kit.

Every error the core raises derives from PromptKitError so the CLI error
boundary can render it as a clean one-line message. Lookup and validation
errors are raised before any file in the workspace is touched.
"""

from pathlib import Path


class PromptKitError(Exception):
    """Base class for all expected prompt-kit failures."""


class InvalidIdentifierError(PromptKitError):
    """Raised when a prompt identifier does not match the accepted grammar."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Invalid prompt identifier '{identifier}': {reason}")


class NotFoundError(PromptKitError):
    """Raised when a repository, prompt or editor mapping is absent."""


class RepositoryNotFoundError(NotFoundError):
    """Raised when a repository name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Repository '{name}' is not registered")


class PromptNotFoundError(NotFoundError):
    """Raised when a prompt directory or its manifest is missing."""

    def __init__(self, prompt: str, location: str) -> None:
        self.prompt = prompt
        self.location = location
        super().__init__(f"Prompt not found: {prompt} in {location}")


class EditorNotConfiguredError(NotFoundError):
    """Raised when a prompt has no file mappings for the requested editor."""

    def __init__(self, prompt: str, editor: str, available: list[str]) -> None:
        self.prompt = prompt
        self.editor = editor
        self.available = available
        supported = ", ".join(available) if available else "none"
        super().__init__(
            f"Prompt '{prompt}' does not support editor '{editor}'. "
            f"Supported editors: {supported}"
        )


class DuplicateRepositoryError(PromptKitError):
    """Raised when registering a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Repository '{name}' is already registered")


class MalformedManifestError(PromptKitError):
    """Raised when a tprompts.json file exists but cannot be used."""

    def __init__(self, manifest_path: Path, reason: str) -> None:
        self.manifest_path = manifest_path
        self.reason = reason
        super().__init__(f"Failed to parse prompt config at {manifest_path}: {reason}")


class NoPromptsFoundError(PromptKitError):
    """Raised when a repository has no top-level prompt directories."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"{path} does not contain any valid prompt configurations (tprompts.json files)"
        )


class UnsupportedEditorError(PromptKitError):
    """Raised when an editor name is not one prompt-kit knows about."""

    def __init__(self, editor: str, supported: list[str]) -> None:
        self.editor = editor
        self.supported = supported
        super().__init__(
            f"Unsupported editor: {editor}. Supported editors: {', '.join(supported)}"
        )


class GitError(PromptKitError):
    """Base class for failures of the git collaborator."""


class GitTimeoutError(GitError):
    """Raised when a git subprocess exceeds its time limit."""

    def __init__(self, operation: str, timeout: float) -> None:
        self.operation = operation
        self.timeout = timeout
        super().__init__(
            f"Git operation timed out after {timeout:g}s while trying to {operation}. "
            "Please check your internet connection and repository URL."
        )


class RemoteUnreachableError(GitError):
    """Raised when a remote cannot be contacted or does not exist."""

    def __init__(self, url: str, detail: str = "") -> None:
        self.url = url
        self.detail = detail
        message = f"Repository not reachable: {url}"
        if detail:
            message += f"\n{detail}"
        super().__init__(message)


class SubprocessFailedError(GitError):
    """Raised when a git command exits non-zero or cannot be started."""


class VersionNotFoundError(GitError):
    """Raised when a branch, tag or commit does not resolve."""

    def __init__(self, version: str, repository: str) -> None:
        self.version = version
        self.repository = repository
        super().__init__(f"Version '{version}' not found in repository '{repository}'")
