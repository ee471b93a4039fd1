"""Subprocess execution with rich error context and bounded run time."""

import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

from prompt_kit.errors import GitTimeoutError, SubprocessFailedError


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    timeout: float,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute subprocess with enriched error reporting for the integration layer.

    Wraps subprocess.run() so callers see typed errors carrying the operation
    context, command line and captured output instead of raw subprocess errors.
    Interactive credential prompts are disabled so a command can never block on
    stdin.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
        timeout: Maximum run time in seconds
        cwd: Working directory for command execution
        check: Whether to raise on non-zero exit (default: True)

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        GitTimeoutError: If the command exceeds ``timeout``
        SubprocessFailedError: If the command fails or its binary is not found
    """
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
    try:
        return subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
            timeout=timeout,
            env=env,
        )

    except subprocess.TimeoutExpired as e:
        raise GitTimeoutError(operation_context, timeout) from e

    except subprocess.CalledProcessError as e:
        cmd_str = " ".join(str(arg) for arg in cmd)
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {e.returncode}"

        stdout_stripped = (e.stdout or "").strip()
        if stdout_stripped:
            error_msg += f"\nstdout: {stdout_stripped}"

        stderr_stripped = (e.stderr or "").strip()
        if stderr_stripped:
            error_msg += f"\nstderr: {stderr_stripped}"

        raise SubprocessFailedError(error_msg) from e

    except FileNotFoundError as e:
        cmd_str = " ".join(str(arg) for arg in cmd)
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise SubprocessFailedError(error_msg) from e
