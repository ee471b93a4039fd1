"""Error boundary handling for CLI commands.

This module provides a decorator that catches expected prompt-kit failures at
CLI entry points and displays clean error messages without stack traces.
"""

import functools
import os
from collections.abc import Callable
from typing import Any, TypeVar

import click

from prompt_kit.errors import PromptKitError

T = TypeVar("T", bound=Callable[..., Any])

DEBUG_ENV_VAR = "PROMPT_KIT_DEBUG"


def _debug_enabled() -> bool:
    if os.getenv(DEBUG_ENV_VAR):
        return True
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(getattr(ctx.obj, "debug", False))


def _fail(e: Exception) -> None:
    click.echo(click.style("Error: ", fg="red") + str(e), err=True)
    raise SystemExit(1) from None


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - PromptKitError: every expected domain failure
        - FileNotFoundError: Missing files/directories
        - PermissionError: Permission denied errors

    With --debug (or PROMPT_KIT_DEBUG set) the exception propagates with its
    full traceback instead. All other exceptions bubble up normally.

    Example:
        @click.command()
        @click.pass_obj
        @cli_error_boundary
        def my_command(ctx: PromptKitContext):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PromptKitError as e:
            if _debug_enabled():
                raise
            _fail(e)
        except FileNotFoundError as e:
            if _debug_enabled():
                raise
            _fail(e)
        except PermissionError as e:
            if _debug_enabled():
                raise
            _fail(e)

    return wrapper  # type: ignore[return-value]
