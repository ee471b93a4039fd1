from dataclasses import replace
from pathlib import Path

import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.config import UserConfig
from prompt_kit.context import PromptKitContext
from prompt_kit.editors import validate_editor

CONFIG_KEYS = ("default_editor", "repositories_dir")


def _value_for(config: UserConfig, key: str) -> str | None:
    if key == "default_editor":
        return config.default_editor
    return str(config.repositories_dir)


@click.group("config")
def config_group() -> None:
    """Show and change user configuration."""


@config_group.command("list")
@click.pass_obj
@cli_error_boundary
def config_list(ctx: PromptKitContext) -> None:
    """Print every configuration value."""
    config = ctx.config_ops.load()
    for key in CONFIG_KEYS:
        value = _value_for(config, key)
        user_output(f"{key}={value if value is not None else ''}")


@config_group.command("get")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.pass_obj
@cli_error_boundary
def config_get(ctx: PromptKitContext, key: str) -> None:
    """Print one configuration value."""
    value = _value_for(ctx.config_ops.load(), key)
    user_output(value if value is not None else "")


@config_group.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
@click.pass_obj
@cli_error_boundary
def config_set(ctx: PromptKitContext, key: str, value: str) -> None:
    """Set a configuration value. An empty default_editor clears it."""
    config = ctx.config_ops.load()
    if key == "default_editor":
        updated = replace(config, default_editor=validate_editor(value) if value else None)
    else:
        updated = replace(config, repositories_dir=Path(value).expanduser())

    ctx.config_ops.save(updated)
    user_output(click.style("✓ ", fg="green") + f"Set {key} in {ctx.config_ops.path()}")
