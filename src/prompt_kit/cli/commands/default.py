import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext


@click.command("default")
@click.argument("name", required=False)
@click.pass_obj
@cli_error_boundary
def default_cmd(ctx: PromptKitContext, name: str | None) -> None:
    """Show or set the default repository.

    Bare prompt names passed to install and remove resolve against it.
    """
    registry = ctx.registry
    if name is None:
        default = registry.get_default()
        if default is None:
            user_output("No default repository set.")
        else:
            user_output(default.name)
        return

    registry.set_default(name)
    user_output(click.style("✓ ", fg="green") + f"Default repository set to {name}")
