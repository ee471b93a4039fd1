import logging
import os

import click

from prompt_kit.cli.commands.config import config_group
from prompt_kit.cli.commands.default import default_cmd
from prompt_kit.cli.commands.install import install_cmd
from prompt_kit.cli.commands.list_cmd import list_cmd
from prompt_kit.cli.commands.register import register_cmd
from prompt_kit.cli.commands.remove import remove_cmd
from prompt_kit.cli.commands.repos import repos_cmd
from prompt_kit.cli.commands.unregister import unregister_cmd
from prompt_kit.cli.commands.update import update_cmd
from prompt_kit.cli.commands.version import version_cmd
from prompt_kit.cli.error_boundary import DEBUG_ENV_VAR, cli_error_boundary
from prompt_kit.context import create_context
from prompt_kit.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="prompt-kit")
@click.option("--debug", is_flag=True, help="Show debug logging and full stack traces for errors")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Install reusable prompt bundles into editor workspaces."""
    if debug or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug)


cli.add_command(config_group)
cli.add_command(default_cmd)
cli.add_command(install_cmd)
cli.add_command(list_cmd)
cli.add_command(register_cmd)
cli.add_command(remove_cmd)
cli.add_command(repos_cmd)
cli.add_command(unregister_cmd)
cli.add_command(update_cmd)
cli.add_command(version_cmd)


def main() -> None:
    """Entry point with error boundary."""
    cli_error_boundary(cli)()


if __name__ == "__main__":
    main()
