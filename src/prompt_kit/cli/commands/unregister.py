import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext


@click.command("unregister")
@click.argument("name")
@click.option("-f", "--force", is_flag=True, help="Unregister without asking.")
@click.option(
    "--keep-files",
    is_flag=True,
    help="Keep the cloned checkout on disk (git repositories only).",
)
@click.pass_obj
@cli_error_boundary
def unregister_cmd(ctx: PromptKitContext, name: str, force: bool, keep_files: bool) -> None:
    """Remove a repository from the registry.

    The managed checkout of a git repository is deleted unless --keep-files
    is given. Local directories are never deleted.
    """
    registry = ctx.registry
    record = registry.require(name)

    user_output(f"Repository: {click.style(record.name, bold=True)} [{record.kind.value}]")
    user_output(f"  Source: {record.origin}")
    if record.local_path is not None:
        user_output(f"  Path: {record.local_path}")
    deletes_checkout = record.is_versioned and not keep_files
    if deletes_checkout:
        user_output(click.style("  The cloned checkout will be deleted.", fg="yellow"))

    if not force:
        if not click.confirm(f"Unregister '{name}'?", default=False, err=True):
            user_output("Unregister cancelled.")
            return

    registry.unregister(name)
    user_output(click.style("✓ ", fg="green") + f"Unregistered {name}")

    if deletes_checkout and ctx.versioned_source().remove_checkout(record):
        user_output(f"  Deleted {record.local_path}")
