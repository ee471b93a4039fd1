import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.errors import PromptKitError


@click.command("version")
@click.argument("name")
@click.option("-l", "--list", "list_versions", is_flag=True, help="List branches and tags.")
@click.option("-c", "--checkout", "checkout", help="Check out a branch, tag or commit.")
@click.pass_obj
@cli_error_boundary
def version_cmd(
    ctx: PromptKitContext, name: str, list_versions: bool, checkout: str | None
) -> None:
    """Show, list or switch the version of a git repository.

    Examples:
        prompt-kit version team
        prompt-kit version team --list
        prompt-kit version team --checkout v1.2.0
    """
    if list_versions and checkout is not None:
        raise click.UsageError("--list and --checkout cannot be used together")

    registry = ctx.registry
    record = registry.require(name)
    if not record.is_versioned:
        raise PromptKitError(
            f"Version management is only available for git repositories. "
            f"'{name}' is a local repository."
        )

    source = ctx.versioned_source()

    if checkout is not None:
        current = source.checkout_version(record, checkout)
        registry.record_version(name, current, checkout)
        user_output(click.style("✓ ", fg="green") + f"{name} is now at {current}")
        return

    current = source.current_version(record)

    if list_versions:
        listing = source.list_versions(record)
        if listing.branches:
            user_output(click.style("Branches:", bold=True))
            for branch in listing.branches:
                user_output(f"  {branch}")
        if listing.tags:
            user_output(click.style("Tags:", bold=True))
            for tag in listing.tags:
                user_output(f"  {tag}")
        if not listing.branches and not listing.tags:
            user_output(click.style("No remote branches or tags found", fg="yellow"))
        user_output(f"Current: {current}")
        return

    user_output(f"Repository: {click.style(name, bold=True)}")
    user_output(f"  Source: {record.origin}")
    user_output(f"  Current version: {current}")
    if record.requested_version and record.requested_version != current:
        user_output(f"  Requested version: {record.requested_version}")
