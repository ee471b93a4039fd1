import logging

import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.errors import NotFoundError, PromptKitError
from prompt_kit.io.manifest import load_repository_metadata
from prompt_kit.models import RepositoryRecord

logger = logging.getLogger(__name__)


def _update_repository(
    ctx: PromptKitContext, record: RepositoryRecord, version: str | None
) -> RepositoryRecord:
    """Pull a versioned repository and re-apply its requested version."""
    source = ctx.versioned_source()
    source.update(record)

    requested = version if version is not None else record.requested_version
    if requested is not None:
        current = source.checkout_version(record, requested)
    else:
        current = source.current_version(record)

    registry = ctx.registry
    metadata = load_repository_metadata(source.resolve_working_path(record))
    if metadata is not None:
        registry.update_metadata(record.name, metadata)
    return registry.record_version(record.name, current, requested)


@click.command("update")
@click.argument("name", required=False)
@click.option("-a", "--all", "update_all", is_flag=True, help="Update every repository.")
@click.option(
    "-v",
    "--version",
    "version",
    help="Check out this branch, tag or commit after updating.",
)
@click.pass_obj
@cli_error_boundary
def update_cmd(
    ctx: PromptKitContext, name: str | None, update_all: bool, version: str | None
) -> None:
    """Pull the latest changes for registered git repositories.

    Without NAME or --all the default repository is updated. Local
    repositories are skipped.

    Examples:
        prompt-kit update team
        prompt-kit update team --version v2.0.0
        prompt-kit update --all
    """
    registry = ctx.registry

    if update_all:
        records = registry.list_repositories()
        if not records:
            user_output(click.style("No repositories registered.", fg="yellow"))
            return
    elif name is not None:
        records = [registry.require(name)]
    else:
        default = registry.get_default()
        if default is None:
            raise NotFoundError(
                "No repository specified and no default repository set. "
                "Use --all to update all repositories or specify a repository name."
            )
        records = [default]

    updated = 0
    failures = 0
    for record in records:
        if not record.is_versioned:
            user_output(click.style("↷ ", dim=True) + f"Skipping local repository {record.name}")
            continue

        user_output(f"Updating {click.style(record.name, bold=True)}...")
        try:
            new_record = _update_repository(ctx, record, version)
        except PromptKitError as e:
            if not update_all:
                raise
            logger.debug("Update of %s failed", record.name, exc_info=True)
            user_output(click.style("  ✗ ", fg="red") + f"Failed to update {record.name}: {e}")
            failures += 1
            continue

        updated += 1
        user_output(
            click.style("  ✓ ", fg="green")
            + f"{record.name} at {new_record.current_version or 'unknown version'}"
        )

    if update_all:
        user_output(f"{updated} updated, {failures} failed")
    if failures:
        raise SystemExit(1)
