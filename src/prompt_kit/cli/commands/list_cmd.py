import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.errors import MalformedManifestError, NotFoundError
from prompt_kit.io.manifest import discover_prompts, load_prompt_manifest
from prompt_kit.models import MANIFEST_FILENAME, RepositoryRecord


def _show_repository_prompts(
    ctx: PromptKitContext, record: RepositoryRecord, verbose: bool
) -> None:
    try:
        repository_path = ctx.source_for(record.kind).resolve_working_path(record)
    except NotFoundError as e:
        user_output(click.style("✗ ", fg="red") + f"{record.name}: {e}")
        return

    prompts = discover_prompts(repository_path)
    user_output(
        click.style(record.name, bold=True)
        + click.style(f" ({len(prompts)} prompt{'s' if len(prompts) != 1 else ''})", dim=True)
    )
    if not prompts:
        user_output(click.style("  No prompts found", fg="yellow"))
        return

    for prompt in prompts:
        prompt_dir = repository_path / prompt
        try:
            manifest = load_prompt_manifest(prompt_dir)
        except MalformedManifestError as e:
            user_output(click.style("  ✗ ", fg="red") + f"{prompt}: {e.reason}")
            continue
        if manifest is None:
            continue

        header = f"  • {record.name}/{prompt}"
        if manifest.version:
            header += click.style(f" v{manifest.version}", dim=True)
        user_output(header)
        if manifest.description:
            user_output(f"    {manifest.description}")
        editors = ", ".join(manifest.editor_names()) or "none"
        user_output(click.style("    Editors: ", dim=True) + editors)

        if verbose:
            files = sorted(
                entry.name + ("/" if entry.is_dir() else "")
                for entry in prompt_dir.iterdir()
                if entry.name != MANIFEST_FILENAME
            )
            user_output(click.style("    Files: ", dim=True) + (", ".join(files) or "none"))


@click.command("list")
@click.argument("repository", required=False)
@click.option("-v", "--verbose", is_flag=True, help="Show the files each prompt contains.")
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: PromptKitContext, repository: str | None, verbose: bool) -> None:
    """List available prompts.

    Examples:
        prompt-kit list                  # Prompts in every registered repository
        prompt-kit list team --verbose   # Prompts in one repository, with files
    """
    registry = ctx.registry
    if repository is not None:
        records = [registry.require(repository)]
    else:
        records = registry.list_repositories()

    if not records:
        user_output(
            click.style(
                "No repositories registered. Use 'prompt-kit register <source>' to add one.",
                fg="yellow",
            )
        )
        return

    for index, record in enumerate(records):
        if index:
            user_output()
        _show_repository_prompts(ctx, record, verbose)
