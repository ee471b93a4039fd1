import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.models import RepositoryRecord


def _format_record(record: RepositoryRecord, is_default: bool, verbose: bool) -> list[str]:
    name = click.style(record.name, bold=True)
    if is_default:
        name += click.style(" (default)", fg="green")
    kind = click.style(f"[{record.kind.value}]", fg="cyan")
    lines = [f"{name} {kind}", f"  {click.style('Source:', dim=True)} {record.origin}"]

    if record.current_version:
        version = record.current_version
        if record.requested_version and record.requested_version != record.current_version:
            version += f" (requested {record.requested_version})"
        lines.append(f"  {click.style('Version:', dim=True)} {version}")

    metadata = record.metadata
    if metadata is not None and metadata.description:
        lines.append(f"  {metadata.description}")

    if verbose:
        if record.local_path is not None:
            lines.append(f"  {click.style('Path:', dim=True)} {record.local_path}")
        if record.last_updated_at:
            lines.append(f"  {click.style('Updated:', dim=True)} {record.last_updated_at}")
        if metadata is not None:
            if metadata.author:
                lines.append(f"  {click.style('Author:', dim=True)} {metadata.author}")
            if metadata.homepage:
                lines.append(f"  {click.style('Homepage:', dim=True)} {metadata.homepage}")
            if metadata.categories:
                categories = ", ".join(metadata.categories)
                lines.append(f"  {click.style('Categories:', dim=True)} {categories}")

    return lines


@click.command("repos")
@click.option("-v", "--verbose", is_flag=True, help="Show paths, timestamps and metadata.")
@click.pass_obj
@cli_error_boundary
def repos_cmd(ctx: PromptKitContext, verbose: bool) -> None:
    """List registered repositories."""
    registry = ctx.registry
    records = registry.list_repositories()
    if not records:
        user_output(
            click.style(
                "No repositories registered. Use 'prompt-kit register <source>' to add one.",
                fg="yellow",
            )
        )
        return

    default = registry.get_default()
    default_name = default.name if default is not None else None
    for index, record in enumerate(records):
        if index:
            user_output()
        for line in _format_record(record, record.name == default_name, verbose):
            user_output(line)
