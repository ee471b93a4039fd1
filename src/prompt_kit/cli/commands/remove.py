import click

from prompt_kit.cli.commands.editor_selection import choose_editor
from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import display_path, format_batch_summary, print_panel, user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.errors import PromptKitError
from prompt_kit.identifiers import parse_prompt_identifier
from prompt_kit.operations.file_processor import (
    compute_removal_set,
    compute_targets,
    remove_targets,
)
from prompt_kit.operations.resolve import resolve_registered_prompt


@click.command("remove")
@click.argument("identifier")
@click.argument("editor", required=False)
@click.option("-e", "--editor", "editor_option", help="Editor the prompt was installed for.")
@click.option("-f", "--force", is_flag=True, help="Remove files without asking.")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be removed without deleting files.",
)
@click.pass_obj
@cli_error_boundary
def remove_cmd(
    ctx: PromptKitContext,
    identifier: str,
    editor: str | None,
    editor_option: str | None,
    force: bool,
    dry_run: bool,
) -> None:
    """Remove a prompt's files from the current directory.

    The files to delete are recomputed from the prompt's current manifest, so
    the repository must still be registered.

    Examples:
        prompt-kit remove team/code-review cursor
        prompt-kit remove code-review --editor vscode --force
    """
    parsed = parse_prompt_identifier(identifier)
    if parsed.is_url:
        raise PromptKitError(
            "Cannot remove prompts by URL. Register the repository and use REPO/PROMPT instead."
        )

    resolved = resolve_registered_prompt(ctx.registry, parsed, ctx.source_for)
    chosen = choose_editor(resolved.manifest, editor, editor_option, ctx.config.default_editor)
    targets = compute_targets(resolved.prompt_dir, resolved.editor_rules(chosen), ctx.cwd)
    name = resolved.manifest.name

    installed = compute_removal_set(targets)
    installed_paths = {target.target_path for target in installed}
    for target in targets:
        if target.target_path not in installed_paths:
            user_output(
                click.style("  not installed: ", dim=True)
                + display_path(target.target_path, ctx.cwd)
            )

    if not installed:
        user_output(
            click.style("⚠ ", fg="yellow") + f"No installed files found for {name} ({chosen})"
        )
        return

    user_output(f"Removing {click.style(name, bold=True)} for {chosen}")
    for target in installed:
        user_output(f"  {display_path(target.target_path, ctx.cwd)}")

    if dry_run:
        user_output(
            click.style("[DRY RUN] ", fg="yellow") + f"Would delete {len(installed)} file(s)"
        )
        return

    if not force:
        if not click.confirm(f"Delete {len(installed)} file(s)?", default=False, err=True):
            user_output("Removal cancelled.")
            return

    result = remove_targets(installed, ctx.cwd)
    print_panel(format_batch_summary("Removed", name, chosen, result, ctx.cwd))
    if not result.ok:
        raise SystemExit(1)
