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
    install_targets,
)
from prompt_kit.operations.resolve import (
    ResolvedPrompt,
    resolve_registered_prompt,
    resolve_url_prompt,
)


def _escape_newlines(text: str) -> str:
    return text.replace("\n", "\\n")


def _install_resolved(
    ctx: PromptKitContext,
    resolved: ResolvedPrompt,
    editor_arg: str | None,
    editor_option: str | None,
    force: bool,
    dry_run: bool,
) -> None:
    editor = choose_editor(
        resolved.manifest, editor_arg, editor_option, ctx.config.default_editor
    )
    rules = resolved.editor_rules(editor)
    targets = compute_targets(resolved.prompt_dir, rules, ctx.cwd)
    name = resolved.manifest.name

    if not targets:
        user_output(click.style("⚠ ", fg="yellow") + f"No files to install for {name} ({editor})")
        return

    existing = {target.target_path for target in compute_removal_set(targets)}

    user_output(
        f"Installing {click.style(name, bold=True)} for {editor} "
        f"from {click.style(resolved.record.name, fg='cyan')}"
    )
    for target in targets:
        source = display_path(target.source_path, resolved.prompt_dir)
        line = f"  {source} → {display_path(target.target_path, ctx.cwd)}"
        if target.target_path in existing:
            line += click.style(" (overwrite)", fg="yellow")
        user_output(line)
        if target.prefix:
            user_output(click.style(f"    + prefix: {_escape_newlines(target.prefix)}", dim=True))
        if target.suffix:
            user_output(click.style(f"    + suffix: {_escape_newlines(target.suffix)}", dim=True))

    if dry_run:
        user_output(
            click.style("[DRY RUN] ", fg="yellow") + f"Would write {len(targets)} file(s)"
        )
        return

    if existing and not force:
        if not click.confirm(
            f"Overwrite {len(existing)} existing file(s)?", default=False, err=True
        ):
            user_output("Installation cancelled.")
            return

    result = install_targets(targets)
    print_panel(format_batch_summary("Installed", name, editor, result, ctx.cwd))
    if not result.ok:
        raise SystemExit(1)


@click.command("install")
@click.argument("identifier")
@click.argument("editor", required=False)
@click.option("-e", "--editor", "editor_option", help="Editor to install for.")
@click.option("-f", "--force", is_flag=True, help="Overwrite existing files without asking.")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be installed without writing files.",
)
@click.option(
    "-v",
    "--version",
    "version",
    help="Branch, tag or commit to install from (URL identifiers only).",
)
@click.pass_obj
@cli_error_boundary
def install_cmd(
    ctx: PromptKitContext,
    identifier: str,
    editor: str | None,
    editor_option: str | None,
    force: bool,
    dry_run: bool,
    version: str | None,
) -> None:
    """Install a prompt into the current directory.

    IDENTIFIER is a prompt in the default repository, REPO/PROMPT, or a
    repository URL such as https://github.com/user/repo/tree/main/prompt.

    Examples:
        prompt-kit install team/code-review cursor
        prompt-kit install code-review --editor vscode --dry-run
        prompt-kit install https://github.com/acme/prompts/tree/v1.0/review claude-code
    """
    parsed = parse_prompt_identifier(identifier)

    if parsed.is_url:
        checkout, resolved = resolve_url_prompt(ctx.url_source(), parsed, version)
        with checkout:
            _install_resolved(ctx, resolved, editor, editor_option, force, dry_run)
        return

    if version is not None:
        raise PromptKitError(
            "--version only applies to URL identifiers. "
            "Use 'prompt-kit version <repository> --checkout <ref>' for registered repositories."
        )

    resolved = resolve_registered_prompt(ctx.registry, parsed, ctx.source_for)
    _install_resolved(ctx, resolved, editor, editor_option, force, dry_run)
