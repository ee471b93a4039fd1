import click

from prompt_kit.cli.output import user_output
from prompt_kit.editors import validate_editor
from prompt_kit.errors import PromptKitError
from prompt_kit.models import PromptManifest


def choose_editor(
    manifest: PromptManifest,
    editor_arg: str | None,
    editor_option: str | None,
    configured_default: str | None,
) -> str:
    """Pick the editor to install for.

    Precedence: positional argument, --editor, the configured default (when
    the prompt supports it), then the prompt's only editor or an interactive
    choice among its editors.

    Raises:
        UnsupportedEditorError: If the chosen editor is unknown
        PromptKitError: If the prompt declares no editors at all
    """
    if editor_arg and editor_option and editor_arg != editor_option:
        raise click.UsageError(
            f"Editor given twice with different values: '{editor_arg}' and '{editor_option}'"
        )

    explicit = editor_arg or editor_option
    if explicit:
        return validate_editor(explicit)

    available = manifest.editor_names()
    if configured_default and configured_default in available:
        return validate_editor(configured_default)

    if not available:
        raise PromptKitError(f"Prompt '{manifest.name}' does not declare any editors")

    if len(available) == 1:
        user_output(f"Using editor: {available[0]}")
        return validate_editor(available[0])

    choice = click.prompt(
        "Select editor",
        type=click.Choice(available),
        err=True,
    )
    return validate_editor(choice)
