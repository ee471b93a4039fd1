"""Output utilities for CLI commands.

user_output is for messages meant for a person reading the terminal.
format_batch_summary builds the closing panel for install and remove.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from prompt_kit.models import BatchResult


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, nl=nl, err=True)


def display_path(path: Path, root: Path) -> str:
    """Path relative to ``root`` when it lies inside it, else absolute."""
    if path.is_relative_to(root):
        return str(path.relative_to(root))
    return str(path)


def format_batch_summary(
    action: str,
    prompt_name: str,
    editor: str,
    result: BatchResult,
    root: Path,
) -> Panel:
    """Format the final summary box for an install or remove batch.

    Args:
        action: Past-tense verb shown in the counts line ("Installed", "Removed")
        prompt_name: Name from the prompt's manifest
        editor: Editor the batch was computed for
        result: Per-target outcome of the batch
        root: Install root, used to shorten displayed paths

    Example:
        >>> panel = format_batch_summary("Installed", "review", "cursor", result, cwd)
        >>> Console(stderr=True).print(panel)
    """
    lines: list[Text] = []

    if result.ok:
        lines.append(Text("✅ Status: Success", style="green"))
    else:
        lines.append(Text("❌ Status: Completed with errors", style="red"))

    lines.append(Text(f"📦 Prompt: {prompt_name} ({editor})"))
    lines.append(Text(f"{action} {result.success_count} file(s)"))

    if result.failed:
        lines.append(Text(f"Failed {result.failure_count} file(s):", style="red bold"))
        for path, reason in result.failed:
            lines.append(Text(f"  {display_path(path, root)}: {reason}", style="red"))

    title = f"{action} {prompt_name}" if result.ok else f"{action} {prompt_name} (partial)"
    return Panel(
        Text("\n").join(lines),
        title=title,
        border_style="green" if result.ok else "red",
        padding=(1, 2),
    )


def print_panel(panel: Panel) -> None:
    Console(stderr=True).print(panel)
