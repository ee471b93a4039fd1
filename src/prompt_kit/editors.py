"""Editors prompt-kit knows how to install for."""

from prompt_kit.errors import UnsupportedEditorError

SUPPORTED_EDITORS: list[str] = ["vscode", "cursor", "windsurf", "claude-code"]


def validate_editor(editor: str) -> str:
    """Return ``editor`` unchanged if it is supported.

    Raises:
        UnsupportedEditorError: If the editor is unknown
    """
    if editor not in SUPPORTED_EDITORS:
        raise UnsupportedEditorError(editor, SUPPORTED_EDITORS)
    return editor
