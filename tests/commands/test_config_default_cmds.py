"""Tests for the default and config commands and top-level options."""

from pathlib import Path

from click.testing import CliRunner

from prompt_kit.cli.cli import cli
from prompt_kit.version import __version__
from tests.test_utils.context_builders import build_cli_test_context, with_local_review_repo


def test_default_without_one_set(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["default"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "No default repository set." in result.output


def test_default_set_and_show(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)
    with_local_review_repo(ctx, tmp_path / "prompts")
    runner = CliRunner()

    set_result = runner.invoke(cli, ["default", "team"], obj=ctx)
    show_result = runner.invoke(cli, ["default"], obj=ctx)

    assert set_result.exit_code == 0, set_result.output
    assert "Default repository set to team" in set_result.output
    assert show_result.output.strip() == "team"


def test_default_unknown_repository(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["default", "ghost"], obj=ctx)

    assert result.exit_code == 1
    assert "Repository 'ghost' is not registered" in result.output
    assert ctx.registry.get_default() is None


def test_config_set_default_editor(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["config", "set", "default_editor", "cursor"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Set default_editor" in result.output
    assert ctx.config_ops.load().default_editor == "cursor"


def test_config_set_rejects_unknown_editor(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["config", "set", "default_editor", "notepad"], obj=ctx)

    assert result.exit_code == 1
    assert "Unsupported editor: notepad" in result.output
    assert ctx.config_ops.load().default_editor is None


def test_config_set_empty_clears_default_editor(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path, default_editor="vscode")

    result = CliRunner().invoke(cli, ["config", "set", "default_editor", ""], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ctx.config_ops.load().default_editor is None


def test_config_get_and_list(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path, default_editor="windsurf")
    runner = CliRunner()

    get_result = runner.invoke(cli, ["config", "get", "repositories_dir"], obj=ctx)
    list_result = runner.invoke(cli, ["config", "list"], obj=ctx)

    assert get_result.output.strip() == str(tmp_path / "home" / "repositories")
    assert "default_editor=windsurf" in list_result.output
    assert f"repositories_dir={tmp_path / 'home' / 'repositories'}" in list_result.output


def test_config_get_unknown_key(tmp_path: Path) -> None:
    ctx = build_cli_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["config", "get", "colour"], obj=ctx)

    assert result.exit_code == 2


def test_version_option() -> None:
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"prompt-kit, version {__version__}" in result.output


def test_help_lists_commands() -> None:
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    for command in ("install", "remove", "list", "register", "unregister", "update", "repos"):
        assert command in result.output
