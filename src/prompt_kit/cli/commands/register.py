import logging

import click

from prompt_kit.cli.error_boundary import cli_error_boundary
from prompt_kit.cli.output import user_output
from prompt_kit.context import PromptKitContext
from prompt_kit.errors import DuplicateRepositoryError
from prompt_kit.io.manifest import discover_prompts, load_repository_metadata
from prompt_kit.models import RepositoryKind, RepositoryRecord
from prompt_kit.sources import detect_repository_kind, repository_name_from_source

logger = logging.getLogger(__name__)


def _register_versioned(
    ctx: PromptKitContext, name: str, source: str, version: str | None
) -> RepositoryRecord:
    versioned = ctx.versioned_source()
    user_output(f"Cloning {source}...")
    repo_path = versioned.materialize(name, source, version)

    try:
        record = ctx.registry.register(
            name,
            source,
            RepositoryKind.VERSIONED,
            local_path=repo_path,
            version=version,
            metadata=load_repository_metadata(repo_path),
        )
    except DuplicateRepositoryError:
        # Another invocation registered the name while we were cloning
        logger.debug("Registration of %s failed, removing %s", name, repo_path)
        versioned.remove_checkout(
            RepositoryRecord(
                name=name, origin=source, kind=RepositoryKind.VERSIONED, local_path=repo_path
            )
        )
        raise

    return ctx.registry.record_version(name, versioned.current_version(record), version)


def _register_local(ctx: PromptKitContext, name: str, source: str) -> RepositoryRecord:
    repo_path = ctx.local_source().materialize(name, source)
    return ctx.registry.register(
        name,
        str(repo_path),
        RepositoryKind.LOCAL,
        local_path=repo_path,
        metadata=load_repository_metadata(repo_path),
    )


@click.command("register")
@click.argument("source")
@click.option("-n", "--name", "name", help="Registry name (defaults to the repository name).")
@click.option("--default", "make_default", is_flag=True, help="Make this the default repository.")
@click.option(
    "-v",
    "--version",
    "version",
    help="Branch, tag or commit to check out (git repositories only).",
)
@click.pass_obj
@cli_error_boundary
def register_cmd(
    ctx: PromptKitContext,
    source: str,
    name: str | None,
    make_default: bool,
    version: str | None,
) -> None:
    """Register a prompt repository from a git URL or a local directory.

    Examples:
        prompt-kit register https://github.com/acme/team-prompts.git
        prompt-kit register git@github.com:acme/team-prompts.git --version v1.2.0
        prompt-kit register ~/work/my-prompts --name mine --default
    """
    kind = detect_repository_kind(source)
    repository_name = name or repository_name_from_source(source)

    if ctx.registry.get(repository_name) is not None:
        raise DuplicateRepositoryError(repository_name)

    if kind is RepositoryKind.VERSIONED:
        record = _register_versioned(ctx, repository_name, source, version)
    else:
        if version is not None:
            user_output(click.style("⚠ ", fg="yellow") + "--version ignored for local repositories")
        record = _register_local(ctx, repository_name, source)

    if make_default:
        ctx.registry.set_default(repository_name)

    user_output(
        click.style("✓ ", fg="green")
        + f"Registered {click.style(repository_name, bold=True)} ({kind.value})"
    )
    if record.current_version:
        user_output(f"  Version: {record.current_version}")
    if make_default:
        user_output("  Set as default repository")

    working_path = record.working_path()
    prompts = discover_prompts(working_path) if working_path is not None else []
    user_output(f"  Found {len(prompts)} prompt(s): {', '.join(prompts)}")
