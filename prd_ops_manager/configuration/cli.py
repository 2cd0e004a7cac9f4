"""Defines the Command Line Interface (CLI) using Typer."""

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from prd_ops_manager.branching.driver import ensure_branch
from prd_ops_manager.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from prd_ops_manager.configuration.reconcile import reconcile_ensure_branch_configuration, reconcile_prepare_prd_configuration
from prd_ops_manager.git.client import GitCLIClient
from prd_ops_manager.prd.workflow import run_prepare_prd_workflow
from prd_ops_manager.utils.helpers import slugify_feature
from prd_ops_manager.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Prepare repositories for PRD-driven coding sessions.")


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Prepare repositories for PRD-driven coding sessions."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    configure_logging(debug)


def read_prompt_from_stdin() -> str:
    """Ask for the prompt interactively, or read all of stdin when it is not a terminal."""
    if sys.stdin.isatty():
        return typer.prompt("Enter feature prompt", default="", show_default=False)
    return sys.stdin.read()


@typer_app.command(name="slugify")
def slugify_cli(
    text: Annotated[list[str], Argument(help="Text to turn into a branch-safe slug.")],
) -> None:
    """Print the slug that would be derived from the given text."""
    typer.echo(slugify_feature(" ".join(text)))


# --- Branch commands ---
branch_app = typer.Typer(help="Branch-related commands")


@branch_app.command(name="ensure")
def ensure_branch_cli(
    ctx: typer.Context,
    prompt_words: Annotated[list[str] | None, Argument(help="Feature prompt; its first line is used for the branch slug.")] = None,
    prompt: Annotated[str | None, Option("--prompt", envvar="PRD_PROMPT", help="Feature prompt.")] = None,
    feature_name: Annotated[str | None, Option("--feature", "--name", envvar="FEATURE_NAME", help="Short feature name for the branch slug.")] = None,
    branch_name: Annotated[str | None, Option("--branch", envvar="BRANCH_NAME", help="Branch name to use or create.")] = None,
    branch_prefix: Annotated[str | None, Option("--branch-prefix", help="Namespace of generated branch names.")] = None,
    dry_run: Annotated[bool, Option("--dry-run", help="Report the decision without creating a branch.")] = False,
) -> None:
    """Switch to a branch suited to the feature, creating one when needed."""
    try:
        config = reconcile_ensure_branch_configuration(
            cli_debug=ctx.obj["debug"],
            cli_prompt=prompt,
            cli_prompt_words=prompt_words,
            cli_feature_name=feature_name,
            cli_branch_name=branch_name,
            cli_branch_prefix=branch_prefix,
            cli_dry_run=dry_run,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationElementError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    result = ensure_branch(
        GitCLIClient(),
        prompt=config.prompt,
        feature_name=config.feature_name,
        branch_name=config.branch_name,
        branch_prefix=config.branch_prefix,
        protected_branches=config.protected_branches,
        dry_run=config.dry_run,
    )
    typer.echo(result.describe(), err=result.skipped or result.error is not None)


typer_app.add_typer(branch_app, name="branch")


@typer_app.command(name="prepare")
def prepare_cli(
    ctx: typer.Context,
    prompt_words: Annotated[list[str] | None, Argument(help="Feature prompt. Read from stdin when omitted.")] = None,
    prompt: Annotated[str | None, Option("--prompt", envvar="PRD_PROMPT", help="Feature prompt.")] = None,
    feature_name: Annotated[str | None, Option("--feature", "--name", envvar="FEATURE_NAME", help="Short feature name for the branch slug.")] = None,
    branch_name: Annotated[str | None, Option("--branch", envvar="BRANCH_NAME", help="Branch name to use or create.")] = None,
    branch_prefix: Annotated[str | None, Option("--branch-prefix", help="Namespace of generated branch names.")] = None,
    create_branch: Annotated[bool, Option("--branch-checks/--no-branch", help="Check and create the feature branch.")] = True,
    prd_file: Annotated[Path | None, Option("--prd", help="PRD output path (default: PRD.md).")] = None,
    progress_file: Annotated[Path | None, Option("--progress", help="Progress file path (default: progress.txt).")] = None,
    prompt_file: Annotated[
        str | None, Option("--prompt-file", help="Where to write the PRD generation prompt; '-' for stdout (default: next to the PRD).")
    ] = None,
) -> None:
    """Prepare the repository and render the prompt a coding assistant uses to write the PRD."""
    try:
        config = reconcile_prepare_prd_configuration(
            cli_debug=ctx.obj["debug"],
            cli_prompt=prompt,
            cli_prompt_words=prompt_words,
            cli_feature_name=feature_name,
            cli_branch_name=branch_name,
            cli_branch_prefix=branch_prefix,
            cli_create_branch=create_branch,
            cli_prd_file=prd_file,
            cli_progress_file=progress_file,
            cli_prompt_file=prompt_file,
            read_prompt_fallback=read_prompt_from_stdin,
        )
    except RequiredConfigurationElementError as exc:
        typer.echo("Feature prompt is required.", err=True)
        raise typer.Exit(1) from exc
    except InvalidConfigurationElementError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    result = run_prepare_prd_workflow(config, GitCLIClient())

    # Keep stdout clean when the prompt itself goes there.
    status_to_stderr = result.prompt_file is None
    if result.branch_result is not None:
        typer.echo(result.branch_result.describe(), err=status_to_stderr or result.branch_result.skipped)
    if result.prompt_file is None:
        typer.echo(result.prompt_text, nl=False)
    else:
        typer.echo(f"Wrote PRD generation prompt to {result.prompt_file}")
    typer.echo(f"Created blank {result.progress_file}", err=status_to_stderr)
    typer.echo(f"Write the generated PRD to {result.prd_file}", err=status_to_stderr)


if __name__ == "__main__":
    typer_app()
