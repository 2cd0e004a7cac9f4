"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path
from typing import Callable

import structlog

from prd_ops_manager.configuration.env import Settings, settings
from prd_ops_manager.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from prd_ops_manager.configuration.models import EnsureBranchConfig, PreparePRDConfig
from prd_ops_manager.utils.constants import PROMPT_FILE_SUFFIX

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

STDOUT_MARKER = "-"


def reconcile_prompt(
    cli_prompt: str | None,
    cli_prompt_words: list[str] | None,
    read_fallback: Callable[[], str] | None = None,
) -> str:
    """Assemble the feature prompt from the --prompt option and positional words.

    Positional words are appended to the --prompt value, separated by single
    spaces. Words passed after "--" arrive as positional words too and are
    appended the same way. If both are empty, read_fallback (typically reading
    stdin) is consulted.

    Returns:
        str: The prompt, or an empty string if none could be found.
    """
    parts = [part for part in [cli_prompt, *(cli_prompt_words or [])] if part]
    prompt = " ".join(parts)
    if not prompt.strip() and read_fallback is not None:
        logger.debug("No prompt given on the command line, reading fallback source")
        prompt = read_fallback()
    return prompt.strip()


def reconcile_protected_branches(value: str) -> tuple[str, ...]:
    """Parse a comma-separated list of protected branch names."""
    return tuple(name.strip() for name in value.split(",") if name.strip())


def reconcile_branch_prefix(cli_branch_prefix: str | None, env_settings: Settings) -> str:
    """Pick the branch prefix, stripping surrounding slashes."""
    branch_prefix = (cli_branch_prefix if cli_branch_prefix is not None else env_settings.BRANCH_PREFIX).strip().strip("/")
    if not branch_prefix or any(char.isspace() for char in branch_prefix):
        raise InvalidConfigurationElementError("branch prefix", branch_prefix, "must be a non-empty name without whitespace")
    return branch_prefix


def reconcile_prompt_file(cli_prompt_file: str | None, prd_file: Path) -> Path | None:
    """Resolve where the rendered PRD generation prompt is written.

    "-" means stdout (returned as None). Without an explicit value the prompt
    is written next to the PRD file, e.g. PRD.md -> PRD.prompt.md.
    """
    if cli_prompt_file == STDOUT_MARKER:
        return None
    if cli_prompt_file:
        return Path(cli_prompt_file)
    return prd_file.with_name(f"{prd_file.stem}{PROMPT_FILE_SUFFIX}")


def reconcile_ensure_branch_configuration(
    cli_debug: bool = False,
    cli_prompt: str | None = None,
    cli_prompt_words: list[str] | None = None,
    cli_feature_name: str | None = None,
    cli_branch_name: str | None = None,
    cli_branch_prefix: str | None = None,
    cli_dry_run: bool = False,
    env_settings: Settings | None = None,
) -> EnsureBranchConfig:
    """Reconciles the branch ensure configuration.

    Raises:
        RequiredConfigurationElementError: If neither a prompt, a feature name nor a branch name is given.
        InvalidConfigurationElementError: If the branch prefix is unusable.
    """
    env_settings = env_settings or settings
    prompt = reconcile_prompt(cli_prompt, cli_prompt_words)
    if not (prompt or cli_feature_name or cli_branch_name):
        raise RequiredConfigurationElementError("feature prompt, feature name or branch name", "--prompt/--feature/--branch")

    return EnsureBranchConfig(
        debug=cli_debug or env_settings.DEBUG,
        branch_prefix=reconcile_branch_prefix(cli_branch_prefix, env_settings),
        protected_branches=reconcile_protected_branches(env_settings.PROTECTED_BRANCHES),
        prompt=prompt or None,
        feature_name=cli_feature_name or None,
        branch_name=cli_branch_name or None,
        dry_run=cli_dry_run,
    )


def reconcile_prepare_prd_configuration(
    cli_debug: bool = False,
    cli_prompt: str | None = None,
    cli_prompt_words: list[str] | None = None,
    cli_feature_name: str | None = None,
    cli_branch_name: str | None = None,
    cli_branch_prefix: str | None = None,
    cli_create_branch: bool = True,
    cli_prd_file: Path | None = None,
    cli_progress_file: Path | None = None,
    cli_prompt_file: str | None = None,
    read_prompt_fallback: Callable[[], str] | None = None,
    env_settings: Settings | None = None,
) -> PreparePRDConfig:
    """Reconciles the prepare configuration.

    CLI values take precedence over environment variables, which take
    precedence over the defaults in Settings.

    Raises:
        RequiredConfigurationElementError: If no feature prompt is given.
        InvalidConfigurationElementError: If the PRD and progress files are the same path,
            or the branch prefix is unusable.
    """
    env_settings = env_settings or settings
    prompt = reconcile_prompt(cli_prompt, cli_prompt_words, read_prompt_fallback)
    if not prompt:
        raise RequiredConfigurationElementError("feature prompt", "--prompt", "PRD_PROMPT")

    prd_file = cli_prd_file or Path(env_settings.PRD_FILE)
    progress_file = cli_progress_file or Path(env_settings.PROGRESS_FILE)
    if prd_file == progress_file:
        raise InvalidConfigurationElementError("progress file", str(progress_file), "must differ from the PRD file")

    prompt_file = reconcile_prompt_file(cli_prompt_file, prd_file)
    if prompt_file is not None and prompt_file in (prd_file, progress_file):
        raise InvalidConfigurationElementError("prompt file", str(prompt_file), "must differ from the PRD and progress files")

    return PreparePRDConfig(
        debug=cli_debug or env_settings.DEBUG,
        branch_prefix=reconcile_branch_prefix(cli_branch_prefix, env_settings),
        protected_branches=reconcile_protected_branches(env_settings.PROTECTED_BRANCHES),
        prompt=prompt,
        feature_name=cli_feature_name or None,
        branch_name=cli_branch_name or None,
        create_branch=cli_create_branch,
        prd_file=prd_file,
        progress_file=progress_file,
        prompt_file=prompt_file,
    )
